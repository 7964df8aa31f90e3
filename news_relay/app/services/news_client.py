"""Async client for the upstream NewsAPI endpoints."""

from __future__ import annotations

import re
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from news_relay.app.core.config import Settings
from news_relay.app.core.logging import get_logger

DEFAULT_ERROR_MESSAGE = "Error fetching news"
USER_AGENT = "NewsRelay/0.1 (+https://github.com/news-relay)"
_QUERY_STRING = re.compile(r"\?[^\s'\"]*")

logger = get_logger(__name__)


class UpstreamError(RuntimeError):
    """Raised when the upstream news API cannot be reached or answers with an error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True, slots=True)
class NewsQuery:
    """Query parameters for one upstream call. The API key is added by the client."""

    category: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = None
    q: Optional[str] = None

    def to_params(self, api_key: Optional[str]) -> Dict[str, Any]:
        params = {
            "apiKey": api_key,
            "category": self.category,
            "q": self.q,
            "page": self.page,
            "pageSize": self.page_size,
        }
        return {key: value for key, value in params.items() if value is not None}


def extract_error_message(exc: BaseException) -> str:
    """
    Pick the most useful human-readable message for a failed upstream call.

    Order: the ``message`` field of the upstream error body, then the transport
    message, then DEFAULT_ERROR_MESSAGE. The transport message never carries the
    request URL, since its query string holds the API key.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"Request failed with status code {exc.response.status_code}"

    text = _QUERY_STRING.sub("", str(exc)).strip()
    if text:
        return text
    return DEFAULT_ERROR_MESSAGE


class NewsApiClient:
    """Issues GET requests against the configured top-headlines and everything endpoints."""

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.transport = transport

    @asynccontextmanager
    async def session(self, client: httpx.AsyncClient | None = None) -> AsyncIterator[httpx.AsyncClient]:
        """Yield ``client`` when given, otherwise an owned client closed on exit."""
        if client is not None:
            yield client
            return

        async with httpx.AsyncClient(
            timeout=self.settings.upstream_timeout_seconds,
            headers={"User-Agent": USER_AGENT},
            transport=self.transport,
        ) as owned_client:
            yield owned_client

    async def fetch(
        self,
        url: str,
        query: NewsQuery,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> Dict[str, Any]:
        """GET ``url`` with ``query`` and return the decoded JSON body untouched."""
        params = query.to_params(self.settings.news_api_key)
        try:
            async with self.session(client) as http:
                response = await http.get(url, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                extract_error_message(exc),
                status_code=exc.response.status_code,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamError(extract_error_message(exc)) from exc

        if not isinstance(data, dict):
            raise UpstreamError("Malformed response body from news API")

        logger.debug(
            "upstream_fetch_succeeded",
            url=url,
            category=query.category,
            q=query.q,
            page=query.page,
            article_count=len(data.get("articles") or []),
        )
        return data

    async def top_headlines(
        self,
        query: NewsQuery,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> Dict[str, Any]:
        return await self.fetch(self.settings.top_headlines_url, query, client=client)

    async def everything(
        self,
        query: NewsQuery,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> Dict[str, Any]:
        return await self.fetch(self.settings.everything_url, query, client=client)


__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "NewsApiClient",
    "NewsQuery",
    "UpstreamError",
    "extract_error_message",
]
