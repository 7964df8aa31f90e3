"""
News relay endpoints.

Each route shapes a query for the upstream news API, injects the server-side API
key through NewsApiClient and passes the upstream JSON through. Upstream failures
become a 500 with a short per-route message; the detail is only logged, except on
/fetch_Random which returns it as ``{"error": ...}``.

POST bodies are only read when sent as JSON objects; anything else is treated as
an empty object, so defaults apply.
"""

from __future__ import annotations

from typing import Any, Dict, Type, TypeVar

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, ValidationError

from news_relay.app.core.logging import get_logger, log_exception
from news_relay.app.models import CategoryRequest, PageRequest
from news_relay.app.services.news_client import NewsApiClient, NewsQuery, UpstreamError
from news_relay.app.services.random_mix import fetch_random_mix

logger = get_logger(__name__)

router = APIRouter(tags=["news"])

GENERAL_CATEGORY = "general"
CATEGORY_PAGE_SIZE = 10
HOME_PAGE_SIZE = 10
TRENDING_PAGE_SIZE = 20
RANDOM_MIX_ERROR = "Error fetching mixed random news"

RequestModel = TypeVar("RequestModel", bound=BaseModel)


def get_news_client(request: Request) -> NewsApiClient:
    return request.app.state.news_client


async def _json_body(request: Request) -> Dict[str, Any]:
    """Return the JSON object body; a missing, non-JSON or non-object body reads as {}."""
    if not request.headers.get("content-type", "").startswith("application/json"):
        return {}
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _validate(model: Type[RequestModel], body: Dict[str, Any]) -> RequestModel:
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


async def page_request(request: Request) -> PageRequest:
    return _validate(PageRequest, await _json_body(request))


async def category_request(request: Request) -> CategoryRequest:
    return _validate(CategoryRequest, await _json_body(request))


async def _relay_top_headlines(
    client: NewsApiClient,
    query: NewsQuery,
    *,
    operation: str,
    error_message: str,
) -> Response:
    try:
        data = await client.top_headlines(query)
    except UpstreamError as exc:
        logger.error(
            "upstream_fetch_failed",
            operation=operation,
            error=exc.message,
            upstream_status=exc.status_code,
        )
        return PlainTextResponse(error_message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    except Exception as exc:
        log_exception(logger, exc, {"operation": operation})
        return PlainTextResponse(error_message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(data)


@router.post("/fetch_latest", response_model=None)
async def fetch_latest(
    payload: PageRequest = Depends(page_request),
    client: NewsApiClient = Depends(get_news_client),
) -> Response:
    page = payload.pageno
    logger.info("latest_news_requested", page=page)
    return await _relay_top_headlines(
        client,
        NewsQuery(category=GENERAL_CATEGORY, page=page),
        operation="fetch_latest",
        error_message="Error fetching latest news",
    )


@router.post("/fetchnewsbycategory", response_model=None)
async def fetch_news_by_category(
    payload: CategoryRequest = Depends(category_request),
    client: NewsApiClient = Depends(get_news_client),
) -> Response:
    if not payload.category:
        return PlainTextResponse("Category is required", status_code=status.HTTP_400_BAD_REQUEST)

    logger.info("category_news_requested", category=payload.category, page=payload.pageno)
    return await _relay_top_headlines(
        client,
        NewsQuery(category=payload.category, page=payload.pageno, page_size=CATEGORY_PAGE_SIZE),
        operation="fetch_news_by_category",
        error_message="Error fetching news by category",
    )


@router.get("/HomeLatest", response_model=None)
async def home_latest(client: NewsApiClient = Depends(get_news_client)) -> Response:
    logger.info("homepage_news_requested")
    return await _relay_top_headlines(
        client,
        NewsQuery(category=GENERAL_CATEGORY, page_size=HOME_PAGE_SIZE),
        operation="home_latest",
        error_message="Error fetching homepage news",
    )


@router.get("/fetch_trending", response_model=None)
async def fetch_trending(client: NewsApiClient = Depends(get_news_client)) -> Response:
    logger.info("trending_news_requested")
    return await _relay_top_headlines(
        client,
        NewsQuery(category=GENERAL_CATEGORY, page_size=TRENDING_PAGE_SIZE),
        operation="fetch_trending",
        error_message="Error fetching trending news",
    )


@router.post("/fetch_Random", response_model=None)
async def fetch_random(
    payload: PageRequest = Depends(page_request),
    client: NewsApiClient = Depends(get_news_client),
) -> Response:
    page = payload.pageno
    logger.info("random_mix_requested", page=page)
    try:
        mix = await fetch_random_mix(client, page)
    except UpstreamError as exc:
        logger.error(
            "upstream_fetch_failed",
            operation="fetch_random",
            error=exc.message,
            upstream_status=exc.status_code,
        )
        return JSONResponse({"error": exc.message}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    except Exception as exc:
        log_exception(logger, exc, {"operation": "fetch_random"})
        return JSONResponse({"error": RANDOM_MIX_ERROR}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(mix)


__all__ = ["router", "get_news_client"]
