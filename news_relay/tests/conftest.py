from __future__ import annotations

from typing import Callable, List

import httpx
import pytest

from news_relay.app.core.config import Settings

TEST_API_KEY = "test-key"
TOP_HEADLINES_URL = "https://news.test/v2/top-headlines"
EVERYTHING_URL = "https://news.test/v2/everything"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        news_api_key=TEST_API_KEY,
        top_headlines_url=TOP_HEADLINES_URL,
        everything_url=EVERYTHING_URL,
    )


@pytest.fixture
def recorded_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def recording_transport(recorded_requests: List[httpx.Request]) -> Callable[..., httpx.MockTransport]:
    """Wrap a handler in a MockTransport that records every request it sees."""

    def build(handler) -> httpx.MockTransport:
        async def recording_handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            result = handler(request)
            if hasattr(result, "__await__"):
                result = await result
            return result

        return httpx.MockTransport(recording_handler)

    return build
