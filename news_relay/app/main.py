from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from news_relay.app.core import (
    APP_VERSION,
    CorrelationIDMiddleware,
    Settings,
    configure_logging,
    get_logger,
    get_settings,
)
from news_relay.app.routers import health_router, news_router
from news_relay.app.services.news_client import NewsApiClient

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the relay application around one immutable Settings instance."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(log_level=settings.log_level, json_format=settings.log_json)
        logger.info(
            "news_relay_started",
            port=settings.port,
            news_api_key_configured=settings.has_news_api_key,
        )
        yield
        logger.info("news_relay_stopped")

    app = FastAPI(title="News Relay", version=APP_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.news_client = NewsApiClient(settings, transport=transport)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIDMiddleware)

    app.include_router(news_router)
    app.include_router(health_router)
    return app


app = create_app()


def run() -> None:
    """Serve the application on the configured host and port."""
    settings = app.state.settings
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
