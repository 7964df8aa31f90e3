"""
Health endpoint for monitoring.

Reports whether the relay is configured to reach the upstream news API. The check
is local only; it never issues an upstream request.
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from news_relay.app.core.config import APP_VERSION, Settings
from news_relay.app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def check_upstream_config(settings: Settings) -> Dict[str, Any]:
    """
    Check that the upstream API key is configured.

    Returns:
        Dict with status, message and the configured endpoints
    """
    component = {
        "top_headlines_url": settings.top_headlines_url,
        "everything_url": settings.everything_url,
    }
    if settings.has_news_api_key:
        component.update(status="healthy", message="NewsAPI key configured")
    else:
        component.update(
            status="warning",
            message="NewsAPI key not configured; upstream calls will be rejected",
        )
    return component


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(settings: Settings = Depends(get_app_settings)) -> JSONResponse:
    """Return overall status, version info and per-component checks."""
    start_time = datetime.now(timezone.utc)

    upstream_check = check_upstream_config(settings)
    overall_status = "healthy" if upstream_check["status"] == "healthy" else "degraded"

    end_time = datetime.now(timezone.utc)
    response_time_ms = (end_time - start_time).total_seconds() * 1000

    response_data = {
        "status": overall_status,
        "timestamp": end_time.isoformat(),
        "response_time_ms": round(response_time_ms, 2),
        "version": {
            "app": APP_VERSION,
            "python": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
        },
        "components": {
            "upstream": upstream_check,
        }
    }

    logger.info(
        "health_check_completed",
        overall_status=overall_status,
        response_time_ms=response_time_ms,
    )

    return JSONResponse(status_code=status.HTTP_200_OK, content=response_data)
