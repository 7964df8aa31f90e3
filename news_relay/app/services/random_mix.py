"""Mixed-topic random news: one article per category, fetched concurrently and shuffled."""

from __future__ import annotations

import asyncio
import random
from typing import Any, Dict, List, Optional, Sequence, TypeVar

from news_relay.app.core.logging import get_logger
from news_relay.app.services.news_client import NewsApiClient, NewsQuery

T = TypeVar("T")

CATEGORIES: tuple[str, ...] = (
    "business",
    "entertainment",
    "general",
    "health",
    "science",
    "sports",
    "technology",
)
ARTICLES_PER_CATEGORY = 1
MAX_ARTICLES = 20

logger = get_logger(__name__)


def shuffled(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a uniformly shuffled copy of ``items``; the input is left untouched."""
    result = list(items)
    (rng or random).shuffle(result)
    return result


async def fetch_random_mix(
    client: NewsApiClient,
    page: int = 1,
    *,
    rng: Optional[random.Random] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Search the everything endpoint once per category and mix the results.

    All category searches run concurrently over one HTTP session. If any of them
    fails, the first failure (in request order) is raised and nothing is returned.
    The combined articles are shuffled and capped at MAX_ARTICLES.
    """
    categories = shuffled(CATEGORIES, rng)

    async with client.session() as http:
        results = await asyncio.gather(
            *(
                client.everything(
                    NewsQuery(q=category, page=page, page_size=ARTICLES_PER_CATEGORY),
                    client=http,
                )
                for category in categories
            ),
            return_exceptions=True,
        )

    for result in results:
        if isinstance(result, BaseException):
            raise result

    mixed: List[Dict[str, Any]] = []
    for result in results:
        batch = result.get("articles") or []
        if isinstance(batch, list):
            mixed.extend(batch)

    articles = shuffled(mixed, rng)[:MAX_ARTICLES]
    logger.info(
        "random_mix_built",
        page=page,
        categories=len(categories),
        fetched=len(mixed),
        returned=len(articles),
    )
    return {"articles": articles}


__all__ = [
    "ARTICLES_PER_CATEGORY",
    "CATEGORIES",
    "MAX_ARTICLES",
    "fetch_random_mix",
    "shuffled",
]
