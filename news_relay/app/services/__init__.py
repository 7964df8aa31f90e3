from .news_client import NewsApiClient, NewsQuery, UpstreamError, extract_error_message
from .random_mix import fetch_random_mix

__all__ = [
    "NewsApiClient",
    "NewsQuery",
    "UpstreamError",
    "extract_error_message",
    "fetch_random_mix",
]
