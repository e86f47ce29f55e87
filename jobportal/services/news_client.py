"""
NewsAPI Client

Thin pass-through to https://newsapi.org/v2/top-headlines.

- No caching, no retries: each request makes exactly one upstream call
- Bounded timeout (settings.news_timeout_seconds, default 10s)
- Missing API key -> ConfigurationError (503), never an upstream call
"""
from typing import Any, Dict

import httpx
import structlog

from jobportal.core.config import Settings
from jobportal.core.exceptions import ConfigurationError, UpstreamServiceError
from jobportal.utils.http_utils import json_or_empty

logger = structlog.get_logger(__name__)

SERVICE = "newsapi"


class NewsClient:
    """
    Wrapper for the NewsAPI top-headlines endpoint.
    """

    def __init__(self, http: httpx.AsyncClient, settings: Settings):
        self.http = http
        self.api_key = settings.news_api_key
        self.base_url = settings.news_api_base_url.rstrip("/")
        self.timeout = settings.news_timeout_seconds

    async def _top_headlines(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Internal method to call NewsAPI.
        Returns the decoded JSON body when status == "ok".
        """
        if not self.api_key:
            logger.warning("NEWS_API_KEY not configured")
            raise ConfigurationError("News service is not configured")

        try:
            response = await self.http.get(
                f"{self.base_url}/top-headlines",
                params={**params, "apiKey": self.api_key},
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.error("News fetch error", error=str(e), params=params)
            raise UpstreamServiceError(SERVICE, "Failed to fetch news", detail=str(e)) from e

        body = json_or_empty(response)
        if response.is_error or body.get("status") != "ok":
            detail = body.get("message") or f"HTTP {response.status_code}"
            logger.error(
                "News fetch error",
                status_code=response.status_code,
                error=detail,
                params=params,
            )
            raise UpstreamServiceError(SERVICE, "Failed to fetch news", detail=detail)

        return body

    async def headlines(
        self,
        country: str = "in",
        category: str = "business",
        page: int = 1,
        page_size: int = 12,
    ) -> Dict[str, Any]:
        """Paged country + category headlines."""
        body = await self._top_headlines({
            "country": country,
            "category": category,
            "page": page,
            "pageSize": page_size,
        })
        logger.info("Fetched news", country=country, category=category, page=page)
        return {
            "articles": body.get("articles") or [],
            "totalResults": body.get("totalResults") or 0,
            "page": page,
            "pageSize": page_size,
        }

    async def headlines_by_category(self, category: str, page_size: int = 20) -> Dict[str, Any]:
        """English headlines for a single category."""
        body = await self._top_headlines({
            "category": category,
            "language": "en",
            "pageSize": page_size,
        })
        logger.info("Fetched news for category", category=category)
        return {
            "articles": body.get("articles") or [],
            "totalResults": body.get("totalResults"),
        }
