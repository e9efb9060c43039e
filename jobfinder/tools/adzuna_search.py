"""
Adzuna search tool for job discovery.

Proxies job searches to the Adzuna REST API with credentials injected
server-side.
"""

import logging
from typing import Any

import httpx

from jobfinder.errors import ConfigurationError, MalformedUpstreamResponse, UpstreamError

logger = logging.getLogger(__name__)

ADZUNA_API_URL = "https://api.adzuna.com/v1/api/jobs"

SERVICE_NAME = "Adzuna"

# (code, name, flag) for every market the UI offers
SUPPORTED_COUNTRIES: list[tuple[str, str, str]] = [
    ("US", "United States", "🇺🇸"),
    ("GB", "United Kingdom", "🇬🇧"),
    ("DE", "Germany", "🇩🇪"),
    ("FR", "France", "🇫🇷"),
    ("ES", "Spain", "🇪🇸"),
    ("IT", "Italy", "🇮🇹"),
    ("NL", "Netherlands", "🇳🇱"),
    ("CA", "Canada", "🇨🇦"),
    ("AU", "Australia", "🇦🇺"),
    ("IN", "India", "🇮🇳"),
]

COUNTRY_CODES = frozenset(code.lower() for code, _, _ in SUPPORTED_COUNTRIES)


class AdzunaClient:
    """Async client for the Adzuna job search endpoint."""

    def __init__(
        self,
        app_id: str,
        app_key: str,
        base_url: str = ADZUNA_API_URL,
        max_days_old: int | None = 7,
        timeout: float = 30.0,
        http: httpx.AsyncClient | None = None,
    ):
        self.app_id = app_id
        self.app_key = app_key
        self.base_url = base_url.rstrip("/")
        self.max_days_old = max_days_old
        self._http = http or httpx.AsyncClient(timeout=timeout)

    async def search(
        self,
        query: str,
        country: str,
        page: int = 1,
        per_page: int = 15,
        sort_by: str = "relevance",
    ) -> dict[str, Any]:
        """
        Fetch one page of job postings.

        Args:
            query: Job title or keywords
            country: Lower-case country code (e.g. "de")
            page: 1-based page number
            per_page: Results per page
            sort_by: "relevance" or "date"

        Returns:
            Raw Adzuna response (``results`` and ``count``)
        """
        if not self.app_id or not self.app_key:
            raise ConfigurationError("API credentials not set")

        params: dict[str, Any] = {
            "app_id": self.app_id,
            "app_key": self.app_key,
            "what": query,
            "results_per_page": per_page,
            "sort_by": sort_by,
        }
        if self.max_days_old:
            params["max_days_old"] = self.max_days_old

        url = f"{self.base_url}/{country}/search/{page}"
        try:
            response = await self._http.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Adzuna returned %s for %r (page %d)", e.response.status_code, query, page)
            raise UpstreamError(SERVICE_NAME, f"HTTP {e.response.status_code}", e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error("Adzuna request failed: %s", e)
            raise UpstreamError(SERVICE_NAME, str(e) or type(e).__name__) from e

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedUpstreamResponse(SERVICE_NAME, "Response is not JSON") from e

        if not isinstance(data, dict):
            raise MalformedUpstreamResponse(SERVICE_NAME, "Expected a JSON object")

        logger.debug("Adzuna %r page %d returned %d results", query, page, len(data.get("results") or []))
        return data

    async def aclose(self) -> None:
        await self._http.aclose()
