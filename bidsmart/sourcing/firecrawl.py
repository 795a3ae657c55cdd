"""Firecrawl API client for page scraping and web search.

API Docs: https://docs.firecrawl.dev/api-reference/introduction

Both endpoints take a JSON body via POST and authenticate with a bearer
token. Non-2xx answers carry an ``error`` field that is surfaced verbatim.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from bidsmart.core.exceptions import ConfigurationError, UpstreamError
from bidsmart.core.logging import get_logger
from bidsmart.settings import Settings, settings as default_settings

logger = get_logger("sourcing.firecrawl")

PROVIDER = "firecrawl"


@dataclass
class ScrapedPage:
    """Main content of one scraped page."""

    markdown: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    links: List[str] = field(default_factory=list)


@dataclass
class SearchHit:
    """One web search result."""

    title: str = ""
    url: str = ""
    description: str = ""
    markdown: str = ""


def normalize_url(url: str) -> str:
    """Trim a URL and default its scheme to https."""
    formatted = url.strip()
    if not formatted.startswith(("http://", "https://")):
        formatted = f"https://{formatted}"
    return formatted


class FirecrawlClient:
    """Async client for the Firecrawl v1 REST API."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize API client.

        Args:
            settings: Optional settings instance
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._settings = settings or default_settings
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry."""
        self._client = self._build_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def configured(self) -> bool:
        return bool(self._settings.firecrawl_api_key)

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._settings.firecrawl_base_url,
            timeout=httpx.Timeout(self._settings.firecrawl_timeout_seconds),
            transport=self._transport,
        )

    async def scrape(self, url: str) -> ScrapedPage:
        """Scrape the main content of a page as markdown.

        Args:
            url: Page URL (already normalized)

        Returns:
            ScrapedPage

        Raises:
            ConfigurationError: If no API key is configured
            UpstreamError: On transport errors or non-2xx answers
        """
        data = await self._post(
            "/scrape",
            {
                "url": url,
                "formats": ["markdown", "links"],
                "onlyMainContent": True,
            },
        )
        # Payload is usually wrapped in "data", older responses were flat
        payload = data.get("data") or data
        return ScrapedPage(
            markdown=payload.get("markdown") or "",
            metadata=payload.get("metadata") or {},
            links=payload.get("links") or [],
        )

    async def search(self, query: str, limit: int) -> List[SearchHit]:
        """Run a web search.

        Args:
            query: Search query
            limit: Maximum number of results

        Returns:
            List of SearchHit

        Raises:
            ConfigurationError: If no API key is configured
            UpstreamError: On transport errors or non-2xx answers
        """
        data = await self._post(
            "/search",
            {
                "query": query,
                "limit": limit,
                "lang": self._settings.search_lang,
                "country": self._settings.search_country,
            },
            failure_label="Search failed",
        )
        results = data.get("data") or []
        return [
            SearchHit(
                title=item.get("title") or "",
                url=item.get("url") or "",
                description=item.get("description") or "",
                markdown=item.get("markdown") or "",
            )
            for item in results
            if isinstance(item, dict)
        ]

    async def _post(
        self,
        path: str,
        body: Dict[str, Any],
        failure_label: str = "Request failed",
    ) -> Dict[str, Any]:
        if not self.configured:
            raise ConfigurationError("API key not configured")

        headers = {
            "Authorization": f"Bearer {self._settings.firecrawl_api_key}",
            "Content-Type": "application/json",
        }

        try:
            if self._client is None:
                async with self._build_client() as client:
                    response = await client.post(path, json=body, headers=headers)
            else:
                response = await self._client.post(path, json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Firecrawl %s request failed: %s", path, e)
            raise UpstreamError(f"Request failed: {e}", provider=PROVIDER) from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not response.is_success:
            message = data.get("error") or f"{failure_label}: {response.status_code}"
            logger.error("Firecrawl %s error (%d): %s", path, response.status_code, message)
            raise UpstreamError(
                str(message),
                status_code=response.status_code,
                provider=PROVIDER,
            )

        return data
