"""Scrape and search functions: fetch content, extract tenders.

Both operations return structured results instead of raising: provider
errors become ``success=False`` with the provider message and status,
while extraction problems only ever shrink the tender list.
"""

from typing import List, Optional

from bidsmart.ai.extractor import TenderExtractor
from bidsmart.core.exceptions import UpstreamError
from bidsmart.core.logging import get_logger
from bidsmart.schemas import ScrapeResult, SearchResult
from bidsmart.settings import Settings, settings as default_settings
from bidsmart.sourcing.firecrawl import FirecrawlClient, SearchHit, normalize_url

logger = get_logger("services.tender")


def build_search_query(query: str, keywords: Optional[List[str]] = None) -> str:
    """Append keywords to a search query."""
    if keywords:
        return f"{query} {' '.join(keywords)}"
    return query


def format_search_hits(hits: List[SearchHit], snippet_limit: int) -> str:
    """Concatenate search hits into one text block for extraction."""
    parts = []
    for i, hit in enumerate(hits, start=1):
        body = (hit.markdown or hit.description or "")[:snippet_limit]
        parts.append(f"--- 结果{i}: {hit.title or '未知'} ({hit.url}) ---\n{body}")
    return "\n\n".join(parts)


class TenderService:
    """Scrape/search one source and turn its content into tender records."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        firecrawl: Optional[FirecrawlClient] = None,
        extractor: Optional[TenderExtractor] = None,
    ):
        self._settings = settings or default_settings
        self._firecrawl = firecrawl or FirecrawlClient(settings=self._settings)
        self._extractor = extractor or TenderExtractor(settings=self._settings)

    async def scrape(self, url: str, keywords: Optional[List[str]] = None) -> ScrapeResult:
        """Scrape a page and extract tenders from its markdown.

        Args:
            url: Page URL (scheme optional)
            keywords: Optional extraction hint; only matching tenders are kept

        Returns:
            ScrapeResult

        Raises:
            ConfigurationError: If no Firecrawl key is configured
        """
        source_url = normalize_url(url)
        logger.info("Scraping URL: %s", source_url)

        try:
            page = await self._firecrawl.scrape(source_url)
        except UpstreamError as e:
            return ScrapeResult(success=False, error=e.message, status_code=e.status_code)

        tenders = []
        if page.markdown:
            tenders = await self._extractor.extract_from_page(page.markdown, keywords or None)

        logger.info("Scrape %s: %d tenders", source_url, len(tenders))
        return ScrapeResult(
            success=True,
            tenders=tenders,
            raw_markdown=page.markdown[: self._settings.raw_markdown_preview_limit],
            source_url=source_url,
            metadata=page.metadata,
        )

    async def search(
        self,
        query: str,
        keywords: Optional[List[str]] = None,
        limit: Optional[int] = None,
    ) -> SearchResult:
        """Search the web and extract tenders from the aggregated hits.

        Args:
            query: Search query
            keywords: Optional keywords appended to the query
            limit: Maximum number of search results

        Returns:
            SearchResult

        Raises:
            ConfigurationError: If no Firecrawl key is configured
        """
        search_query = build_search_query(query, keywords)
        logger.info("Searching: %s", search_query)

        try:
            hits = await self._firecrawl.search(
                search_query, limit or self._settings.search_default_limit
            )
        except UpstreamError as e:
            return SearchResult(success=False, error=e.message, status_code=e.status_code)

        content = format_search_hits(hits, self._settings.search_result_snippet_limit)
        tenders = []
        if content:
            tenders = await self._extractor.extract_from_search(content)

        logger.info("Found %d tenders from %d search results", len(tenders), len(hits))
        return SearchResult(success=True, tenders=tenders, search_result_count=len(hits))
