"""Tender ingestion: turn a crawl config or a search query into tenders.

Flow for a configured source:
1. Scrape the configured URL (keywords as extraction hint)
2. Scrape failed -> search "<name> 招标公告 <keywords>" instead;
   if that fails too, report the search error and stop
3. Scrape returned no tenders -> one search fallback; still nothing ->
   "no tenders found" (a success)
4. Persist the candidates as one batch tagged with the config id
5. Stamp last_crawled_at
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from bidsmart.core.constants import SEPARATOR_LINE, TENDER_SEARCH_SUFFIX
from bidsmart.core.exceptions import ConfigurationError, NotFoundError
from bidsmart.core.logging import get_logger
from bidsmart.db.models import CrawlConfig, Tender
from bidsmart.repositories.crawl_configs import CrawlConfigRepository
from bidsmart.repositories.tenders import TenderRepository
from bidsmart.schemas import ParsedTender, ScrapeResult, SearchResult
from bidsmart.services.tender_service import TenderService
from bidsmart.sourcing.firecrawl import normalize_url

logger = get_logger("services.ingestion")

FALLBACK_SEARCH_LIMIT = 10

PATH_SCRAPE = "scrape"
PATH_SEARCH = "search"


@dataclass
class IngestionOutcome:
    """Result of one ingestion run."""

    success: bool
    tenders: List[Tender] = field(default_factory=list)
    error: Optional[str] = None
    path: Optional[str] = None  # "scrape" | "search" | None when nothing found
    crawl_config_id: Optional[int] = None

    @property
    def found(self) -> int:
        return len(self.tenders)

    @property
    def message(self) -> str:
        if not self.success:
            return f"采集失败: {self.error}"
        if not self.tenders:
            return "未发现招标信息"
        return f"发现 {len(self.tenders)} 条招标信息"


def build_fallback_query(config: CrawlConfig) -> str:
    """Search query used when scraping a configured source yields nothing."""
    parts = [config.name, TENDER_SEARCH_SUFFIX, *(config.keywords or [])]
    return " ".join(p for p in parts if p)


def resolve_source_url(
    tender: ParsedTender,
    scrape_url: Optional[str],
    config_url: Optional[str],
) -> Optional[str]:
    """Own URL first, then the resolved scrape URL, then the configured URL."""
    if tender.source_url:
        return tender.source_url
    if scrape_url:
        return scrape_url
    return normalize_url(config_url) if config_url else None


class IngestionService:
    """Runs scrape/search ingestion and stores the resulting candidates."""

    def __init__(
        self,
        tender_service: TenderService,
        tenders: TenderRepository,
        crawl_configs: CrawlConfigRepository,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self._tender_service = tender_service
        self._tenders = tenders
        self._crawl_configs = crawl_configs
        self._clock = clock

    async def crawl(self, config_id: int) -> IngestionOutcome:
        """Ingest tenders from one crawl config.

        Args:
            config_id: CrawlConfig id

        Returns:
            IngestionOutcome

        Raises:
            NotFoundError: If the config does not exist
        """
        config = self._crawl_configs.get(config_id)
        if config is None:
            raise NotFoundError(f"Crawl config {config_id} not found")

        logger.info("[%s] Crawling %s", config.name, config.url)
        keywords = list(config.keywords or [])

        scrape = await self._scrape(config.url, keywords)
        scrape_url: Optional[str] = None

        if not scrape.success:
            logger.warning("[%s] Scrape failed (%s), falling back to search", config.name, scrape.error)
            search = await self._search(build_fallback_query(config), FALLBACK_SEARCH_LIMIT)
            if not search.success:
                logger.error("[%s] Fallback search failed: %s", config.name, search.error)
                return IngestionOutcome(success=False, error=search.error, crawl_config_id=config.id)
            candidates, path = search.tenders, PATH_SEARCH
        elif scrape.tenders:
            candidates, path = scrape.tenders, PATH_SCRAPE
            scrape_url = scrape.source_url
        else:
            logger.info("[%s] Scrape found no tenders, trying search", config.name)
            search = await self._search(build_fallback_query(config), FALLBACK_SEARCH_LIMIT)
            if not search.success:
                logger.warning("[%s] Fallback search failed: %s", config.name, search.error)
            candidates, path = (search.tenders if search.success else []), PATH_SEARCH
            scrape_url = scrape.source_url

        if not candidates:
            logger.info("[%s] No tenders found", config.name)
            return IngestionOutcome(success=True, crawl_config_id=config.id)

        resolved = [
            t.model_copy(update={"source_url": resolve_source_url(t, scrape_url, config.url)})
            for t in candidates
        ]
        rows = self._tenders.add_batch(resolved, crawl_config_id=config.id)
        self._crawl_configs.mark_crawled(config.id, self._clock())

        logger.info("[%s] %d tenders via %s", config.name, len(rows), path)
        return IngestionOutcome(success=True, tenders=rows, path=path, crawl_config_id=config.id)

    async def search(self, text: str) -> IngestionOutcome:
        """Ingest tenders from an ad-hoc search (no crawl config).

        Args:
            text: User search text

        Returns:
            IngestionOutcome (rows are not tagged with a config id)
        """
        query = f"{text.strip()} {TENDER_SEARCH_SUFFIX}"
        result = await self._search(query, None)
        if not result.success:
            return IngestionOutcome(success=False, error=result.error)

        if not result.tenders:
            return IngestionOutcome(success=True)

        rows = self._tenders.add_batch(result.tenders)
        return IngestionOutcome(success=True, tenders=rows, path=PATH_SEARCH)

    async def crawl_enabled(self) -> List[IngestionOutcome]:
        """Crawl every enabled config once, one after another."""
        outcomes = []
        configs = self._crawl_configs.list_enabled()
        logger.info(SEPARATOR_LINE)
        logger.info("Crawling %d enabled sources", len(configs))
        logger.info(SEPARATOR_LINE)

        for config in configs:
            outcomes.append(await self.crawl(config.id))

        logger.info(
            "Crawl finished: %d tenders, %d failures",
            sum(o.found for o in outcomes),
            sum(1 for o in outcomes if not o.success),
        )
        return outcomes

    async def _scrape(self, url: str, keywords: List[str]) -> ScrapeResult:
        try:
            return await self._tender_service.scrape(url, keywords)
        except ConfigurationError as e:
            return ScrapeResult(success=False, error=e.message, status_code=500)

    async def _search(self, query: str, limit: Optional[int]) -> SearchResult:
        try:
            return await self._tender_service.search(query, limit=limit)
        except ConfigurationError as e:
            return SearchResult(success=False, error=e.message, status_code=500)
