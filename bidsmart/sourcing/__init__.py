"""Sourcing module - Firecrawl client and tender deduplication."""

from bidsmart.sourcing.dedup import dedupe_tenders, normalize_text
from bidsmart.sourcing.firecrawl import FirecrawlClient, ScrapedPage, SearchHit, normalize_url

__all__ = [
    "dedupe_tenders",
    "normalize_text",
    "FirecrawlClient",
    "ScrapedPage",
    "SearchHit",
    "normalize_url",
]
