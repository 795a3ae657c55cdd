"""AI module - tender extraction from scraped and searched content."""

from bidsmart.ai.extractor import TenderExtractor, find_json_array, parse_tender_array
from bidsmart.ai.retry import llm_retry

__all__ = [
    "TenderExtractor",
    "find_json_array",
    "parse_tender_array",
    "llm_retry",
]
