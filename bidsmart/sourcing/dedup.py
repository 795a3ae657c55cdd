"""Deduplication of extracted tenders.

The same announcement often shows up several times in one scrape or
across search hits (list page plus detail page, mirrored portals). Records
are compared by normalized title; the first occurrence wins and missing
fields are filled from later duplicates.
"""

import re
import unicodedata
from typing import Dict, List

from bidsmart.core.logging import get_logger
from bidsmart.schemas import ParsedTender

logger = get_logger("sourcing.dedup")

_MERGEABLE_FIELDS = ("client", "industry", "budget", "deadline", "requirements", "source_url")


def normalize_text(text: str) -> str:
    """Normalize text for comparison.

    Args:
        text: Raw text

    Returns:
        Normalized text (NFKC, lowercase, punctuation and whitespace removed)
    """
    if not text:
        return ""

    # NFKC folds full-width characters common in Chinese announcements
    text = unicodedata.normalize("NFKC", text).lower()

    # Keep letters, digits and CJK ideographs only
    return re.sub(r"[\W_]+", "", text)


def dedupe_tenders(tenders: List[ParsedTender]) -> List[ParsedTender]:
    """Drop tenders whose normalized title was already seen.

    Args:
        tenders: Extracted tenders in model order

    Returns:
        Unique tenders, original order preserved
    """
    by_key: Dict[str, ParsedTender] = {}
    order: List[str] = []

    for tender in tenders:
        key = normalize_text(tender.title)
        if not key:
            key = tender.title
        existing = by_key.get(key)
        if existing is None:
            by_key[key] = tender
            order.append(key)
            continue

        fill = {
            name: getattr(tender, name)
            for name in _MERGEABLE_FIELDS
            if getattr(existing, name) is None and getattr(tender, name) is not None
        }
        if fill:
            by_key[key] = existing.model_copy(update=fill)

    removed = len(tenders) - len(order)
    if removed:
        logger.info("Dedupe: %d duplicate tenders removed", removed)
    return [by_key[key] for key in order]
