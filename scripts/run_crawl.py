#!/usr/bin/env python
"""
Entry point for crawling every enabled crawl config once.

Usage:
    python scripts/run_crawl.py

Each config is scraped (with a search fallback); new tenders land in the
triage queue with status "new".
"""
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bidsmart.core.constants import SEPARATOR_LINE
from bidsmart.core.container import get_container, reset_container
from bidsmart.core.logging import setup_logging
from bidsmart.settings import settings


def main():
    """Run one crawl over all enabled sources."""
    setup_logging(settings.log_level, settings.log_file)

    print(SEPARATOR_LINE)
    print("TENDER CRAWL")
    print(SEPARATOR_LINE)
    print()

    container = get_container()
    try:
        outcomes = asyncio.run(container.ingestion_service.crawl_enabled())
    finally:
        reset_container()

    print()
    print(SEPARATOR_LINE)
    print("SUMMARY")
    print(SEPARATOR_LINE)
    for outcome in outcomes:
        print(f"  [{outcome.crawl_config_id}] {outcome.message}")
    print()
    print(f"  Sources crawled:  {len(outcomes)}")
    print(f"  New tenders:      {sum(o.found for o in outcomes)}")
    failures = sum(1 for o in outcomes if not o.success)
    print(f"  Failures:         {failures}")

    return 0 if failures == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
