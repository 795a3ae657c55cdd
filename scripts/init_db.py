"""
Database initialization script.

Creates all tables and optionally registers a first crawl config.

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --source "省政府采购网" https://example.gov.cn/zfcg 软件 信息化
"""
import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect

from bidsmart.db.session import engine, SessionLocal, init_db
from bidsmart.repositories.crawl_configs import CrawlConfigRepository
from bidsmart.schemas import CrawlConfigIn

EXPECTED_TABLES = ["storage_slots", "crawl_configs", "tenders"]


def init_database():
    """Create all database tables."""
    print("Creating database tables...")
    init_db(engine)
    print("Tables created successfully.")


def list_tables():
    """List all tables in the database."""
    tables = inspect(engine).get_table_names()
    print("\nDatabase tables:")
    for table in sorted(tables):
        print(f"  - {table}")
    return tables


def create_crawl_config(name: str, url: str, keywords: list[str]) -> bool:
    """Register a crawl config unless one with the same URL exists."""
    repo = CrawlConfigRepository(SessionLocal)
    if any(c.url == url for c in repo.list()):
        print(f"Crawl config for {url} already exists.")
        return True

    config = repo.create(CrawlConfigIn(name=name, url=url, keywords=keywords))
    print(f"Created crawl config with ID: {config.id}")
    return True


def main():
    parser = argparse.ArgumentParser(description="Initialize the BidSmart database")
    parser.add_argument(
        "--source",
        nargs="+",
        metavar=("NAME", "URL"),
        help="Register a crawl config: NAME URL [KEYWORD ...]",
    )
    args = parser.parse_args()

    init_database()
    tables = list_tables()

    missing = [t for t in EXPECTED_TABLES if t not in tables]
    if missing:
        print(f"\nWarning: Missing tables: {missing}")
        return 1
    print("\nAll tables present.")

    if args.source:
        if len(args.source) < 2:
            parser.error("--source needs at least NAME and URL")
        name, url, *keywords = args.source
        print()
        create_crawl_config(name, url, keywords)

    return 0


if __name__ == "__main__":
    sys.exit(main())
