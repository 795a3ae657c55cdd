"""Crawl config persistence."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import sessionmaker

from bidsmart.core.logging import get_logger
from bidsmart.db.models import CrawlConfig
from bidsmart.db.session import session_scope
from bidsmart.schemas import CrawlConfigIn

logger = get_logger("repositories.crawl_configs")


def clean_keywords(keywords: Optional[List[str]]) -> List[str]:
    """Trim keywords and drop empty entries (duplicates are kept)."""
    return [k.strip() for k in keywords or [] if k and k.strip()]


class CrawlConfigRepository:
    """CRUD over the ``crawl_configs`` table."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def list(self) -> List[CrawlConfig]:
        with session_scope(self._session_factory) as session:
            return session.query(CrawlConfig).order_by(CrawlConfig.id).all()

    def list_enabled(self) -> List[CrawlConfig]:
        with session_scope(self._session_factory) as session:
            return (
                session.query(CrawlConfig)
                .filter(CrawlConfig.enabled.is_(True))
                .order_by(CrawlConfig.id)
                .all()
            )

    def get(self, config_id: int) -> Optional[CrawlConfig]:
        with session_scope(self._session_factory) as session:
            return session.get(CrawlConfig, config_id)

    def create(self, data: CrawlConfigIn) -> CrawlConfig:
        config = CrawlConfig(
            name=data.name.strip(),
            url=data.url.strip(),
            keywords=clean_keywords(data.keywords),
            enabled=data.enabled,
            created_at=datetime.utcnow(),
        )
        with session_scope(self._session_factory) as session:
            session.add(config)
            session.flush()
            logger.info("Created crawl config %d: %s", config.id, config.name)
        return config

    def update(self, config_id: int, data: CrawlConfigIn) -> Optional[CrawlConfig]:
        with session_scope(self._session_factory) as session:
            config = session.get(CrawlConfig, config_id)
            if config is None:
                return None
            config.name = data.name.strip()
            config.url = data.url.strip()
            config.keywords = clean_keywords(data.keywords)
            config.enabled = data.enabled
        return config

    def delete(self, config_id: int) -> bool:
        with session_scope(self._session_factory) as session:
            config = session.get(CrawlConfig, config_id)
            if config is None:
                return False
            session.delete(config)
        logger.info("Deleted crawl config %d", config_id)
        return True

    def mark_crawled(self, config_id: int, when: datetime) -> None:
        with session_scope(self._session_factory) as session:
            config = session.get(CrawlConfig, config_id)
            if config is not None:
                config.last_crawled_at = when
