from bidsmart.db.models import Base, StorageSlot, CrawlConfig, Tender
from bidsmart.db.session import (
    engine,
    SessionLocal,
    create_db_engine,
    init_db,
    make_session_factory,
    session_scope,
)

__all__ = [
    "Base",
    "StorageSlot",
    "CrawlConfig",
    "Tender",
    "engine",
    "SessionLocal",
    "create_db_engine",
    "init_db",
    "make_session_factory",
    "session_scope",
]
