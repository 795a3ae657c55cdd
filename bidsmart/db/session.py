"""Database session management with connection pooling."""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from bidsmart.db.models import Base
from bidsmart.settings import settings


def create_db_engine(database_url: Optional[str] = None) -> Engine:
    """Create an engine for the given URL.

    SQLite gets SQLAlchemy's default pool; server databases use the
    configured pool size.

    Args:
        database_url: Database URL (defaults to settings.database_url)

    Returns:
        SQLAlchemy Engine
    """
    url = database_url or settings.database_url
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=False,
        )
    return create_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_pool_max_overflow,
        pool_pre_ping=True,  # Verify connections before use
        pool_recycle=3600,  # Recycle connections after 1 hour
        echo=False,
    )


def make_session_factory(bind: Engine) -> sessionmaker:
    """Create a session factory bound to an engine.

    Objects stay readable after commit so repositories can hand them out
    once the session is closed.
    """
    return sessionmaker(autocommit=False, autoflush=False, bind=bind, expire_on_commit=False)


engine = create_db_engine()

SessionLocal = make_session_factory(engine)


def init_db(bind: Optional[Engine] = None) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=bind or engine)


@contextmanager
def session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    """Context manager for sessions with automatic commit/rollback.

    Usage:
        with session_scope(factory) as session:
            session.add(obj)
            # Commits automatically on exit, rollbacks on exception

    Yields:
        Database session
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
