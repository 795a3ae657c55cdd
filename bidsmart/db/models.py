from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Text, Boolean, DateTime,
    ForeignKey, JSON, Index
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class StorageSlot(Base):
    """Named slot of the key-value document store (one JSON list per key)."""
    __tablename__ = "storage_slots"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class CrawlConfig(Base):
    """A saved external source polled for new tenders."""
    __tablename__ = "crawl_configs"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    url = Column(Text, nullable=False)
    keywords = Column(JSON, default=list)  # trimmed, non-empty strings
    enabled = Column(Boolean, default=True, nullable=False)
    last_crawled_at = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_crawl_configs_enabled", "enabled"),
    )

    tenders = relationship("Tender", back_populates="crawl_config")


class Tender(Base):
    """Ingested tender awaiting triage."""
    __tablename__ = "tenders"

    id = Column(Integer, primary_key=True)
    crawl_config_id = Column(
        Integer, ForeignKey("crawl_configs.id", ondelete="SET NULL"), nullable=True
    )
    title = Column(String(500), nullable=False)
    client = Column(String(255))
    industry = Column(String(100))
    budget = Column(String(100))
    deadline = Column(String(50))  # free text as returned by the model
    requirements = Column(Text)
    source_url = Column(Text)
    status = Column(String(20), default="new", nullable=False)  # new/confirmed/ignored
    project_id = Column(String(64))  # BidProject spawned on confirmation
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_tenders_status", "status"),
        Index("ix_tenders_crawl_config_id", "crawl_config_id"),
    )

    crawl_config = relationship("CrawlConfig", back_populates="tenders")
