"""Dependency injection container."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import sessionmaker

from bidsmart.ai.extractor import TenderExtractor
from bidsmart.core.logging import get_logger
from bidsmart.db.session import create_db_engine, init_db, make_session_factory
from bidsmart.repositories.cases import CaseRepository
from bidsmart.repositories.crawl_configs import CrawlConfigRepository
from bidsmart.repositories.projects import ProjectRepository
from bidsmart.repositories.tenders import TenderRepository
from bidsmart.services.ingestion_service import IngestionService
from bidsmart.services.status_service import StatusService
from bidsmart.services.tender_service import TenderService
from bidsmart.services.triage_service import TriageService
from bidsmart.settings import Settings, settings as default_settings
from bidsmart.sourcing.firecrawl import FirecrawlClient
from bidsmart.storage.store import SlotBackend, SqlSlotBackend, StoreAdapter

logger = get_logger("core.container")


@dataclass
class ApplicationContainer:
    """Container for application dependencies.

    Every collaborator is built on first access and shared afterwards.
    Tests pass their own session factory, slot backend, Firecrawl client or
    extractor to replace the real ones.
    """

    settings: Settings = field(default_factory=lambda: default_settings)
    session_factory: Optional[sessionmaker] = None
    slot_backend: Optional[SlotBackend] = None
    firecrawl: Optional[FirecrawlClient] = None
    extractor: Optional[TenderExtractor] = None
    clock: Callable[[], datetime] = datetime.now
    _store: Optional[StoreAdapter] = field(default=None, repr=False)
    _projects: Optional[ProjectRepository] = field(default=None, repr=False)
    _cases: Optional[CaseRepository] = field(default=None, repr=False)
    _tenders: Optional[TenderRepository] = field(default=None, repr=False)
    _crawl_configs: Optional[CrawlConfigRepository] = field(default=None, repr=False)
    _tender_service: Optional[TenderService] = field(default=None, repr=False)
    _ingestion_service: Optional[IngestionService] = field(default=None, repr=False)
    _triage_service: Optional[TriageService] = field(default=None, repr=False)
    _status_service: Optional[StatusService] = field(default=None, repr=False)

    @classmethod
    def create(cls, settings: Optional[Settings] = None) -> "ApplicationContainer":
        """Create a container on the configured database.

        Args:
            settings: Optional settings override

        Returns:
            Configured ApplicationContainer instance
        """
        container = cls(settings=settings or default_settings)
        logger.debug("Created ApplicationContainer")
        return container

    def __post_init__(self):
        # Without an injected factory, bind to the configured database
        if self.session_factory is None:
            engine = create_db_engine(self.settings.database_url)
            init_db(engine)
            self.session_factory = make_session_factory(engine)

    @property
    def store(self) -> StoreAdapter:
        if self._store is None:
            backend = self.slot_backend or SqlSlotBackend(self.session_factory)
            self._store = StoreAdapter(backend)
        return self._store

    @property
    def projects(self) -> ProjectRepository:
        if self._projects is None:
            self._projects = ProjectRepository(self.store, clock=self.clock)
        return self._projects

    @property
    def cases(self) -> CaseRepository:
        if self._cases is None:
            self._cases = CaseRepository(self.store)
        return self._cases

    @property
    def tenders(self) -> TenderRepository:
        if self._tenders is None:
            self._tenders = TenderRepository(self.session_factory)
        return self._tenders

    @property
    def crawl_configs(self) -> CrawlConfigRepository:
        if self._crawl_configs is None:
            self._crawl_configs = CrawlConfigRepository(self.session_factory)
        return self._crawl_configs

    @property
    def tender_service(self) -> TenderService:
        if self._tender_service is None:
            self._tender_service = TenderService(
                settings=self.settings,
                firecrawl=self.firecrawl,
                extractor=self.extractor,
            )
        return self._tender_service

    @property
    def ingestion_service(self) -> IngestionService:
        if self._ingestion_service is None:
            self._ingestion_service = IngestionService(
                self.tender_service,
                self.tenders,
                self.crawl_configs,
            )
        return self._ingestion_service

    @property
    def triage_service(self) -> TriageService:
        if self._triage_service is None:
            self._triage_service = TriageService(self.tenders, self.projects, clock=self.clock)
        return self._triage_service

    @property
    def status_service(self) -> StatusService:
        if self._status_service is None:
            self._status_service = StatusService(self.projects, self.cases, clock=self.clock)
        return self._status_service

    def close(self) -> None:
        """Release the database connections."""
        bind = self.session_factory.kw.get("bind") if self.session_factory else None
        if bind is not None:
            bind.dispose()
        logger.debug("ApplicationContainer closed")


# Global container instance
_container: Optional[ApplicationContainer] = None


def get_container() -> ApplicationContainer:
    """Get or create the global application container.

    Returns:
        ApplicationContainer instance
    """
    global _container
    if _container is None:
        _container = ApplicationContainer.create()
    return _container


def reset_container() -> None:
    """Reset the global container (useful for testing)."""
    global _container
    if _container is not None:
        _container.close()
        _container = None
