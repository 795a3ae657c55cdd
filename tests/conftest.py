"""Shared fixtures: isolated database, in-memory slots, fake providers."""

import json
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from bidsmart.api.main import create_app
from bidsmart.core.container import ApplicationContainer
from bidsmart.db.session import create_db_engine, init_db, make_session_factory
from bidsmart.repositories.cases import CaseRepository
from bidsmart.repositories.crawl_configs import CrawlConfigRepository
from bidsmart.repositories.projects import ProjectRepository
from bidsmart.repositories.tenders import TenderRepository
from bidsmart.schemas import ParsedTender
from bidsmart.settings import Settings
from bidsmart.sourcing.firecrawl import FirecrawlClient
from bidsmart.storage.store import MemorySlotBackend, StoreAdapter

# Fixed "now": demo project 4 is due in 3 days, project 2 in 4 days
FIXED_NOW = datetime(2026, 2, 25, 10, 0)


def fixed_clock() -> datetime:
    return FIXED_NOW


class FakeExtractor:
    """Stands in for TenderExtractor; returns canned tenders and records calls."""

    def __init__(
        self,
        page_tenders: Optional[List[ParsedTender]] = None,
        search_tenders: Optional[List[ParsedTender]] = None,
    ):
        self.page_tenders = page_tenders or []
        self.search_tenders = search_tenders or []
        self.page_calls: List[Dict[str, Any]] = []
        self.search_calls: List[str] = []

    async def extract_from_page(self, markdown: str, keywords: Optional[List[str]] = None):
        self.page_calls.append({"markdown": markdown, "keywords": keywords})
        return list(self.page_tenders)

    async def extract_from_search(self, content: str):
        self.search_calls.append(content)
        return list(self.search_tenders)


class FirecrawlStub:
    """Programmable Firecrawl API behind an httpx.MockTransport.

    ``scrape`` / ``search`` hold ``(status, body)`` tuples or an exception
    instance to raise from the transport.
    """

    def __init__(self):
        self.scrape: Any = (200, {"success": True, "data": {"markdown": "# 招标公告", "metadata": {}}})
        self.search: Any = (200, {"success": True, "data": []})
        self.requests: List[httpx.Request] = []

    def calls(self, endpoint: str) -> List[Dict[str, Any]]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.url.path.endswith(f"/{endpoint}")
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.scrape if request.url.path.endswith("/scrape") else self.search
        if isinstance(reply, Exception):
            raise reply
        status, body = reply
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def make_tender(title: str, **fields) -> ParsedTender:
    return ParsedTender(title=title, **fields)


def search_reply(*urls: str):
    """Successful search answer with one markdown hit per URL."""
    hits = [
        {"title": f"公告{i}", "url": url, "markdown": f"招标公告正文 {i}"}
        for i, url in enumerate(urls, start=1)
    ]
    return (200, {"success": True, "data": hits})


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return fixed_clock


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        firecrawl_api_key="fc-test-key",
        ai_api_key="",
    )


@pytest.fixture
def session_factory(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def slot_backend() -> MemorySlotBackend:
    return MemorySlotBackend()


@pytest.fixture
def store(slot_backend) -> StoreAdapter:
    return StoreAdapter(slot_backend)


@pytest.fixture
def projects(store, clock) -> ProjectRepository:
    return ProjectRepository(store, clock=clock)


@pytest.fixture
def cases(store) -> CaseRepository:
    return CaseRepository(store)


@pytest.fixture
def tenders(session_factory) -> TenderRepository:
    return TenderRepository(session_factory)


@pytest.fixture
def crawl_configs(session_factory) -> CrawlConfigRepository:
    return CrawlConfigRepository(session_factory)


@pytest.fixture
def firecrawl_stub() -> FirecrawlStub:
    return FirecrawlStub()


@pytest.fixture
def firecrawl(settings, firecrawl_stub) -> FirecrawlClient:
    return FirecrawlClient(settings=settings, transport=firecrawl_stub.transport)


@pytest.fixture
def extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture
def container(settings, session_factory, slot_backend, firecrawl, extractor, clock):
    return ApplicationContainer(
        settings=settings,
        session_factory=session_factory,
        slot_backend=slot_backend,
        firecrawl=firecrawl,
        extractor=extractor,
        clock=clock,
    )


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_app(container))
