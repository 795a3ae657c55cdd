"""Tests for crawl-config and ad-hoc ingestion."""

import asyncio
from datetime import datetime

import pytest

from bidsmart.core.exceptions import NotFoundError
from bidsmart.schemas import CrawlConfigIn
from bidsmart.services.ingestion_service import IngestionService, build_fallback_query
from bidsmart.services.tender_service import TenderService

from conftest import make_tender, search_reply

CRAWLED_AT = datetime(2026, 2, 25, 2, 0)


@pytest.fixture
def ingestion(settings, firecrawl, extractor, tenders, crawl_configs):
    service = TenderService(settings=settings, firecrawl=firecrawl, extractor=extractor)
    return IngestionService(service, tenders, crawl_configs, clock=lambda: CRAWLED_AT)


@pytest.fixture
def config(crawl_configs):
    return crawl_configs.create(CrawlConfigIn(
        name="省政府采购网",
        url="ccgp.example.gov.cn/list",
        keywords=["软件", "信息化"],
    ))


class TestCrawl:
    """Tests for IngestionService.crawl."""

    def test_scrape_path(self, ingestion, config, extractor, firecrawl_stub, tenders, crawl_configs):
        """Test tenders from the scrape are stored with the config id."""
        extractor.page_tenders = [
            make_tender("软件平台采购"),
            make_tender("信息化改造", source_url="https://detail.example/2"),
        ]

        outcome = asyncio.run(ingestion.crawl(config.id))

        assert outcome.success is True
        assert outcome.path == "scrape"
        assert outcome.found == 2
        assert firecrawl_stub.calls("search") == []

        rows = tenders.list_by_status("new")
        assert {r.crawl_config_id for r in rows} == {config.id}
        urls = {r.title: r.source_url for r in rows}
        assert urls["软件平台采购"] == "https://ccgp.example.gov.cn/list"
        assert urls["信息化改造"] == "https://detail.example/2"
        assert crawl_configs.get(config.id).last_crawled_at == CRAWLED_AT

    def test_empty_scrape_triggers_one_search(self, ingestion, config, extractor, firecrawl_stub):
        """Test exactly one search fallback after an empty scrape."""
        firecrawl_stub.search = search_reply("https://n.cn/1")
        extractor.search_tenders = [make_tender("软件采购项目")]

        outcome = asyncio.run(ingestion.crawl(config.id))

        searches = firecrawl_stub.calls("search")
        assert len(searches) == 1
        assert searches[0]["query"] == "省政府采购网 招标公告 软件 信息化"
        assert searches[0]["limit"] == 10
        assert outcome.path == "search"
        assert outcome.found == 1

    def test_nothing_found(self, ingestion, config, firecrawl_stub, tenders, crawl_configs):
        """Test empty scrape and empty search report success with nothing stored."""
        outcome = asyncio.run(ingestion.crawl(config.id))

        assert len(firecrawl_stub.calls("search")) == 1
        assert outcome.success is True
        assert outcome.found == 0
        assert outcome.message == "未发现招标信息"
        assert tenders.list() == []
        assert crawl_configs.get(config.id).last_crawled_at is None

    def test_failed_scrape_falls_back_to_search(self, ingestion, config, extractor, firecrawl_stub):
        """Test a failed scrape still yields tenders via search."""
        firecrawl_stub.scrape = (500, {"error": "Scrape timeout"})
        firecrawl_stub.search = search_reply("https://n.cn/1")
        extractor.search_tenders = [make_tender("信息化项目")]

        outcome = asyncio.run(ingestion.crawl(config.id))

        assert outcome.success is True
        assert outcome.path == "search"
        assert outcome.found == 1
        assert outcome.tenders[0].source_url == "https://ccgp.example.gov.cn/list"

    def test_both_paths_fail(self, ingestion, config, firecrawl_stub, tenders):
        """Test the search error is reported when both paths fail."""
        firecrawl_stub.scrape = (500, {"error": "Scrape timeout"})
        firecrawl_stub.search = (429, {"error": "Rate limit exceeded"})

        outcome = asyncio.run(ingestion.crawl(config.id))

        assert outcome.success is False
        assert outcome.error == "Rate limit exceeded"
        assert outcome.message == "采集失败: Rate limit exceeded"
        assert tenders.list() == []

    def test_failed_fallback_after_empty_scrape(self, ingestion, config, firecrawl_stub):
        """Test a failing fallback after an empty scrape counts as nothing found."""
        firecrawl_stub.search = (500, {"error": "down"})
        outcome = asyncio.run(ingestion.crawl(config.id))
        assert outcome.success is True
        assert outcome.found == 0

    def test_unknown_config(self, ingestion):
        """Test an unknown config id raises NotFoundError."""
        with pytest.raises(NotFoundError):
            asyncio.run(ingestion.crawl(999))

    def test_crawl_enabled(self, ingestion, crawl_configs, extractor):
        """Test only enabled configs are crawled."""
        crawl_configs.create(CrawlConfigIn(name="A", url="https://a.cn"))
        crawl_configs.create(CrawlConfigIn(name="B", url="https://b.cn", enabled=False))
        extractor.page_tenders = [make_tender("项目")]

        outcomes = asyncio.run(ingestion.crawl_enabled())

        assert len(outcomes) == 1
        assert outcomes[0].found == 1

    def test_build_fallback_query(self, config):
        """Test fallback query composition."""
        assert build_fallback_query(config) == "省政府采购网 招标公告 软件 信息化"


class TestAdHocSearch:
    """Tests for IngestionService.search."""

    def test_search_stores_untagged(self, ingestion, extractor, firecrawl_stub, tenders):
        """Test ad-hoc results carry no config id."""
        firecrawl_stub.search = search_reply("https://x.cn")
        extractor.search_tenders = [make_tender("智慧园区", source_url="https://x.cn")]

        outcome = asyncio.run(ingestion.search(" 智慧园区 "))

        assert firecrawl_stub.calls("search")[0]["query"] == "智慧园区 招标公告"
        assert outcome.found == 1
        assert tenders.list()[0].crawl_config_id is None

    def test_search_failure(self, ingestion, firecrawl_stub):
        """Test provider failure is reported."""
        firecrawl_stub.search = (401, {"error": "Unauthorized"})
        outcome = asyncio.run(ingestion.search("智慧园区"))
        assert outcome.success is False
        assert outcome.error == "Unauthorized"
