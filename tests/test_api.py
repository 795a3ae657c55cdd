"""Tests for the HTTP interface."""

from conftest import make_tender, search_reply


class TestFunctionEndpoints:
    """Tests for the scrape and search endpoints."""

    def test_options_preflight(self, client):
        """Test OPTIONS answers 204 with CORS headers."""
        response = client.options("/functions/v1/firecrawl-scrape")
        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == "*"
        assert "content-type" in response.headers["access-control-allow-headers"]

    def test_scrape_requires_url(self, client, firecrawl_stub):
        """Test an empty body is rejected before any provider call."""
        response = client.post("/functions/v1/firecrawl-scrape", json={})
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "URL is required"}
        assert firecrawl_stub.requests == []

    def test_search_requires_query(self, client):
        """Test an empty body is rejected for search."""
        response = client.post("/functions/v1/firecrawl-search", json={})
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Search query is required"}

    def test_invalid_json_body(self, client):
        """Test an unreadable body yields 500."""
        response = client.post(
            "/functions/v1/firecrawl-scrape",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 500
        assert response.json()["success"] is False

    def test_scrape_success(self, client, extractor):
        """Test a successful scrape response."""
        extractor.page_tenders = [make_tender("智慧交通")]
        response = client.post("/functions/v1/firecrawl-scrape", json={"url": "a.cn"})
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["sourceUrl"] == "https://a.cn"
        assert data["tenders"][0]["title"] == "智慧交通"
        assert response.headers["access-control-allow-origin"] == "*"

    def test_scrape_upstream_status(self, client, firecrawl_stub):
        """Test the provider status is passed through."""
        firecrawl_stub.scrape = (402, {"error": "Payment required"})
        response = client.post("/functions/v1/firecrawl-scrape", json={"url": "https://a.cn"})
        assert response.status_code == 402
        assert response.json() == {"success": False, "error": "Payment required"}

    def test_search_success(self, client, firecrawl_stub):
        """Test a search response shape."""
        firecrawl_stub.search = (200, {"data": [{"title": "t", "url": "https://a.cn"}]})
        response = client.post("/functions/v1/firecrawl-search", json={"query": "智慧城市", "limit": 3})
        assert response.status_code == 200
        assert response.json() == {"success": True, "tenders": [], "searchResultCount": 1}

    def test_search_limit_zero_uses_default(self, client, firecrawl_stub, settings):
        """Test limit 0 falls back to the default result count."""
        response = client.post("/functions/v1/firecrawl-search", json={"query": "智慧城市", "limit": 0})
        assert response.status_code == 200
        assert firecrawl_stub.calls("search")[0]["limit"] == settings.search_default_limit

    def test_search_large_limit_forwarded(self, client, firecrawl_stub):
        """Test a limit above 100 is passed to the provider unchanged."""
        response = client.post("/functions/v1/firecrawl-search", json={"query": "智慧城市", "limit": 200})
        assert response.status_code == 200
        assert firecrawl_stub.calls("search")[0]["limit"] == 200

    def test_browser_preflight(self, client):
        """Test a browser preflight gets the endpoint's own 204 answer."""
        response = client.options(
            "/functions/v1/firecrawl-search",
            headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
        )
        assert response.status_code == 204
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert "apikey" in response.headers["access-control-allow-headers"]

    def test_missing_api_key(self, client, container):
        """Test a missing provider key yields 500."""
        container.settings.firecrawl_api_key = ""
        response = client.post("/functions/v1/firecrawl-search", json={"query": "智慧城市"})
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "API key not configured"}


class TestProjectEndpoints:
    """Tests for project routes."""

    def test_list_projects(self, client):
        """Test the demo set with progress."""
        data = client.get("/api/projects").json()["data"]
        assert [p["id"] for p in data] == ["1", "2", "3", "4", "5"]
        assert data[0]["progress"] == 50.0
        assert "createdAt" in data[0]

    def test_filter_by_status(self, client):
        """Test status filtering."""
        data = client.get("/api/projects", params={"status": "pending"}).json()["data"]
        assert [p["id"] for p in data] == ["3", "4"]

    def test_create_and_get(self, client):
        """Test creating a manual project."""
        response = client.post("/api/projects", json={"name": "新项目", "deadline": "2026-03-31"})
        assert response.status_code == 201
        project_id = response.json()["data"]["id"]
        fetched = client.get(f"/api/projects/{project_id}").json()["data"]
        assert fetched["status"] == "pending"
        assert fetched["source"] == "manual"

    def test_get_unknown(self, client):
        """Test unknown ids give 404."""
        response = client.get("/api/projects/missing")
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_advance(self, client):
        """Test advancing a pending project."""
        data = client.post("/api/projects/3/advance").json()["data"]
        assert data["status"] == "designing"
        assert data["updatedAt"] == "2026-02-25"

    def test_set_status(self, client):
        """Test direct status assignment."""
        data = client.put("/api/projects/3/status", json={"status": "quoting"}).json()["data"]
        assert data["status"] == "quoting"

    def test_set_invalid_status(self, client):
        """Test unknown status values are rejected."""
        response = client.put("/api/projects/3/status", json={"status": "won"})
        assert response.status_code == 422

    def test_upcoming(self, client):
        """Test the upcoming list."""
        data = client.get("/api/projects/upcoming").json()["data"]
        assert [p["id"] for p in data] == ["2", "4"]

    def test_archive_flow(self, client):
        """Test archiving a submitted project and listing cases."""
        response = client.post(
            "/api/projects/5/archive",
            json={"result": "won", "finalQuote": 4800000, "designSummary": "双机热备"},
        )
        assert response.status_code == 201
        case = response.json()["data"]
        assert case["projectId"] == "5"

        cases = client.get("/api/cases", params={"project_id": "5"}).json()["data"]
        assert [c["id"] for c in cases] == [case["id"]]
        assert client.get("/api/projects/5").json()["data"]["status"] == "archived"

    def test_archive_open_project_conflict(self, client):
        """Test archiving a pending project gives 409."""
        response = client.post("/api/projects/3/archive", json={})
        assert response.status_code == 409


class TestTenderEndpoints:
    """Tests for triage and crawl config routes."""

    def test_search_confirm_ignore(self, client, extractor, firecrawl_stub):
        """Test ad-hoc search followed by triage."""
        firecrawl_stub.search = search_reply("https://a.cn/1", "https://a.cn/2")
        extractor.search_tenders = [make_tender("A"), make_tender("B")]
        client_response = client.post("/api/tenders/search", json={"query": "智慧园区"})
        assert client_response.json()["data"]["found"] == 2

        listed = client.get("/api/tenders").json()["data"]
        ids = {t["title"]: t["id"] for t in listed["new"]}

        project = client.post(f"/api/tenders/{ids['A']}/confirm").json()["data"]
        assert project["client"] == "未知招标方"
        assert client.post(f"/api/tenders/{ids['B']}/ignore").json()["data"]["status"] == "ignored"
        assert client.post(f"/api/tenders/{ids['B']}/confirm").status_code == 409

        listed = client.get("/api/tenders").json()["data"]
        assert listed["new"] == []
        assert [t["title"] for t in listed["confirmed"]] == ["A"]

    def test_confirm_unknown(self, client):
        """Test confirming an unknown tender gives 404."""
        assert client.post("/api/tenders/999/confirm").status_code == 404

    def test_search_failure(self, client, firecrawl_stub):
        """Test provider failure on ad-hoc search."""
        firecrawl_stub.search = (500, {"error": "down"})
        response = client.post("/api/tenders/search", json={"query": "x"})
        assert response.status_code == 502
        assert response.json() == {"success": False, "error": "down"}

    def test_blank_query_rejected(self, client, firecrawl_stub):
        """Test a whitespace-only query never reaches the provider."""
        response = client.post("/api/tenders/search", json={"query": "   "})
        assert response.status_code == 422
        assert response.json()["success"] is False
        assert firecrawl_stub.requests == []

    def test_api_preflight_uses_cors_middleware(self, client):
        """Test /api routes still get middleware preflight handling."""
        response = client.options(
            "/api/projects",
            headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "GET"},
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_crawl_config_lifecycle(self, client, extractor):
        """Test create, run, update and delete of a crawl config."""
        created = client.post(
            "/api/crawl-configs",
            json={"name": "采购网", "url": "https://a.cn", "keywords": ["软件", " "]},
        )
        assert created.status_code == 201
        config = created.json()["data"]
        assert config["keywords"] == ["软件"]

        extractor.page_tenders = [make_tender("软件项目")]
        run = client.post(f"/api/crawl-configs/{config['id']}/run").json()["data"]
        assert run["found"] == 1
        assert run["path"] == "scrape"

        fetched = client.get(f"/api/crawl-configs/{config['id']}").json()["data"]
        assert fetched["last_crawled_at"] is not None

        updated = client.put(
            f"/api/crawl-configs/{config['id']}",
            json={"name": "采购网2", "url": "https://a.cn", "enabled": False},
        ).json()["data"]
        assert updated["enabled"] is False

        assert client.post("/api/crawl-configs/run").json()["data"] == []
        assert client.delete(f"/api/crawl-configs/{config['id']}").status_code == 200
        assert client.get(f"/api/crawl-configs/{config['id']}").status_code == 404

    def test_run_unknown_config(self, client):
        """Test running an unknown config gives 404."""
        assert client.post("/api/crawl-configs/999/run").status_code == 404


class TestDashboard:
    """Tests for the dashboard and health routes."""

    def test_dashboard(self, client):
        """Test counts, upcoming urgency and kanban columns."""
        data = client.get("/api/dashboard").json()["data"]
        assert data["stats"] == {"total": 5, "active": 4, "upcoming": 2}
        assert [(r["project"]["id"], r["daysLeft"], r["urgency"]) for r in data["upcoming"]] == [
            ("4", 3, "urgent"),
            ("2", 4, "normal"),
        ]
        assert list(data["kanban"]) == ["pending", "designing", "quoting", "submitted"]
        assert [p["id"] for p in data["kanban"]["pending"]] == ["3", "4"]

    def test_healthz(self, client):
        """Test the health check."""
        assert client.get("/healthz").json() == {"status": "ok"}
