"""Tests for the project pipeline, urgency and archival."""

from datetime import date, datetime

import pytest

from bidsmart.core.deadlines import days_until, parse_deadline
from bidsmart.core.exceptions import NotFoundError, StatusTransitionError
from bidsmart.services.status_service import StatusService, next_step, progress_percent, urgency


@pytest.fixture
def status_service(projects, cases, clock):
    return StatusService(projects, cases, clock=clock)


class TestAdvance:
    """Tests for advance_to_next."""

    def test_pending_moves_to_designing(self, status_service, projects):
        """Test one step forward with updatedAt set to the call date."""
        project = status_service.advance_to_next("3")
        assert project.status == "designing"
        assert project.updated_at == date(2026, 2, 25)
        assert projects.get_by_id("3").status == "designing"

    def test_walks_whole_pipeline(self, status_service):
        """Test repeated advances stop at submitted."""
        seen = [status_service.advance_to_next("4").status for _ in range(5)]
        assert seen == ["designing", "quoting", "submitted", "submitted", "submitted"]

    def test_submitted_is_noop(self, status_service, projects, slot_backend):
        """Test a submitted project is left untouched."""
        projects.save(projects.get_by_id("5"))
        before = slot_backend.read("bidsmart_projects")
        project = status_service.advance_to_next("5")
        assert project.status == "submitted"
        assert slot_backend.read("bidsmart_projects") == before

    def test_archived_is_noop(self, status_service, projects):
        """Test archived projects do not move."""
        projects.update_status("5", "archived")
        assert status_service.advance_to_next("5").status == "archived"

    def test_unknown_id(self, status_service):
        """Test an unknown project returns None."""
        assert status_service.advance_to_next("missing") is None

    def test_next_step(self):
        """Test the step order."""
        assert next_step("pending") == "designing"
        assert next_step("quoting") == "submitted"
        assert next_step("submitted") is None
        assert next_step("archived") is None


class TestProgressAndUrgency:
    """Tests for display helpers."""

    @pytest.mark.parametrize(
        "status,expected",
        [("pending", 25.0), ("designing", 50.0), ("quoting", 75.0), ("submitted", 100.0)],
    )
    def test_progress_percent(self, status, expected):
        """Test progress per pipeline step."""
        assert progress_percent(status) == expected

    def test_days_until_rounds_up(self):
        """Test partial days count as a whole day."""
        now = datetime(2026, 2, 25, 10, 0)
        assert days_until(date(2026, 2, 28), now) == 3
        assert days_until(date(2026, 2, 26), now) == 1
        assert days_until(date(2026, 2, 25), now) == 0
        assert days_until(date(2026, 2, 20), now) == -5

    def test_days_until_at_midnight(self):
        """Test exact midnight gives whole days."""
        assert days_until(date(2026, 3, 1), datetime(2026, 2, 25)) == 4

    def test_urgency_tiers(self):
        """Test expired, urgent and normal boundaries."""
        now = datetime(2026, 2, 25, 10, 0)
        assert urgency(date(2026, 2, 25), now) == "expired"
        assert urgency(date(2026, 2, 26), now) == "urgent"
        assert urgency(date(2026, 2, 28), now) == "urgent"
        assert urgency(date(2026, 3, 1), now) == "normal"

    def test_parse_deadline(self):
        """Test deadline parsing from model text."""
        assert parse_deadline("2026-03-15") == date(2026, 3, 15)
        assert parse_deadline("2026/03/15 17:00") == date(2026, 3, 15)
        assert parse_deadline("2026.03.15") == date(2026, 3, 15)
        assert parse_deadline("三月底") is None
        assert parse_deadline(None) is None


class TestArchive:
    """Tests for archiving submitted projects."""

    def test_archive_submitted(self, status_service, projects, cases):
        """Test archival writes a case and closes the project."""
        record = status_service.archive("5", result="won", final_quote=4800000, design_summary="双机热备")
        assert record.project_id == "5"
        assert record.scale == "400-600万"
        assert record.archived_at == date(2026, 2, 25)
        assert projects.get_by_id("5").status == "archived"
        assert [c.id for c in cases.get_all()] == [record.id]

    def test_archive_explicit_scale(self, status_service):
        """Test an explicit scale overrides the budget."""
        assert status_service.archive("5", scale="大型").scale == "大型"

    def test_archive_requires_submitted(self, status_service, cases):
        """Test archiving an open project is rejected."""
        with pytest.raises(StatusTransitionError):
            status_service.archive("3")
        assert cases.get_all() == []

    def test_archive_unknown(self, status_service):
        """Test archiving an unknown project raises NotFoundError."""
        with pytest.raises(NotFoundError):
            status_service.archive("missing")
