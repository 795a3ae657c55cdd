"""Tender triage: confirm a candidate into a project, or ignore it."""

import uuid
from datetime import date, datetime
from typing import Callable, Dict, List, Optional

from bidsmart.core.constants import (
    PLACEHOLDER_BUDGET,
    PLACEHOLDER_CLIENT,
    PLACEHOLDER_INDUSTRY,
    PROJECT_SOURCE_CRAWLED,
    PROJECT_STATUS_PENDING,
    TENDER_STATUS_CONFIRMED,
    TENDER_STATUS_IGNORED,
    TENDER_STATUS_NEW,
)
from bidsmart.core.deadlines import parse_deadline
from bidsmart.core.exceptions import TriageError
from bidsmart.core.logging import get_logger
from bidsmart.db.models import Tender
from bidsmart.repositories.projects import ProjectRepository
from bidsmart.repositories.tenders import TenderRepository
from bidsmart.schemas import BidProject

logger = get_logger("services.triage")


def project_from_tender(tender: Tender, today: date) -> BidProject:
    """Build a pending project from a tender, filling gaps with placeholders."""
    deadline = parse_deadline(tender.deadline)
    if deadline is None:
        if tender.deadline:
            logger.warning("Tender %s: unreadable deadline '%s', using today", tender.id, tender.deadline)
        deadline = today

    return BidProject(
        id=uuid.uuid4().hex,
        name=tender.title,
        client=tender.client or PLACEHOLDER_CLIENT,
        industry=tender.industry or PLACEHOLDER_INDUSTRY,
        budget=tender.budget or PLACEHOLDER_BUDGET,
        deadline=deadline,
        status=PROJECT_STATUS_PENDING,
        source=PROJECT_SOURCE_CRAWLED,
        requirements=tender.requirements or "",
        created_at=today,
        updated_at=today,
    )


class TriageService:
    """Human review step between ingestion and the project pipeline."""

    def __init__(
        self,
        tenders: TenderRepository,
        projects: ProjectRepository,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._tenders = tenders
        self._projects = projects
        self._clock = clock

    def confirm(self, tender_id: int) -> Optional[BidProject]:
        """Turn a tender into a tracked project.

        Confirming an already confirmed tender returns the project created
        the first time instead of creating another one.

        Args:
            tender_id: Tender id

        Returns:
            The project, or None if the tender does not exist

        Raises:
            TriageError: If the tender was ignored
        """
        tender = self._tenders.get(tender_id)
        if tender is None:
            return None

        if tender.status == TENDER_STATUS_IGNORED:
            raise TriageError(f"Tender {tender_id} was ignored and cannot be confirmed")

        if tender.status == TENDER_STATUS_CONFIRMED and tender.project_id:
            existing = self._projects.get_by_id(tender.project_id)
            if existing is not None:
                logger.info("Tender %s already confirmed as project %s", tender_id, existing.id)
                return existing

        project = project_from_tender(tender, self._clock().date())
        self._projects.save(project)
        self._tenders.set_status(tender_id, TENDER_STATUS_CONFIRMED, project_id=project.id)
        logger.info("Confirmed tender %s -> project %s", tender_id, project.id)
        return project

    def ignore(self, tender_id: int) -> Optional[Tender]:
        """Mark a new tender as ignored.

        Returns:
            The tender, or None if it does not exist

        Raises:
            TriageError: If the tender was already confirmed
        """
        tender = self._tenders.get(tender_id)
        if tender is None:
            return None
        if tender.status == TENDER_STATUS_IGNORED:
            return tender
        if tender.status != TENDER_STATUS_NEW:
            raise TriageError(f"Tender {tender_id} is {tender.status} and cannot be ignored")

        logger.info("Ignored tender %s", tender_id)
        return self._tenders.set_status(tender_id, TENDER_STATUS_IGNORED)

    def partition(self) -> Dict[str, List[Tender]]:
        """New and confirmed tenders; ignored ones are hidden."""
        return {
            TENDER_STATUS_NEW: self._tenders.list_by_status(TENDER_STATUS_NEW),
            TENDER_STATUS_CONFIRMED: self._tenders.list_by_status(TENDER_STATUS_CONFIRMED),
        }
