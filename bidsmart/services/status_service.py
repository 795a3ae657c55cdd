"""Project pipeline: advance through the fixed steps, deadline urgency, archival."""

import uuid
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from bidsmart.core.constants import (
    PIPELINE_STEPS,
    PROJECT_STATUS_ARCHIVED,
    PROJECT_STATUS_SUBMITTED,
    URGENCY_EXPIRED,
    URGENCY_NORMAL,
    URGENCY_URGENT,
)
from bidsmart.core.deadlines import days_until
from bidsmart.core.exceptions import NotFoundError, StatusTransitionError
from bidsmart.core.logging import get_logger
from bidsmart.repositories.cases import CaseRepository
from bidsmart.repositories.projects import ProjectRepository
from bidsmart.schemas import BidProject, CaseRecord, CaseResult

logger = get_logger("services.status")


def next_step(status: str, steps: Sequence[str] = PIPELINE_STEPS) -> Optional[str]:
    """Step after ``status``, or None at the end or off the pipeline."""
    if status not in steps:
        return None
    idx = steps.index(status)
    if idx + 1 >= len(steps):
        return None
    return steps[idx + 1]


def progress_percent(status: str, steps: Sequence[str] = PIPELINE_STEPS) -> float:
    """Completion percentage shown for a status."""
    if status == PROJECT_STATUS_SUBMITTED:
        return 100.0
    if status not in steps:
        return 0.0
    return (steps.index(status) + 1) / len(steps) * 100


def urgency(deadline: date, now: datetime, urgent_days: int = 3) -> str:
    """Classify a deadline as expired, urgent or normal."""
    days = days_until(deadline, now)
    if days <= 0:
        return URGENCY_EXPIRED
    if days <= urgent_days:
        return URGENCY_URGENT
    return URGENCY_NORMAL


class StatusService:
    """Moves projects forward through the pipeline and archives them."""

    def __init__(
        self,
        projects: ProjectRepository,
        cases: CaseRepository,
        clock: Callable[[], datetime] = datetime.now,
        steps: Sequence[str] = PIPELINE_STEPS,
    ):
        self._projects = projects
        self._cases = cases
        self._clock = clock
        self._steps = tuple(steps)

    def advance_to_next(self, project_id: str) -> Optional[BidProject]:
        """Move a project to the next pipeline step.

        No-op when the project is unknown or already at the last step.

        Returns:
            The project after the call, or None if it does not exist
        """
        project = self._projects.get_by_id(project_id)
        if project is None:
            return None

        target = next_step(project.status, self._steps)
        if target is None:
            logger.debug("Project %s at %s: nothing to advance", project_id, project.status)
            return project

        return self._projects.update_status(project_id, target)

    def archive(
        self,
        project_id: str,
        result: CaseResult = "unknown",
        final_quote: float = 0.0,
        design_summary: str = "",
        scale: Optional[str] = None,
    ) -> CaseRecord:
        """Archive a submitted project and record its outcome.

        Args:
            project_id: Project id
            result: won / lost / unknown
            final_quote: Final quoted amount
            design_summary: Short summary of the proposed solution
            scale: Project scale (defaults to the project's budget)

        Returns:
            The new CaseRecord

        Raises:
            NotFoundError: If the project does not exist
            StatusTransitionError: If the project is not submitted
        """
        project = self._projects.get_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        if project.status != PROJECT_STATUS_SUBMITTED:
            raise StatusTransitionError(
                f"Only submitted projects can be archived (project {project_id} is {project.status})",
                current=project.status,
                requested=PROJECT_STATUS_ARCHIVED,
            )

        record = CaseRecord(
            id=uuid.uuid4().hex,
            project_id=project.id,
            name=project.name,
            industry=project.industry,
            scale=scale or project.budget,
            final_quote=final_quote,
            result=result,
            design_summary=design_summary,
            archived_at=self._clock().date(),
        )
        self._cases.save(record)
        self._projects.update_status(project_id, PROJECT_STATUS_ARCHIVED)
        return record
