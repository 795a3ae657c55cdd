"""Bid project repository on top of the key-value store."""

import uuid
from datetime import date, datetime
from typing import Collection, List, Mapping, Optional

from bidsmart.core.constants import (
    CLOSED_STATUSES,
    PROJECT_SOURCE_MANUAL,
    PROJECT_STATUS_PENDING,
    STORAGE_KEY_PROJECTS,
)
from bidsmart.core.deadlines import Clock, days_until
from bidsmart.core.exceptions import StatusTransitionError
from bidsmart.core.logging import get_logger
from bidsmart.schemas import BidProject, ProjectStatus
from bidsmart.storage.demo_data import DEMO_PROJECTS
from bidsmart.storage.store import LoadState, StoreAdapter

logger = get_logger("repositories.projects")


class ProjectRepository:
    """CRUD and queries over bid projects.

    Every call reads the whole list from the store and every mutation
    writes it back.
    """

    def __init__(
        self,
        store: StoreAdapter,
        clock: Clock = datetime.now,
        key: str = STORAGE_KEY_PROJECTS,
        seed: Optional[List[BidProject]] = None,
    ):
        self._store = store
        self._clock = clock
        self._key = key
        self._seed = DEMO_PROJECTS if seed is None else seed
        self._last_state: Optional[LoadState] = None

    def _today(self) -> date:
        return self._clock().date()

    def get_all(self) -> List[BidProject]:
        """All projects in insertion order (demo set on first run)."""
        result = self._store.load_result(self._key, self._seed, BidProject)
        self._last_state = result.state
        return result.items

    def load_state(self) -> Optional[LoadState]:
        """How the most recent read obtained its data."""
        return self._last_state

    def get_by_id(self, project_id: str) -> Optional[BidProject]:
        for project in self.get_all():
            if project.id == project_id:
                return project
        return None

    def save(self, project: BidProject) -> BidProject:
        """Insert or replace a project by id."""
        projects = self.get_all()
        for idx, existing in enumerate(projects):
            if existing.id == project.id:
                projects[idx] = project
                break
        else:
            projects.append(project)
        self._store.save(self._key, projects)
        return project

    def update_status(
        self,
        project_id: str,
        status: ProjectStatus,
        transitions: Optional[Mapping[str, Collection[str]]] = None,
    ) -> Optional[BidProject]:
        """Set a project's status and touch updatedAt.

        Args:
            project_id: Project id
            status: New status
            transitions: Optional map of allowed moves (current -> targets);
                without it any status is accepted

        Returns:
            Updated project, or None if the id is unknown

        Raises:
            StatusTransitionError: If transitions is given and forbids the move
        """
        project = self.get_by_id(project_id)
        if project is None:
            logger.debug("update_status: project %s not found", project_id)
            return None

        if transitions is not None and status not in transitions.get(project.status, ()):
            raise StatusTransitionError(
                f"Cannot move project {project_id} from {project.status} to {status}",
                current=project.status,
                requested=status,
            )

        today = self._today()
        updated = project.model_copy(
            update={"status": status, "updated_at": max(today, project.created_at)}
        )
        self.save(updated)
        logger.info("Project %s: %s -> %s", project_id, project.status, status)
        return updated

    def get_by_status(self, status: ProjectStatus) -> List[BidProject]:
        return [p for p in self.get_all() if p.status == status]

    def get_upcoming(self, days: int = 7) -> List[BidProject]:
        """Open projects whose deadline is at most ``days`` days away.

        Expired deadlines are included. Stored order is kept.
        """
        now = self._clock()
        return [
            p for p in self.get_all()
            if p.status not in CLOSED_STATUSES and days_until(p.deadline, now) <= days
        ]

    def create_manual(
        self,
        name: str,
        deadline: date,
        client: str = "",
        industry: str = "",
        budget: str = "",
        requirements: str = "",
    ) -> BidProject:
        """Create a manually entered project in the first pipeline step."""
        today = self._today()
        project = BidProject(
            id=uuid.uuid4().hex,
            name=name,
            client=client,
            industry=industry,
            budget=budget,
            deadline=deadline,
            status=PROJECT_STATUS_PENDING,
            source=PROJECT_SOURCE_MANUAL,
            requirements=requirements,
            created_at=today,
            updated_at=today,
        )
        logger.info("Created manual project %s: %s", project.id, name[:50])
        return self.save(project)
