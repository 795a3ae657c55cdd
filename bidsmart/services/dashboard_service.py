"""Dashboard aggregates: counts, upcoming deadlines and kanban columns."""

from datetime import datetime
from typing import Any, Callable, Dict, List

from bidsmart.core.constants import CLOSED_STATUSES, PIPELINE_STEPS, STATUS_LABELS, STEP_LABELS
from bidsmart.core.deadlines import days_until
from bidsmart.repositories.projects import ProjectRepository
from bidsmart.schemas import BidProject
from bidsmart.services.status_service import urgency


def build_dashboard(
    projects: ProjectRepository,
    upcoming_days: int = 7,
    urgent_days: int = 3,
    clock: Callable[[], datetime] = datetime.now,
) -> Dict[str, Any]:
    """Summarize all projects for the overview page.

    Returns:
        Dict with stats, upcoming (sorted by days left) and kanban columns
    """
    now = clock()
    all_projects = projects.get_all()
    upcoming = projects.get_upcoming(upcoming_days)

    active = [p for p in all_projects if p.status not in CLOSED_STATUSES]

    upcoming_rows: List[Dict[str, Any]] = []
    for project in upcoming:
        upcoming_rows.append({
            "project": project.to_document(),
            "daysLeft": days_until(project.deadline, now),
            "urgency": urgency(project.deadline, now, urgent_days),
        })
    upcoming_rows.sort(key=lambda row: row["daysLeft"])

    kanban: Dict[str, List[Dict[str, Any]]] = {}
    for status in PIPELINE_STEPS:
        column: List[BidProject] = [p for p in all_projects if p.status == status]
        kanban[status] = [p.to_document() for p in column]

    return {
        "stats": {
            "total": len(all_projects),
            "active": len(active),
            "upcoming": len(upcoming),
        },
        "upcoming": upcoming_rows,
        "kanban": kanban,
        "labels": STATUS_LABELS,
        "stepLabels": STEP_LABELS,
    }
