"""Service layer - business logic encapsulation."""

from bidsmart.services.dashboard_service import build_dashboard
from bidsmart.services.ingestion_service import IngestionOutcome, IngestionService
from bidsmart.services.status_service import StatusService, progress_percent, urgency
from bidsmart.services.tender_service import TenderService
from bidsmart.services.triage_service import TriageService

__all__ = [
    "build_dashboard",
    "IngestionOutcome",
    "IngestionService",
    "StatusService",
    "progress_percent",
    "urgency",
    "TenderService",
    "TriageService",
]
