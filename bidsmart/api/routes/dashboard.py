from fastapi import APIRouter, Depends

from bidsmart.api.deps import container_from_request, success_envelope
from bidsmart.core.container import ApplicationContainer
from bidsmart.services.dashboard_service import build_dashboard

router = APIRouter(tags=["dashboard"])


@router.get("/api/dashboard")
def dashboard(container: ApplicationContainer = Depends(container_from_request)):
    data = build_dashboard(
        container.projects,
        upcoming_days=container.settings.upcoming_days,
        urgent_days=container.settings.urgent_days,
        clock=container.clock,
    )
    return success_envelope(data)


@router.get("/healthz")
def healthz():
    return {"status": "ok"}
