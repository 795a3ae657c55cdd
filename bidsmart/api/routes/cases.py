from typing import Optional

from fastapi import APIRouter, Depends

from bidsmart.api.deps import container_from_request, success_envelope
from bidsmart.core.container import ApplicationContainer

router = APIRouter(prefix="/api/cases", tags=["cases"])


@router.get("")
def list_cases(
    project_id: Optional[str] = None,
    container: ApplicationContainer = Depends(container_from_request),
):
    if project_id:
        cases = container.cases.get_by_project(project_id)
    else:
        cases = container.cases.get_all()
    return success_envelope([c.to_document() for c in cases])
