from fastapi import APIRouter, Depends

from bidsmart.api.deps import container_from_request, error_response, success_envelope
from bidsmart.core.container import ApplicationContainer
from bidsmart.core.exceptions import NotFoundError
from bidsmart.schemas import AdHocSearchRequest, TenderOut
from bidsmart.services.ingestion_service import IngestionOutcome

router = APIRouter(prefix="/api/tenders", tags=["tenders"])


def tender_view(tender) -> dict:
    return TenderOut.model_validate(tender).model_dump(mode="json")


def outcome_response(outcome: IngestionOutcome):
    """Failed runs answer 502; "nothing found" is still a success."""
    if not outcome.success:
        return error_response(outcome.error or "Ingestion failed", 502)
    return success_envelope({
        "found": outcome.found,
        "message": outcome.message,
        "path": outcome.path,
        "crawlConfigId": outcome.crawl_config_id,
        "tenders": [tender_view(t) for t in outcome.tenders],
    })


@router.get("")
def list_tenders(container: ApplicationContainer = Depends(container_from_request)):
    groups = container.triage_service.partition()
    return success_envelope({
        status: [tender_view(t) for t in tenders] for status, tenders in groups.items()
    })


@router.post("/search")
async def search_tenders(
    payload: AdHocSearchRequest,
    container: ApplicationContainer = Depends(container_from_request),
):
    outcome = await container.ingestion_service.search(payload.query)
    return outcome_response(outcome)


@router.post("/{tender_id}/confirm")
def confirm_tender(
    tender_id: int,
    container: ApplicationContainer = Depends(container_from_request),
):
    project = container.triage_service.confirm(tender_id)
    if project is None:
        raise NotFoundError(f"Tender {tender_id} not found")
    return success_envelope(project.to_document())


@router.post("/{tender_id}/ignore")
def ignore_tender(
    tender_id: int,
    container: ApplicationContainer = Depends(container_from_request),
):
    tender = container.triage_service.ignore(tender_id)
    if tender is None:
        raise NotFoundError(f"Tender {tender_id} not found")
    return success_envelope(tender_view(tender))
