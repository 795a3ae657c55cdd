from fastapi import APIRouter, Depends

from bidsmart.api.deps import container_from_request, success_envelope
from bidsmart.api.routes.tenders import outcome_response
from bidsmart.core.container import ApplicationContainer
from bidsmart.core.exceptions import NotFoundError
from bidsmart.schemas import CrawlConfigIn, CrawlConfigOut

router = APIRouter(prefix="/api/crawl-configs", tags=["crawl-configs"])


def _config_view(config) -> dict:
    return CrawlConfigOut.model_validate(config).model_dump(mode="json")


@router.get("")
def list_configs(container: ApplicationContainer = Depends(container_from_request)):
    return success_envelope([_config_view(c) for c in container.crawl_configs.list()])


@router.post("", status_code=201)
def create_config(
    payload: CrawlConfigIn,
    container: ApplicationContainer = Depends(container_from_request),
):
    return success_envelope(_config_view(container.crawl_configs.create(payload)))


@router.post("/run")
async def run_enabled_configs(container: ApplicationContainer = Depends(container_from_request)):
    outcomes = await container.ingestion_service.crawl_enabled()
    return success_envelope([
        {
            "crawlConfigId": o.crawl_config_id,
            "success": o.success,
            "found": o.found,
            "message": o.message,
        }
        for o in outcomes
    ])


@router.get("/{config_id}")
def get_config(
    config_id: int,
    container: ApplicationContainer = Depends(container_from_request),
):
    config = container.crawl_configs.get(config_id)
    if config is None:
        raise NotFoundError(f"Crawl config {config_id} not found")
    return success_envelope(_config_view(config))


@router.put("/{config_id}")
def update_config(
    config_id: int,
    payload: CrawlConfigIn,
    container: ApplicationContainer = Depends(container_from_request),
):
    config = container.crawl_configs.update(config_id, payload)
    if config is None:
        raise NotFoundError(f"Crawl config {config_id} not found")
    return success_envelope(_config_view(config))


@router.delete("/{config_id}")
def delete_config(
    config_id: int,
    container: ApplicationContainer = Depends(container_from_request),
):
    if not container.crawl_configs.delete(config_id):
        raise NotFoundError(f"Crawl config {config_id} not found")
    return success_envelope({"id": config_id})


@router.post("/{config_id}/run")
async def run_config(
    config_id: int,
    container: ApplicationContainer = Depends(container_from_request),
):
    outcome = await container.ingestion_service.crawl(config_id)
    return outcome_response(outcome)
