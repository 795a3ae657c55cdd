"""Scrape and search endpoints, callable cross-origin from the browser.

Every answer (including errors) carries permissive CORS headers, and
``OPTIONS`` is answered directly with an empty body.
"""

from typing import Type

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from bidsmart.api.deps import container_from_request, error_response
from bidsmart.core.container import ApplicationContainer
from bidsmart.core.exceptions import BidSmartError
from bidsmart.core.logging import get_logger
from bidsmart.schemas import ScrapeRequest, SearchRequest

logger = get_logger("api.functions")

router = APIRouter(prefix="/functions/v1", tags=["functions"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


async def _read_body(request: Request, model: Type[BaseModel]) -> BaseModel:
    return model.model_validate(await request.json())


def _preflight() -> Response:
    return Response(status_code=204, headers=CORS_HEADERS)


@router.options("/firecrawl-scrape")
def firecrawl_scrape_preflight():
    return _preflight()


@router.options("/firecrawl-search")
def firecrawl_search_preflight():
    return _preflight()


@router.post("/firecrawl-scrape")
async def firecrawl_scrape(
    request: Request,
    container: ApplicationContainer = Depends(container_from_request),
):
    try:
        payload = await _read_body(request, ScrapeRequest)
    except (ValueError, ValidationError) as e:
        logger.error("Error scraping: %s", e)
        return error_response(str(e), 500, headers=CORS_HEADERS)

    if not payload.url:
        return error_response("URL is required", 400, headers=CORS_HEADERS)

    try:
        result = await container.tender_service.scrape(payload.url, payload.keywords)
    except BidSmartError as e:
        logger.error("Error scraping: %s", e.message)
        return error_response(e.message, e.status_code, headers=CORS_HEADERS)

    return JSONResponse(
        status_code=200 if result.success else result.status_code,
        content=result.to_response(),
        headers=CORS_HEADERS,
    )


@router.post("/firecrawl-search")
async def firecrawl_search(
    request: Request,
    container: ApplicationContainer = Depends(container_from_request),
):
    try:
        payload = await _read_body(request, SearchRequest)
    except (ValueError, ValidationError) as e:
        logger.error("Error searching: %s", e)
        return error_response(str(e), 500, headers=CORS_HEADERS)

    if not payload.query:
        return error_response("Search query is required", 400, headers=CORS_HEADERS)

    try:
        result = await container.tender_service.search(
            payload.query, payload.keywords, payload.limit
        )
    except BidSmartError as e:
        logger.error("Error searching: %s", e.message)
        return error_response(e.message, e.status_code, headers=CORS_HEADERS)

    return JSONResponse(
        status_code=200 if result.success else result.status_code,
        content=result.to_response(),
        headers=CORS_HEADERS,
    )
