"""Shared helpers for the route modules."""

from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from bidsmart.core.container import ApplicationContainer


def container_from_request(request: Request) -> ApplicationContainer:
    """Container attached to the app by ``create_app``."""
    return request.app.state.container


def success_envelope(data: Any) -> Dict[str, Any]:
    return {"success": True, "data": data}


def error_response(
    message: str,
    status_code: int,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )
