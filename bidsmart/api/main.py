"""FastAPI application factory."""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from bidsmart.api.deps import error_response
from bidsmart.api.routes import cases, crawl_configs, dashboard, functions, projects, tenders
from bidsmart.core.container import ApplicationContainer, get_container
from bidsmart.core.exceptions import BidSmartError
from bidsmart.core.logging import get_logger

logger = get_logger("api.main")

FUNCTIONS_PREFIX = "/functions/"


class AppCORSMiddleware(CORSMiddleware):
    """CORS for the /api routes.

    The function endpoints answer their own preflights with 204 and fixed
    headers, so their requests go straight through.
    """

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and scope["path"].startswith(FUNCTIONS_PREFIX):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


def create_app(container: Optional[ApplicationContainer] = None) -> FastAPI:
    """Build the API application.

    Args:
        container: Optional container (defaults to the global one)

    Returns:
        FastAPI app with all routers mounted
    """
    container = container or get_container()
    app = FastAPI(title="BidSmart API", version="0.1.0")
    app.state.container = container

    allow_origins = [
        x.strip() for x in container.settings.cors_allow_origins.split(",") if x.strip()
    ]
    if allow_origins:
        app.add_middleware(
            AppCORSMiddleware,
            allow_origins=allow_origins,
            allow_credentials="*" not in allow_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(BidSmartError)
    async def handle_domain_error(request: Request, exc: BidSmartError):
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
        return error_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        messages = [f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()]
        return error_response("; ".join(messages) or "Invalid request", 422)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return error_response("Resource not found", 404)
        return error_response(str(exc.detail), exc.status_code)

    app.include_router(functions.router)
    app.include_router(projects.router)
    app.include_router(cases.router)
    app.include_router(tenders.router)
    app.include_router(crawl_configs.router)
    app.include_router(dashboard.router)
    return app
