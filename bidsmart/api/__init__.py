"""HTTP interface - FastAPI application and routers."""

from bidsmart.api.main import create_app

__all__ = ["create_app"]
