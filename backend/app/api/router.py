"""Top-level API router aggregation."""

from fastapi import APIRouter

from . import report, status

# Station uploads go to the fixed vendor path, outside /api
report_router = report.router

api_router = APIRouter(prefix="/api")

api_router.include_router(status.router)
