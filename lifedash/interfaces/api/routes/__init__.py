"""API routers, mounted under ``/api``."""

from fastapi import APIRouter

from lifedash import __version__
from lifedash.interfaces.api.routes import projects, records, today
from lifedash.interfaces.api.schemas import ErrorResponse, HealthResponse

router = APIRouter(
    prefix="/api",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        404: {"model": ErrorResponse, "description": "Record not found"},
    },
)
router.include_router(projects.router)
router.include_router(today.router)
for record_routes in records.routers:
    router.include_router(record_routes)


@router.get("/health", response_model=HealthResponse, tags=["service"])
def health():
    return HealthResponse(status="ok", version=__version__)


__all__ = ["router"]
