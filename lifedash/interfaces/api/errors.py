"""Mapping of service results and exceptions to HTTP responses.

Every error body has the same shape: ``{"message": "..."}``.
"""

import logging
from typing import TypeVar

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lifedash.domain.shared import DomainError, DomainFailure, ErrorKind, Ok, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
}


def unwrap(result: Result[T, DomainError]) -> T:
    """Return the Ok value or raise the matching ``HTTPException``."""
    if isinstance(result, Ok):
        return result.value
    raise HTTPException(status_code=STATUS_BY_KIND[result.error.kind], detail=result.error.message)


def describe_validation_errors(errors: list[dict]) -> str:
    """One line per problem, e.g. ``title: String should have at least 1 character``."""
    parts = []
    for error in errors:
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


def install_error_handlers(app: FastAPI) -> None:
    """Register the handlers that produce ``{"message": ...}`` bodies."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"message": describe_validation_errors(list(exc.errors()))},
        )

    @app.exception_handler(DomainFailure)
    async def domain_failure(request: Request, exc: DomainFailure) -> JSONResponse:
        return JSONResponse(
            status_code=STATUS_BY_KIND[exc.error.kind],
            content={"message": exc.error.message},
        )

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
