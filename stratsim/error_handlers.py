"""
Global error handlers for the FastAPI application.

Engine exceptions propagate out of the routes unchanged and are mapped to
JSON error responses here.
"""
import logging
from typing import Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from stratsim.exceptions import (
    AnalysisAbandoned,
    InvalidInput,
    MalformedAnalysisResponse,
    ProviderUnavailable,
    ScenarioNotFound,
    StratSimError,
    UnknownVariable,
)

logger = logging.getLogger(__name__)

# Renamed from HTTP_422_UNPROCESSABLE_ENTITY in newer Starlette
HTTP_422 = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


STATUS_CODES: Dict[Type[StratSimError], int] = {
    UnknownVariable: HTTP_422,
    InvalidInput: HTTP_422,
    ScenarioNotFound: status.HTTP_404_NOT_FOUND,
    AnalysisAbandoned: status.HTTP_409_CONFLICT,
    MalformedAnalysisResponse: status.HTTP_502_BAD_GATEWAY,
    ProviderUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_code_for(exc: StratSimError) -> int:
    for exc_type, code in STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def stratsim_error_handler(request: Request, exc: StratSimError):
    """Handle engine errors"""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.code} on {request.url.path}: {exc.message}")

    details = dict(exc.details)
    if isinstance(exc, InvalidInput) and exc.field:
        details.setdefault("field", exc.field)
    if isinstance(exc, MalformedAnalysisResponse) and exc.errors:
        details.setdefault("errors", exc.errors)
    if isinstance(exc, ProviderUnavailable):
        details.setdefault("attempts", exc.attempts)

    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
            "details": details,
            "path": str(request.url.path),
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "INTERNAL_SERVER_ERROR",
            "message": "An internal error occurred",
            "path": str(request.url.path),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StratSimError, stratsim_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
