# venue_booking/routes/errors.py
"""
Error envelope for the HTTP surface.

Domain errors carry an ``ErrorKind``; the status code is a plain lookup on
that kind. Persistence failures become a generic 500 so database error text
never reaches clients.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..core.enums import ErrorKind
from ..core.exceptions import DomainException, RepositoryException

logger = logging.getLogger(__name__)

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CAPACITY_EXCEEDED: 422,
    ErrorKind.SLOT_CONFLICT: 409,
    ErrorKind.INVALID_STATE: 409,
}


def status_for_kind(kind: ErrorKind) -> int:
    return STATUS_BY_KIND.get(kind, 400)


def _title_from_status(status_code: int) -> str:
    mapping = {
        400: "Bad Request",
        404: "Not Found",
        409: "Conflict",
        422: "Unprocessable Entity",
        500: "Internal Server Error",
    }
    return mapping.get(status_code, "Error")


def _problem(
    *,
    status: int,
    detail: str,
    instance: str = "",
    code: Optional[str] = None,
    errors: Optional[Any] = None,
) -> Dict[str, Any]:
    problem: Dict[str, Any] = {
        "type": "about:blank",
        "title": _title_from_status(status),
        "status": status,
        "detail": detail,
        "instance": instance,
    }
    if code:
        problem["code"] = code
    if errors:
        problem["errors"] = errors
    return problem


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
        status_code = status_for_kind(exc.kind)
        body = _problem(
            status=status_code,
            detail=exc.message,
            instance=request.url.path,
            code=exc.code,
            errors=exc.details,
        )
        return JSONResponse(status_code=status_code, content=jsonable_encoder(body))

    @app.exception_handler(RepositoryException)
    async def repository_exception_handler(
        request: Request, exc: RepositoryException
    ) -> JSONResponse:
        logger.error(f"Persistence failure on {request.method} {request.url.path}: {exc}")
        body = _problem(
            status=500,
            detail="The request could not be completed",
            instance=request.url.path,
            code="PERSISTENCE_ERROR",
        )
        return JSONResponse(status_code=500, content=body)
