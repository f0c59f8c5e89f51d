"""Mapping of domain failures to HTTP responses.

Errors are recovered only here, at the request boundary.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.shared.errors import (
    ConflictError,
    NotFoundError,
    UnauthenticatedError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def _error_body(message: str, details: Optional[List[Dict[str, str]]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": message}
    if details is not None:
        body["details"] = details
    return body


def _request_error_details(exc: RequestValidationError) -> List[Dict[str, str]]:
    details = []
    for err in exc.errors():
        # loc is ("body", "field") or ("path", "id"); keep the field name
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        message = str(err.get("msg", "Invalid value"))
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        details.append({"field": ".".join(loc) or "body", "message": message})
    return details


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    details = [{"field": e.field, "message": e.message} for e in exc.errors]
    return JSONResponse(status_code=400, content=_error_body("Validation failed", details))


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=_error_body("Validation failed", _request_error_details(exc)),
    )


async def handle_unauthenticated(request: Request, exc: UnauthenticatedError) -> JSONResponse:
    return JSONResponse(status_code=401, content=_error_body(exc.reason))


async def handle_unauthorized(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return JSONResponse(status_code=401, content=_error_body(exc.reason))


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=_error_body(f"{exc.entity} not found"))


async def handle_conflict(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(
        status_code=409,
        content=_error_body(str(exc), [{"field": exc.field, "message": "Already exists"}]),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        extra={"path": request.url.path, "method": request.method, "error": str(exc)},
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content=_error_body("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(UnauthenticatedError, handle_unauthenticated)
    app.add_exception_handler(UnauthorizedError, handle_unauthorized)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(ConflictError, handle_conflict)
    app.add_exception_handler(Exception, handle_unexpected)
