from __future__ import annotations

import logging
from typing import Any, Dict, cast

from fastapi import Request
from fastapi import HTTPException as FastAPIHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from ...rules.errors import MalformedInput


logger = logging.getLogger(__name__)


def error_envelope(
    *,
    code: str,
    message: str,
    err_type: str,
    request_id: str,
    field_errors: list[dict[str, str]] | None = None,
) -> Dict[str, Any]:
    """Build the JSON body shared by every error response."""
    payload: Dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
            "type": err_type,
            "request_id": request_id,
        }
    }
    if field_errors:
        payload["error"]["field_errors"] = field_errors
    return payload


def _http_error_response(exc: FastAPIHTTPException, request_id: str) -> JSONResponse:
    status_code = exc.status_code
    payload = error_envelope(
        code=_status_to_code(status_code),
        message=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        err_type="client_error" if 400 <= status_code < 500 else "server_error",
        request_id=request_id,
    )
    return JSONResponse(status_code=status_code, content=payload)


def _internal_error_response(request_id: str) -> JSONResponse:
    payload = error_envelope(
        code="internal_error",
        message="Internal Server Error",
        err_type="server_error",
        request_id=request_id,
    )
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "")
    if isinstance(exc, FastAPIHTTPException):
        return _http_error_response(exc, request_id)
    return _internal_error_response(request_id)


async def malformed_input_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a rejected FEN (or other textual input) as a 400 with the bad field."""
    request_id = getattr(request.state, "request_id", "")
    err = cast(MalformedInput, exc)
    logger.info("malformed input", extra={"request_id": request_id, "field": err.field})
    payload = error_envelope(
        code="bad_request",
        message=str(err),
        err_type="client_error",
        request_id=request_id,
        field_errors=[{"field": err.field, "code": "malformed_input", "message": err.message}],
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload)


async def exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "")
    if isinstance(exc, FastAPIHTTPException):
        return _http_error_response(exc, request_id)
    # Anything else, including a failed make/unmake consistency check, is a server fault
    logger.exception("Unhandled exception", extra={"request_id": request_id})
    return _internal_error_response(request_id)


async def request_validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "")
    errors = []
    rve = cast(RequestValidationError, exc)
    for e in rve.errors():
        loc = ".".join(str(p) for p in e.get("loc", []) if p is not None)
        errors.append(
            {
                "field": loc,
                "code": e.get("type", "value_error"),
                "message": e.get("msg", "invalid value"),
            }
        )
    payload = error_envelope(
        code="unprocessable_entity",
        message="Validation error",
        err_type="client_error",
        request_id=request_id,
        field_errors=errors or None,
    )
    return JSONResponse(status_code=422, content=payload)


_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_409_CONFLICT: "conflict",
    422: "unprocessable_entity",
}


def _status_to_code(status_code: int) -> str:
    if status_code in _STATUS_CODES:
        return _STATUS_CODES[status_code]
    if 500 <= status_code < 600:
        return "internal_error"
    return "error"
