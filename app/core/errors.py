# app/core/errors.py
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

log = logging.getLogger("app.errors")


def _ensure_trace_id(request: Request) -> str:
    """
    Return the trace_id for this request: request.state (set by the logging
    middleware), then the X-Request-ID header, else a fresh one.
    """
    val = getattr(request.state, "trace_id", None)
    if val:
        return str(val)

    new_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    request.state.trace_id = new_id
    return new_id


def _payload(
    *,
    message: str,
    typ: str,
    status: int,
    trace_id: str,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "ok": False,
        "error": {
            "type": typ,
            "message": message,
            "status": status,
            "trace_id": trace_id,
        },
    }
    if details is not None:
        body["error"]["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Registers consistent JSON error handlers.
    Every error response carries an X-Request-ID header.
    """

    @app.exception_handler(HTTPException)
    async def http_exc_handler(request: Request, exc: HTTPException):
        trace_id = _ensure_trace_id(request)
        status_code = int(exc.status_code)
        # detail may be a plain message or a dict with "message" + extra keys
        if isinstance(exc.detail, dict):
            message = str(exc.detail.get("message") or "HTTP error")
            details = exc.detail
        else:
            message = str(exc.detail)
            details = None

        headers = dict(exc.headers or {})
        headers["X-Request-ID"] = trace_id

        level = logging.ERROR if status_code >= 500 else logging.WARNING
        log.log(
            level,
            "HTTPException %s %s -> %s | trace_id=%s | detail=%r",
            request.method,
            request.url.path,
            status_code,
            trace_id,
            exc.detail,
        )

        return JSONResponse(
            status_code=status_code,
            headers=headers,
            content=_payload(
                message=message,
                typ="http_error",
                status=status_code,
                trace_id=trace_id,
                details=details,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):
        trace_id = _ensure_trace_id(request)
        errors = jsonable_encoder(exc.errors())
        log.warning(
            "ValidationError %s %s -> 422 | trace_id=%s | errors=%s",
            request.method,
            request.url.path,
            trace_id,
            errors,
        )
        return JSONResponse(
            status_code=422,
            headers={"X-Request-ID": trace_id},
            content=_payload(
                message="Validation failed.",
                typ="validation_error",
                status=422,
                trace_id=trace_id,
                details=errors,
            ),
        )

    @app.exception_handler(SQLAlchemyError)
    async def record_store_exc_handler(request: Request, exc: SQLAlchemyError):
        # Store failures are opaque to callers
        trace_id = _ensure_trace_id(request)
        log.exception(
            "Record store error %s %s -> 503 | trace_id=%s",
            request.method,
            request.url.path,
            trace_id,
        )
        return JSONResponse(
            status_code=503,
            headers={"X-Request-ID": trace_id},
            content=_payload(
                message="Record store unavailable.",
                typ="record_store_unavailable",
                status=503,
                trace_id=trace_id,
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exc_handler(request: Request, exc: Exception):
        trace_id = _ensure_trace_id(request)
        # Full traceback to server logs; generic message to client
        log.exception(
            "Unhandled exception %s %s -> 500 | trace_id=%s",
            request.method,
            request.url.path,
            trace_id,
        )
        return JSONResponse(
            status_code=500,
            headers={"X-Request-ID": trace_id},
            content=_payload(
                message="Internal server error.",
                typ="internal_error",
                status=500,
                trace_id=trace_id,
            ),
        )
