"""
Error taxonomy and the uniform response envelope.

Every handler answers with the same envelope.  Successful calls return
``{"success": true, "data": ..., "message": ...}`` (built with
:func:`success`); failures return an HTTP status and
``{"error": <text>, "details": [...]}``.

Services raise the exceptions defined here instead of returning error
values.  :func:`register_exception_handlers` installs the translation
from exception to envelope on the FastAPI application so no error
escapes a resource handler:

* validation failures (request body/query or a pydantic model built
  inside a service) → 400 with one detail entry per violated field
* :class:`ConflictError` → 400
* :class:`InvalidCredentialsError` → 401
* :class:`ProtectedResourceError` → 403
* :class:`NotFoundError` → 404
* ``HTTPException`` raised by an endpoint → its own status
* anything else → 500 with a generic message; the traceback is logged
  but never sent to the caller.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INVALID_DATA_MESSAGE = "Datos inválidos"
INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


class StoreError(Exception):
    """Base class for errors raised by the storage and service layers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(StoreError):
    """A referenced id is absent from the relevant store."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(StoreError):
    """The payload is well formed but clashes with stored data (e.g. duplicate email)."""

    status_code = status.HTTP_400_BAD_REQUEST


class ProtectedResourceError(StoreError):
    """An attempt to delete a record that is permanently protected."""

    status_code = status.HTTP_403_FORBIDDEN


class InvalidCredentialsError(StoreError):
    """Email/password pair does not match any user."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Credenciales inválidas") -> None:
        super().__init__(message)


def success(data: Any = None, message: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    """Build the success envelope.

    ``data`` and ``message`` are omitted when ``None``; additional keyword
    arguments (``pagination``, ``deletedCount``...) are merged in as is.
    """
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    body.update(extra)
    return body


def error_body(message: str, details: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": message}
    if details:
        body["details"] = details
    return body


def field_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten pydantic error dicts into ``{"field", "message", "type"}`` entries.

    The ``body``/``query`` location prefix FastAPI adds is dropped so
    ``("body", "results", 0, "status")`` becomes ``"results.0.status"``.
    """
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in {"body", "query", "path"}:
            loc = loc[1:]
        details.append(
            {
                "field": ".".join(loc),
                "message": err.get("msg", ""),
                "type": err.get("type", ""),
            }
        )
    return details


async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.details))


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = field_errors(exc.errors())
    logger.info("Rejected %s %s: %d invalid field(s)", request.method, request.url.path, len(details))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(INVALID_DATA_MESSAGE, details),
    )


async def _model_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    details = field_errors(exc.errors())
    logger.info("Rejected %s %s: %d invalid field(s)", request.method, request.url.path, len(details))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(INVALID_DATA_MESSAGE, details),
    )


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(INTERNAL_ERROR_MESSAGE),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the exception → envelope translation on ``app``."""
    app.add_exception_handler(StoreError, _store_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(ValidationError, _model_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
