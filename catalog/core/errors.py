"""
Catalog error taxonomy.

Services and repositories raise these; the handlers registered by
`install_error_handlers` turn them into JSON responses. Routers never build
error responses themselves.
"""
from __future__ import annotations
from contextlib import contextmanager
from enum import Enum
from typing import Dict, Iterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import (
    AutoReconnect,
    ConnectionFailure,
    DuplicateKeyError,
    NetworkTimeout,
    PyMongoError,
    ServerSelectionTimeoutError,
    WriteError,
)

import logging
logger = logging.getLogger(__name__)


class CatalogError(Exception):
    status_code = 500

    def body(self) -> dict:
        return {"error": "Internal server error"}


class PayloadInvalid(CatalogError):
    """Field-level validation failure. Carries field -> message."""
    status_code = 400

    def __init__(self, errors: Dict[str, str]):
        super().__init__(f"invalid payload: {sorted(errors)}")
        self.errors = dict(errors)

    def body(self) -> dict:
        return dict(self.errors)


class InvalidIdentifier(CatalogError):
    status_code = 400

    def __init__(self, body: Dict[str, str]):
        super().__init__(next(iter(body.values()), "identifier is invalid"))
        self._body = dict(body)

    def body(self) -> dict:
        return dict(self._body)


class NotFound(CatalogError):
    status_code = 404

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def body(self) -> dict:
        return {"error": self.message}


class StoreErrorKind(str, Enum):
    UNAVAILABLE = "unavailable"
    CONSTRAINT_VIOLATION = "constraint_violation"
    UNKNOWN = "unknown"


_STORE_MESSAGES = {
    StoreErrorKind.UNAVAILABLE: "Product store unavailable",
    StoreErrorKind.CONSTRAINT_VIOLATION: "Product store rejected the write",
    StoreErrorKind.UNKNOWN: "Internal server error",
}


class StoreError(CatalogError):
    """Persistence failure. The driver message is logged, never returned."""
    status_code = 500

    def __init__(self, kind: StoreErrorKind, operation: str, cause: Exception | None = None):
        super().__init__(f"{operation} failed ({kind.value}): {cause}")
        self.kind = kind
        self.operation = operation
        self.cause = cause

    def body(self) -> dict:
        return {"error": _STORE_MESSAGES[self.kind]}


def classify_store_error(exc: PyMongoError) -> StoreErrorKind:
    # DuplicateKeyError is a WriteError; both mean the server refused the document
    if isinstance(exc, (ServerSelectionTimeoutError, AutoReconnect, ConnectionFailure, NetworkTimeout)):
        return StoreErrorKind.UNAVAILABLE
    if isinstance(exc, (DuplicateKeyError, WriteError)):
        return StoreErrorKind.CONSTRAINT_VIOLATION
    return StoreErrorKind.UNKNOWN


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate driver exceptions raised inside the block into StoreError."""
    try:
        yield
    except PyMongoError as e:
        kind = classify_store_error(e)
        logger.error(f"[store] {operation} failed kind={kind.value}: {e}")
        raise StoreError(kind, operation, e) from e


async def _catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s -> %s (%s)", request.method, request.url.path, exc.status_code, exc)
    else:
        logger.info("%s %s -> %s (%s)", request.method, request.url.path, exc.status_code, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # only bodies can fail here: query and path params are plain strings
    errors: Dict[str, str] = {}
    for err in exc.errors():
        loc = [p for p in err.get("loc", ()) if isinstance(p, str) and p != "body"]
        field = loc[-1] if loc else "body"
        errors.setdefault(field, f"{field} is invalid")
    logger.info("%s %s -> 400 (unreadable request: %s)", request.method, request.url.path, sorted(errors))
    return JSONResponse(status_code=400, content=errors)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("%s %s -> 500 (unhandled %s)", request.method, request.url.path, type(exc).__name__, exc_info=exc)
    return JSONResponse(status_code=500, content=CatalogError().body())


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, _catalog_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
