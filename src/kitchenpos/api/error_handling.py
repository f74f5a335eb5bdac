from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from kitchenpos.api.middleware.request_id import get_request_id
from kitchenpos.application.errors import (
    InvalidInputError,
    InvalidOrderRequestError,
    InvalidOrderTableRequestError,
    InvalidOrderTransitionError,
    MenuNotDisplayedError,
    MenuNotFoundError,
    NotFoundError,
    OrderConflictError,
    OrderNotFoundError,
    OrderTableClearBlockedError,
    OrderTableNotFoundError,
    OrderTableNotOccupiedError,
    StateConflictError,
)
from kitchenpos.application.ports.delivery import DeliveryDispatchError

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {400: "BAD_REQUEST", 404: "NOT_FOUND", 405: "METHOD_NOT_ALLOWED", 409: "CONFLICT"}


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            },
            "requestId": get_request_id(),
        },
    )


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _dispatch_error_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.error("delivery_dispatch_failed", extra={"error_code": "DELIVERY_DISPATCH_FAILED"})
    return _error_response(
        status_code=502,
        code="DELIVERY_DISPATCH_FAILED",
        message=str(exc) or "delivery dispatch failed",
    )


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    return _error_response(
        status_code=http_exc.status_code,
        code=_HTTP_ERROR_CODES.get(http_exc.status_code, "HTTP_ERROR"),
        message=str(http_exc.detail) if http_exc.detail else "request failed",
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": validation_exc.errors()},
    )


def register_exception_handlers(app: FastAPI) -> None:
    # Specific codes first; the category bases catch anything added later.
    mappings: list[tuple[type[Exception], int, str]] = [
        (InvalidOrderRequestError, 400, "INVALID_ORDER_REQUEST"),
        (InvalidOrderTableRequestError, 400, "INVALID_ORDER_TABLE_REQUEST"),
        (InvalidInputError, 400, "INVALID_INPUT"),
        (MenuNotFoundError, 404, "MENU_NOT_FOUND"),
        (OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
        (OrderTableNotFoundError, 404, "ORDER_TABLE_NOT_FOUND"),
        (NotFoundError, 404, "NOT_FOUND"),
        (MenuNotDisplayedError, 409, "MENU_NOT_DISPLAYED"),
        (OrderTableNotOccupiedError, 409, "ORDER_TABLE_NOT_OCCUPIED"),
        (InvalidOrderTransitionError, 409, "INVALID_ORDER_TRANSITION"),
        (OrderConflictError, 409, "CONFLICT"),
        (OrderTableClearBlockedError, 409, "ORDER_TABLE_CLEAR_BLOCKED"),
        (StateConflictError, 409, "STATE_CONFLICT"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(DeliveryDispatchError, _dispatch_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
