from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cafepos.api.middleware.request_id import get_request_id
from cafepos.application.use_cases.close_sale import NothingToCloseError, SessionNotFoundError
from cafepos.application.use_cases.import_archive import (
    ImportPreviewNotFoundError,
    InvalidImportFormatError,
)
from cafepos.application.use_cases.menu_catalog import MenuItemNotFoundError
from cafepos.application.use_cases.order_builder import (
    EmptyCartError,
    InsufficientPaymentError,
    UnknownAddOnError,
)
from cafepos.domain.order.cart import CartLineNotFoundError

logger = logging.getLogger(__name__)


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
        logger.info("request_rejected", extra={"status_code": status_code, "error": code})
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 409:
        code = "CONFLICT"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": jsonable_encoder(validation_exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (InsufficientPaymentError, 400, "INSUFFICIENT_PAYMENT"),
        (EmptyCartError, 400, "EMPTY_CART"),
        (UnknownAddOnError, 400, "UNKNOWN_ADD_ON"),
        (CartLineNotFoundError, 404, "CART_LINE_NOT_FOUND"),
        (MenuItemNotFoundError, 404, "MENU_ITEM_NOT_FOUND"),
        (SessionNotFoundError, 404, "SESSION_NOT_FOUND"),
        (NothingToCloseError, 409, "NOTHING_TO_CLOSE"),
        (InvalidImportFormatError, 400, "INVALID_IMPORT_FORMAT"),
        (ImportPreviewNotFoundError, 404, "IMPORT_PREVIEW_NOT_FOUND"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
