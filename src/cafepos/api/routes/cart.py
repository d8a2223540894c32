from __future__ import annotations

from fastapi import APIRouter, Request

from cafepos.application.dto.requests import (
    AddCartLineRequest,
    ChangeQuantityRequest,
    CheckoutRequest,
)
from cafepos.application.dto.responses import CartResponse, CheckoutResponse
from cafepos.application.use_cases.order_builder import Checkout, EditCart
from cafepos.domain.order.cart import Cart
from cafepos.infrastructure.storage.factory import get_currency, get_key_value_store
from cafepos.infrastructure.storage.repositories.menu_repo import JsonMenuRepository
from cafepos.infrastructure.storage.repositories.order_repo import JsonOrderLedgerRepository

router = APIRouter()


def _cart(request: Request) -> Cart:
    return request.app.state.cart


def _edit_cart_use_case(request: Request) -> EditCart:
    return EditCart(_cart(request), JsonMenuRepository(get_key_value_store(), get_currency()))


def _checkout_use_case() -> Checkout:
    return Checkout(JsonOrderLedgerRepository(get_key_value_store(), get_currency()))


@router.get("/v1/cart", response_model=CartResponse)
def get_cart(request: Request) -> CartResponse:
    return _edit_cart_use_case(request).view()


@router.delete("/v1/cart", response_model=CartResponse)
def clear_cart(request: Request) -> CartResponse:
    return _edit_cart_use_case(request).clear()


@router.post("/v1/cart/lines", response_model=CartResponse)
def add_cart_line(payload: AddCartLineRequest, request: Request) -> CartResponse:
    return _edit_cart_use_case(request).add_line(payload)


@router.patch("/v1/cart/lines/{line_index}", response_model=CartResponse)
def change_line_quantity(
    line_index: int,
    payload: ChangeQuantityRequest,
    request: Request,
) -> CartResponse:
    return _edit_cart_use_case(request).change_quantity(line_index, payload.delta)


@router.delete("/v1/cart/lines/{line_index}", response_model=CartResponse)
def remove_cart_line(line_index: int, request: Request) -> CartResponse:
    return _edit_cart_use_case(request).remove_line(line_index)


@router.post("/v1/cart/checkout", response_model=CheckoutResponse)
def checkout(payload: CheckoutRequest, request: Request) -> CheckoutResponse:
    return _checkout_use_case().execute(_cart(request), payload.amount_tendered)
