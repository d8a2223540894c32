from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from cafepos.application.dto.requests import AddCartLineRequest
from cafepos.application.dto.responses import CartResponse, CheckoutResponse
from cafepos.application.mappers.money_mapper import to_money_response
from cafepos.application.mappers.order_mapper import to_cart_response, to_order_response
from cafepos.application.metrics.sales_lifecycle import (
    record_checkout,
    record_checkout_rejected,
    record_open_ledger_size,
)
from cafepos.application.ports.repositories import MenuRepository, OrderLedgerRepository
from cafepos.application.use_cases.menu_catalog import MenuItemNotFoundError
from cafepos.domain.common.ids import new_order_id
from cafepos.domain.common.money import Money
from cafepos.domain.common.timestamps import local_now
from cafepos.domain.order.cart import Cart
from cafepos.domain.order.entities import SelectedAddOn, create_order, select_add_on

logger = logging.getLogger(__name__)


class UnknownAddOnError(Exception):
    pass


class EmptyCartError(Exception):
    pass


class InsufficientPaymentError(Exception):
    def __init__(self, message: str, total: Money, tendered: Money) -> None:
        super().__init__(message)
        self.total = total
        self.tendered = tendered
        self.details = {
            "totalCents": total.amount_cents,
            "tenderedCents": tendered.amount_cents,
        }


class EditCart:
    def __init__(self, cart: Cart, menu_repository: MenuRepository) -> None:
        self._cart = cart
        self._menu_repository = menu_repository

    def view(self) -> CartResponse:
        return to_cart_response(self._cart)

    def add_line(self, request: AddCartLineRequest) -> CartResponse:
        menu_item = next(
            (item for item in self._menu_repository.list_items() if item.item_id == request.item_id),
            None,
        )
        if menu_item is None:
            raise MenuItemNotFoundError(f"menu item {request.item_id} does not exist")

        selected: list[SelectedAddOn] = []
        for selection in request.add_ons:
            definition = menu_item.find_add_on(selection.name)
            if definition is None:
                raise UnknownAddOnError(
                    f"add-on {selection.name} is not offered for {menu_item.name}"
                )
            selected.append(select_add_on(definition, selection.quantity))

        self._cart.add_line(menu_item, selected, custom_text=request.custom_text)
        return to_cart_response(self._cart)

    def change_quantity(self, line_index: int, delta: int) -> CartResponse:
        self._cart.change_quantity(line_index, delta)
        return to_cart_response(self._cart)

    def remove_line(self, line_index: int) -> CartResponse:
        self._cart.remove_line(line_index)
        return to_cart_response(self._cart)

    def clear(self) -> CartResponse:
        self._cart.clear()
        return to_cart_response(self._cart)


class Checkout:
    def __init__(self, ledger_repository: OrderLedgerRepository) -> None:
        self._ledger_repository = ledger_repository

    def execute(
        self,
        cart: Cart,
        amount_tendered: Decimal,
        now: datetime | None = None,
    ) -> CheckoutResponse:
        with cart.lock:
            return self._checkout(cart, amount_tendered, now or local_now())

    def _checkout(self, cart: Cart, amount_tendered: Decimal, now: datetime) -> CheckoutResponse:
        if cart.is_empty():
            record_checkout_rejected("empty_cart")
            raise EmptyCartError("cart is empty")

        total = cart.total()
        tendered = Money.from_decimal(amount_tendered, cart.currency)
        if tendered < total:
            record_checkout_rejected("insufficient_payment")
            raise InsufficientPaymentError(
                f"amount tendered {tendered.format()} is less than order total {total.format()}",
                total=total,
                tendered=tendered,
            )

        order = create_order(new_order_id(now), cart.lines, now)
        orders = self._ledger_repository.list_orders()
        orders.append(order)
        self._ledger_repository.save_orders(orders)
        cart.clear()

        record_checkout(order)
        record_open_ledger_size(len(orders))
        logger.info(
            "order_checked_out",
            extra={"order_id": str(order.order_id), "total_cents": order.total.amount_cents},
        )
        return CheckoutResponse(
            order=to_order_response(order),
            change=to_money_response(tendered - total),
        )
