from __future__ import annotations

from cafepos.application.dto.responses import (
    CartResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    SelectedAddOnResponse,
)
from cafepos.application.mappers.menu_mapper import to_menu_item_response
from cafepos.application.mappers.money_mapper import to_money_response
from cafepos.domain.common.money import Money
from cafepos.domain.order.cart import Cart
from cafepos.domain.order.entities import Order, OrderItem


def to_order_item_response(item: OrderItem) -> OrderItemResponse:
    return OrderItemResponse(
        menuItem=to_menu_item_response(item.menu_item),
        quantity=item.quantity,
        addOns=[
            SelectedAddOnResponse(
                name=selected.name,
                price=to_money_response(selected.add_on.price),
                allowQuantity=selected.add_on.allow_quantity,
                quantity=selected.quantity,
            )
            for selected in item.add_ons
        ],
        customText=item.custom_text,
        unitPrice=to_money_response(item.unit_price),
        subtotal=to_money_response(item.subtotal),
    )


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        orderId=str(order.order_id),
        items=[to_order_item_response(item) for item in order.items],
        total=to_money_response(order.total),
        itemCount=order.item_count,
        timestamp=order.timestamp,
        date=order.date,
    )


def to_order_list_response(orders: list[Order], currency: str) -> OrderListResponse:
    return OrderListResponse(
        orders=[to_order_response(order) for order in orders],
        orderCount=len(orders),
        total=to_money_response(Money.sum((order.total for order in orders), currency=currency)),
    )


def to_cart_response(cart: Cart) -> CartResponse:
    return CartResponse(
        lines=[to_order_item_response(line) for line in cart.lines],
        total=to_money_response(cart.total()),
    )
