from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Iterable

from cafepos.domain.common.timestamps import parse_day
from cafepos.domain.order.entities import Order


class LedgerScope(str, Enum):
    TODAY = "today"
    ALL = "all"


def order_day(order: Order) -> date | None:
    """Calendar day of an order from its day key, else from its timestamp.

    Day keys may be ISO dates or the ``Mon Jan 15 2024`` form older tills wrote.
    """
    day = parse_day(order.date)
    if day is not None:
        return day
    created_at = order.created_at
    if created_at is None:
        return None
    return created_at.date()


def in_scope(order: Order, scope: LedgerScope, now: datetime) -> bool:
    if scope == LedgerScope.ALL:
        return True
    return order_day(order) == now.date()


def select_scope(orders: Iterable[Order], scope: LedgerScope, now: datetime) -> list[Order]:
    return [order for order in orders if in_scope(order, scope, now)]


def newest_first(orders: Iterable[Order]) -> list[Order]:
    """Sort by timestamp descending; orders with unreadable timestamps go last."""
    return sorted(
        orders,
        key=lambda order: (order.created_at is not None, order.created_at or datetime.min),
        reverse=True,
    )
