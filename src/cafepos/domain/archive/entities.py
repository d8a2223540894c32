from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from cafepos.domain.common.ids import OrderId, SessionId
from cafepos.domain.common.money import Money
from cafepos.domain.common.timestamps import format_timestamp, parse_timestamp
from cafepos.domain.order.entities import Order


@dataclass(frozen=True)
class SaleSession:
    """A closed batch of orders.

    ``total_sales``, ``total_items`` and ``order_count`` are derived from
    ``orders`` on every read.
    """

    session_id: SessionId
    date: str
    closed_at: str
    currency: str
    orders: tuple[Order, ...] = field(default_factory=tuple)
    name: str | None = None
    last_updated: str | None = None

    def __post_init__(self) -> None:
        if any(order.currency != self.currency for order in self.orders):
            raise ValueError("session orders must share the session currency")

    @property
    def total_sales(self) -> Money:
        return Money.sum((order.total for order in self.orders), currency=self.currency)

    @property
    def total_items(self) -> int:
        return sum(order.item_count for order in self.orders)

    @property
    def order_count(self) -> int:
        return len(self.orders)

    @property
    def closed_at_time(self) -> datetime | None:
        return parse_timestamp(self.closed_at)

    def merge(self, orders: list[Order], now: datetime) -> SaleSession:
        return replace(
            self,
            orders=self.orders + tuple(orders),
            last_updated=format_timestamp(now),
        )

    def without_order(self, order_id: OrderId, now: datetime) -> SaleSession | None:
        # Imported sessions may repeat a legacy id; only the first match goes.
        index = next(
            (position for position, order in enumerate(self.orders) if order.order_id == order_id),
            None,
        )
        if index is None:
            return None
        remaining = self.orders[:index] + self.orders[index + 1 :]
        return replace(self, orders=remaining, last_updated=format_timestamp(now))

    def matches_search(self, term: str) -> bool:
        needle = term.strip().lower()
        if not needle:
            return True
        if needle in self.date.lower():
            return True
        if self.name and needle in self.name.lower():
            return True
        return any(order.matches_search(needle) for order in self.orders)


def open_session(
    session_id: SessionId,
    orders: list[Order],
    name: str,
    date: str,
    currency: str,
    now: datetime,
) -> SaleSession:
    return SaleSession(
        session_id=session_id,
        name=name,
        date=date,
        closed_at=format_timestamp(now),
        currency=currency,
        orders=tuple(orders),
    )


class CloseSaleMode(str, Enum):
    NEW = "new"
    EXISTING = "existing"
