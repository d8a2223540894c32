from __future__ import annotations

from typing import Protocol

from cafepos.domain.archive.entities import SaleSession
from cafepos.domain.menu.entities import MenuItem
from cafepos.domain.order.entities import Order

# Every repository reads and replaces its whole collection; there is no
# partial update, so callers follow a read-modify-write discipline.


class MenuRepository(Protocol):
    def list_items(self) -> list[MenuItem]: ...

    def save_items(self, items: list[MenuItem]) -> None: ...


class DisplayOrderRepository(Protocol):
    def get_ids(self) -> list[str]: ...

    def save_ids(self, ids: list[str]) -> None: ...


class OrderLedgerRepository(Protocol):
    def list_orders(self) -> list[Order]: ...

    def save_orders(self, orders: list[Order]) -> None: ...


class ArchiveRepository(Protocol):
    def list_sessions(self) -> list[SaleSession]: ...

    def save_sessions(self, sessions: list[SaleSession]) -> None: ...
