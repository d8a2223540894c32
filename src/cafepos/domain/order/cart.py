from __future__ import annotations

from contextlib import AbstractContextManager
from threading import RLock
from typing import Sequence

from cafepos.domain.common.money import Money
from cafepos.domain.menu.entities import MenuItem
from cafepos.domain.order.entities import OrderItem, SelectedAddOn


class CartLineNotFoundError(Exception):
    pass


class Cart:
    """In-memory order being built at the till.

    Line subtotals are always derived from the line's own menu item, add-ons
    and quantity, so there is no stored price that can drift. The API serves
    one cart from a thread pool; ``lock`` serialises edits and checkout.
    """

    def __init__(self, currency: str) -> None:
        self._currency = currency
        self._lines: list[OrderItem] = []
        self._lock = RLock()

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def lock(self) -> AbstractContextManager[bool]:
        return self._lock

    @property
    def lines(self) -> list[OrderItem]:
        with self._lock:
            return list(self._lines)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._lines

    def add_line(
        self,
        menu_item: MenuItem,
        selected_add_ons: Sequence[SelectedAddOn] = (),
        custom_text: str = "",
    ) -> OrderItem:
        if menu_item.price.currency != self._currency:
            raise ValueError("menu item currency must match cart currency")
        add_ons = tuple(selected_add_ons)
        note = custom_text.strip()
        with self._lock:
            # Lines with different notes stay separate so no note is lost.
            for index, line in enumerate(self._lines):
                if line.matches(menu_item, add_ons, note):
                    updated = line.with_quantity(line.quantity + 1)
                    self._lines[index] = updated
                    return updated

            line = OrderItem(menu_item=menu_item, quantity=1, add_ons=add_ons, custom_text=note)
            self._lines.append(line)
            return line

    def change_quantity(self, line_index: int, delta: int) -> OrderItem | None:
        with self._lock:
            line = self._line(line_index)
            new_quantity = line.quantity + delta
            if new_quantity <= 0:
                del self._lines[line_index]
                return None
            updated = line.with_quantity(new_quantity)
            self._lines[line_index] = updated
            return updated

    def remove_line(self, line_index: int) -> None:
        with self._lock:
            self._line(line_index)
            del self._lines[line_index]

    def total(self) -> Money:
        with self._lock:
            return Money.sum((line.subtotal for line in self._lines), currency=self._currency)

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()

    def _line(self, line_index: int) -> OrderItem:
        if line_index < 0 or line_index >= len(self._lines):
            raise CartLineNotFoundError(f"cart line {line_index} does not exist")
        return self._lines[line_index]
