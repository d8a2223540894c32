from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import datetime

from cafepos.domain.common.ids import OrderId
from cafepos.domain.common.money import Money
from cafepos.domain.common.timestamps import day_key, format_timestamp, parse_timestamp
from cafepos.domain.menu.entities import AddOnDefinition, MenuItem


@dataclass(frozen=True)
class SelectedAddOn:
    add_on: AddOnDefinition
    quantity: int = 1

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("add-on quantity must be >= 1")
        if self.quantity > 1 and not self.add_on.allow_quantity:
            raise ValueError(f"add-on {self.add_on.name} does not allow a quantity")

    @property
    def name(self) -> str:
        return self.add_on.name

    @property
    def line_price(self) -> Money:
        return self.add_on.price * self.quantity


def select_add_on(add_on: AddOnDefinition, quantity: int = 1) -> SelectedAddOn:
    """Select an add-on, clamping the quantity to 1 when the add-on has no multiplier."""
    if not add_on.allow_quantity:
        quantity = 1
    return SelectedAddOn(add_on=add_on, quantity=quantity)


def add_on_signature(add_ons: tuple[SelectedAddOn, ...]) -> Counter[tuple[str, int]]:
    return Counter((selected.name, selected.quantity) for selected in add_ons)


@dataclass(frozen=True)
class OrderItem:
    menu_item: MenuItem
    quantity: int
    add_ons: tuple[SelectedAddOn, ...] = field(default_factory=tuple)
    custom_text: str = ""

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")
        for selected in self.add_ons:
            if selected.add_on.price.currency != self.menu_item.price.currency:
                raise ValueError("add-on currency must match item currency")

    @property
    def unit_price(self) -> Money:
        return self.menu_item.price + Money.sum(
            (selected.line_price for selected in self.add_ons),
            currency=self.menu_item.price.currency,
        )

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity

    def matches(
        self,
        menu_item: MenuItem,
        add_ons: tuple[SelectedAddOn, ...],
        custom_text: str = "",
    ) -> bool:
        return (
            self.menu_item.item_id == menu_item.item_id
            and self.custom_text == custom_text
            and add_on_signature(self.add_ons) == add_on_signature(add_ons)
        )

    def with_quantity(self, quantity: int) -> OrderItem:
        return replace(self, quantity=quantity)


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    items: tuple[OrderItem, ...]
    timestamp: str
    date: str

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("order must contain at least one item")
        currency = self.items[0].menu_item.price.currency
        if any(item.menu_item.price.currency != currency for item in self.items):
            raise ValueError("order items must share one currency")

    @property
    def currency(self) -> str:
        return self.items[0].menu_item.price.currency

    @property
    def total(self) -> Money:
        return Money.sum((item.subtotal for item in self.items), currency=self.currency)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def created_at(self) -> datetime | None:
        return parse_timestamp(self.timestamp)

    def matches_search(self, term: str) -> bool:
        needle = term.strip().lower()
        if not needle:
            return True
        if needle in str(self.order_id).lower():
            return True
        return any(needle in item.menu_item.name.lower() for item in self.items)


def create_order(order_id: OrderId, items: list[OrderItem], now: datetime) -> Order:
    if not items:
        raise ValueError("order must contain at least one item")
    return Order(
        order_id=order_id,
        items=tuple(items),
        timestamp=format_timestamp(now),
        date=day_key(now),
    )
