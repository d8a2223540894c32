from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field, field_validator

from cafepos.application.dto.requests import CamelBaseModel
from cafepos.domain.archive.entities import SaleSession
from cafepos.domain.common.ids import MenuItemId, OrderId, SessionId
from cafepos.domain.common.money import Money
from cafepos.domain.menu.entities import AddOnDefinition, Category, MenuItem
from cafepos.domain.order.entities import Order, OrderItem, SelectedAddOn


class StoredRecord(CamelBaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)


def normalize_add_on(value: Any) -> Any:
    """Older menus stored add-ons as bare names; read them as free add-ons."""
    if isinstance(value, str):
        return {"name": value, "price": 0}
    return value


def _normalize_add_ons(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, list):
        return [normalize_add_on(item) for item in value]
    return value


class AddOnRecord(StoredRecord):
    name: str
    price: float = 0.0
    allow_quantity: bool = False


class SelectedAddOnRecord(AddOnRecord):
    quantity: int = 1


class MenuItemRecord(StoredRecord):
    id: str
    name: str
    price: float
    category: Category
    add_ons: list[AddOnRecord] = Field(default_factory=list)

    @field_validator("add_ons", mode="before")
    @classmethod
    def _legacy_add_ons(cls, value: Any) -> Any:
        return _normalize_add_ons(value)


class OrderItemRecord(StoredRecord):
    menu_item: MenuItemRecord
    quantity: int
    add_ons: list[SelectedAddOnRecord] = Field(default_factory=list)
    custom_text: str = ""
    subtotal: float | None = None

    @field_validator("add_ons", mode="before")
    @classmethod
    def _legacy_add_ons(cls, value: Any) -> Any:
        return _normalize_add_ons(value)


class OrderRecord(StoredRecord):
    id: str
    items: list[OrderItemRecord]
    total: float | None = None
    timestamp: str = ""
    date: str = ""


class SaleSessionRecord(StoredRecord):
    id: str
    name: str | None = None
    date: str = ""
    closed_at: str = ""
    last_updated: str | None = None
    orders: list[OrderRecord] = Field(default_factory=list)
    total_sales: float | None = None
    total_items: int | None = None
    order_count: int | None = None


def _amount(money: Money) -> float:
    return float(money.to_decimal())


def _to_add_on(record: AddOnRecord, currency: str) -> AddOnDefinition:
    return AddOnDefinition(
        name=record.name,
        price=Money.from_decimal(record.price, currency),
        allow_quantity=record.allow_quantity,
    )


def _from_add_on(add_on: AddOnDefinition) -> AddOnRecord:
    return AddOnRecord(
        name=add_on.name,
        price=_amount(add_on.price),
        allow_quantity=add_on.allow_quantity,
    )


def to_menu_item(record: MenuItemRecord, currency: str) -> MenuItem:
    return MenuItem(
        item_id=MenuItemId(record.id),
        name=record.name,
        price=Money.from_decimal(record.price, currency),
        category=record.category,
        add_ons=tuple(_to_add_on(add_on, currency) for add_on in record.add_ons),
    )


def from_menu_item(item: MenuItem) -> MenuItemRecord:
    return MenuItemRecord(
        id=str(item.item_id),
        name=item.name,
        price=_amount(item.price),
        category=item.category,
        add_ons=[_from_add_on(add_on) for add_on in item.add_ons],
    )


def to_order(record: OrderRecord, currency: str) -> Order:
    return Order(
        order_id=OrderId(record.id),
        items=tuple(
            OrderItem(
                menu_item=to_menu_item(item.menu_item, currency),
                quantity=item.quantity,
                add_ons=tuple(
                    SelectedAddOn(add_on=_to_add_on(selected, currency), quantity=selected.quantity)
                    for selected in item.add_ons
                ),
                custom_text=item.custom_text,
            )
            for item in record.items
        ),
        timestamp=record.timestamp,
        date=record.date,
    )


def from_order(order: Order) -> OrderRecord:
    return OrderRecord(
        id=str(order.order_id),
        items=[
            OrderItemRecord(
                menu_item=from_menu_item(item.menu_item),
                quantity=item.quantity,
                add_ons=[
                    SelectedAddOnRecord(
                        name=selected.name,
                        price=_amount(selected.add_on.price),
                        allow_quantity=selected.add_on.allow_quantity,
                        quantity=selected.quantity,
                    )
                    for selected in item.add_ons
                ],
                custom_text=item.custom_text,
                subtotal=_amount(item.subtotal),
            )
            for item in order.items
        ],
        total=_amount(order.total),
        timestamp=order.timestamp,
        date=order.date,
    )


def to_sale_session(record: SaleSessionRecord, currency: str) -> SaleSession:
    # Cached totals in the record are ignored; the entity derives them.
    return SaleSession(
        session_id=SessionId(record.id),
        name=record.name,
        date=record.date,
        closed_at=record.closed_at,
        last_updated=record.last_updated,
        currency=currency,
        orders=tuple(to_order(order, currency) for order in record.orders),
    )


def from_sale_session(session: SaleSession) -> SaleSessionRecord:
    return SaleSessionRecord(
        id=str(session.session_id),
        name=session.name,
        date=session.date,
        closed_at=session.closed_at,
        last_updated=session.last_updated,
        orders=[from_order(order) for order in session.orders],
        total_sales=_amount(session.total_sales),
        total_items=session.total_items,
        order_count=session.order_count,
    )
