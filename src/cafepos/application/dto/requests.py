from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from cafepos.domain.archive.entities import CloseSaleMode
from cafepos.domain.menu.entities import Category
from cafepos.domain.order.ledger import LedgerScope


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class MenuAddOnRequest(CamelBaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    allow_quantity: bool = False


class MenuItemRequest(CamelBaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    category: Category
    add_ons: list[MenuAddOnRequest] = Field(default_factory=list)


class DisplayOrderRequest(CamelBaseModel):
    item_ids: list[str]


class MoveMenuItemRequest(CamelBaseModel):
    item_id: str
    target_item_id: str


class CartAddOnSelection(CamelBaseModel):
    name: str
    quantity: int = Field(default=1, ge=1)


class AddCartLineRequest(CamelBaseModel):
    item_id: str
    add_ons: list[CartAddOnSelection] = Field(default_factory=list)
    custom_text: str = ""


class ChangeQuantityRequest(CamelBaseModel):
    delta: int


class CheckoutRequest(CamelBaseModel):
    amount_tendered: Decimal = Field(ge=0)


class CloseSaleRequest(CamelBaseModel):
    mode: CloseSaleMode = CloseSaleMode.NEW
    session_id: str | None = None
    name: str | None = None
    scope: LedgerScope = LedgerScope.TODAY
