from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from cafepos.application.dto.requests import MenuAddOnRequest, MenuItemRequest
from cafepos.application.use_cases.menu_catalog import (
    CreateMenuItem,
    DeleteMenuItem,
    GetMenu,
    MenuItemNotFoundError,
    ReorderMenu,
    UpdateMenuItem,
)
from cafepos.domain.common.ids import MenuItemId
from cafepos.domain.common.money import Money
from cafepos.domain.menu.entities import Category, MenuItem


class FakeMenuRepository:
    def __init__(self, items: list[MenuItem] | None = None) -> None:
        self.items = list(items or [])

    def list_items(self) -> list[MenuItem]:
        return list(self.items)

    def save_items(self, items: list[MenuItem]) -> None:
        self.items = list(items)


class FakeDisplayOrderRepository:
    def __init__(self, ids: list[str] | None = None) -> None:
        self.ids = list(ids or [])

    def get_ids(self) -> list[str]:
        return list(self.ids)

    def save_ids(self, ids: list[str]) -> None:
        self.ids = list(ids)


def _item(item_id: str, name: str, category: Category) -> MenuItem:
    return MenuItem(
        item_id=MenuItemId(item_id),
        name=name,
        price=Money(300, "USD"),
        category=category,
    )


def _catalog() -> tuple[FakeMenuRepository, FakeDisplayOrderRepository]:
    menu = FakeMenuRepository(
        [
            _item("itm_a", "Latte", Category.DRINK),
            _item("itm_b", "Bagel", Category.FOOD),
            _item("itm_c", "Mocha", Category.DRINK),
        ]
    )
    return menu, FakeDisplayOrderRepository(["itm_c", "itm_gone"])


def test_get_menu_applies_display_order_and_counts() -> None:
    menu, display = _catalog()

    response = GetMenu(menu, display).execute()

    assert [item.itemId for item in response.items] == ["itm_c", "itm_a", "itm_b"]
    assert (response.drinkCount, response.foodCount) == (2, 1)


def test_get_menu_filters_by_category_but_counts_all() -> None:
    menu, display = _catalog()

    response = GetMenu(menu, display).execute(category=Category.FOOD)

    assert [item.name for item in response.items] == ["Bagel"]
    assert response.drinkCount == 2


def test_create_menu_item_assigns_fresh_id() -> None:
    menu = FakeMenuRepository()
    request = MenuItemRequest(
        name=" Flat White ",
        price=Decimal("3.80"),
        category=Category.DRINK,
        add_ons=[MenuAddOnRequest(name="Extra Shot", price=Decimal("0.5"), allow_quantity=True)],
    )

    response = CreateMenuItem(menu, "USD").execute(request)

    assert response.itemId.startswith("itm_")
    assert response.name == "Flat White"
    assert response.price.amountCents == 380
    assert response.addOns[0].allowQuantity is True
    assert len(menu.items) == 1


def test_blank_menu_item_name_is_rejected_by_request() -> None:
    with pytest.raises(ValidationError):
        MenuItemRequest(name="   ", price=Decimal("1"), category=Category.FOOD)


def test_update_replaces_item_by_id() -> None:
    menu, _ = _catalog()
    request = MenuItemRequest(name="Oat Latte", price=Decimal("4.00"), category=Category.DRINK)

    UpdateMenuItem(menu, "USD").execute(MenuItemId("itm_a"), request)

    assert menu.items[0].name == "Oat Latte"
    assert menu.items[0].price == Money(400, "USD")
    with pytest.raises(MenuItemNotFoundError):
        UpdateMenuItem(menu, "USD").execute(MenuItemId("itm_zzz"), request)


def test_delete_prunes_display_order() -> None:
    menu, display = _catalog()

    assert DeleteMenuItem(menu, display).execute(MenuItemId("itm_c")) is True
    assert [str(item.item_id) for item in menu.items] == ["itm_a", "itm_b"]
    assert "itm_c" not in display.ids
    assert DeleteMenuItem(menu, display).execute(MenuItemId("itm_c")) is False


def test_move_persists_new_order() -> None:
    menu, display = _catalog()

    response = ReorderMenu(menu, display).move("itm_b", "itm_c")

    assert [item.itemId for item in response.items] == ["itm_b", "itm_c", "itm_a"]
    assert display.ids == ["itm_b", "itm_c", "itm_a"]
    with pytest.raises(MenuItemNotFoundError):
        ReorderMenu(menu, display).move("itm_b", "itm_nope")


def test_save_display_order_keeps_current_order_for_unlisted_items() -> None:
    menu, display = _catalog()

    ReorderMenu(menu, display).save(["itm_b"])

    assert display.ids == ["itm_b", "itm_c", "itm_a"]
