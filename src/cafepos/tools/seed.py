from __future__ import annotations

from decimal import Decimal

from cafepos.application.dto.requests import MenuAddOnRequest, MenuItemRequest
from cafepos.application.use_cases.menu_catalog import CreateMenuItem
from cafepos.domain.menu.entities import Category
from cafepos.infrastructure.storage.factory import get_currency, get_key_value_store
from cafepos.infrastructure.storage.repositories.menu_repo import JsonMenuRepository

_MILK_ADD_ONS = [
    MenuAddOnRequest(name="Oatmilk", price=Decimal("0.50")),
    MenuAddOnRequest(name="Extra Shot", price=Decimal("0.75"), allow_quantity=True),
]

SAMPLE_MENU = [
    MenuItemRequest(
        name="Latte",
        price=Decimal("3.50"),
        category=Category.DRINK,
        add_ons=_MILK_ADD_ONS,
    ),
    MenuItemRequest(
        name="Cappuccino",
        price=Decimal("3.25"),
        category=Category.DRINK,
        add_ons=_MILK_ADD_ONS,
    ),
    MenuItemRequest(name="Iced Tea", price=Decimal("2.75"), category=Category.DRINK),
    MenuItemRequest(
        name="Bagel",
        price=Decimal("2.50"),
        category=Category.FOOD,
        add_ons=[
            MenuAddOnRequest(name="Cream Cheese", price=Decimal("0.80")),
            MenuAddOnRequest(name="Extra Egg", price=Decimal("1.00"), allow_quantity=True),
        ],
    ),
    MenuItemRequest(name="Croissant", price=Decimal("2.95"), category=Category.FOOD),
]


def main() -> None:
    currency = get_currency()
    repository = JsonMenuRepository(get_key_value_store(), currency)
    if repository.list_items():
        print("menu already present")
        return

    use_case = CreateMenuItem(repository, currency)
    for request in SAMPLE_MENU:
        use_case.execute(request)
    print("seed complete")


if __name__ == "__main__":
    main()
