from __future__ import annotations

from cafepos.application.dto.responses import AddOnResponse, MenuItemResponse, MenuResponse
from cafepos.application.mappers.money_mapper import to_money_response
from cafepos.domain.menu.entities import Category, MenuItem


def to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        itemId=str(item.item_id),
        name=item.name,
        price=to_money_response(item.price),
        category=item.category.value,
        addOns=[
            AddOnResponse(
                name=add_on.name,
                price=to_money_response(add_on.price),
                allowQuantity=add_on.allow_quantity,
            )
            for add_on in item.add_ons
        ],
    )


def to_menu_response(items: list[MenuItem], category: Category | None = None) -> MenuResponse:
    visible = [item for item in items if category is None or item.category == category]
    return MenuResponse(
        items=[to_menu_item_response(item) for item in visible],
        drinkCount=sum(1 for item in items if item.category == Category.DRINK),
        foodCount=sum(1 for item in items if item.category == Category.FOOD),
    )
