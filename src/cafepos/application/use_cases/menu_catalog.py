from __future__ import annotations

import logging

from cafepos.application.dto.requests import MenuItemRequest
from cafepos.application.dto.responses import MenuItemResponse, MenuResponse
from cafepos.application.mappers.menu_mapper import to_menu_item_response, to_menu_response
from cafepos.application.ports.repositories import DisplayOrderRepository, MenuRepository
from cafepos.domain.common.ids import MenuItemId, new_menu_item_id
from cafepos.domain.common.money import Money
from cafepos.domain.menu.entities import (
    AddOnDefinition,
    Category,
    MenuItem,
    apply_display_order,
    move_item,
)

logger = logging.getLogger(__name__)


class MenuItemNotFoundError(Exception):
    pass


def build_menu_item(item_id: MenuItemId, request: MenuItemRequest, currency: str) -> MenuItem:
    return MenuItem(
        item_id=item_id,
        name=request.name.strip(),
        price=Money.from_decimal(request.price, currency),
        category=request.category,
        add_ons=tuple(
            AddOnDefinition(
                name=add_on.name.strip(),
                price=Money.from_decimal(add_on.price, currency),
                allow_quantity=add_on.allow_quantity,
            )
            for add_on in request.add_ons
        ),
    )


class GetMenu:
    def __init__(
        self,
        menu_repository: MenuRepository,
        display_order_repository: DisplayOrderRepository,
    ) -> None:
        self._menu_repository = menu_repository
        self._display_order_repository = display_order_repository

    def ordered_items(self) -> list[MenuItem]:
        return apply_display_order(
            self._menu_repository.list_items(),
            self._display_order_repository.get_ids(),
        )

    def execute(self, category: Category | None = None) -> MenuResponse:
        return to_menu_response(self.ordered_items(), category=category)


class CreateMenuItem:
    def __init__(self, menu_repository: MenuRepository, currency: str) -> None:
        self._menu_repository = menu_repository
        self._currency = currency

    def execute(self, request: MenuItemRequest) -> MenuItemResponse:
        item = build_menu_item(new_menu_item_id(), request, self._currency)
        items = self._menu_repository.list_items()
        items.append(item)
        self._menu_repository.save_items(items)
        logger.info("menu_item_created", extra={"item_id": str(item.item_id)})
        return to_menu_item_response(item)


class UpdateMenuItem:
    def __init__(self, menu_repository: MenuRepository, currency: str) -> None:
        self._menu_repository = menu_repository
        self._currency = currency

    def execute(self, item_id: MenuItemId, request: MenuItemRequest) -> MenuItemResponse:
        items = self._menu_repository.list_items()
        for index, existing in enumerate(items):
            if existing.item_id == item_id:
                updated = build_menu_item(item_id, request, self._currency)
                items[index] = updated
                self._menu_repository.save_items(items)
                logger.info("menu_item_updated", extra={"item_id": str(item_id)})
                return to_menu_item_response(updated)
        raise MenuItemNotFoundError(f"menu item {item_id} does not exist")


class DeleteMenuItem:
    """Remove an item from the catalog. Past orders keep their own copy."""

    def __init__(
        self,
        menu_repository: MenuRepository,
        display_order_repository: DisplayOrderRepository,
    ) -> None:
        self._menu_repository = menu_repository
        self._display_order_repository = display_order_repository

    def execute(self, item_id: MenuItemId) -> bool:
        items = self._menu_repository.list_items()
        remaining = [item for item in items if item.item_id != item_id]
        if len(remaining) == len(items):
            return False

        self._menu_repository.save_items(remaining)
        ids = self._display_order_repository.get_ids()
        if str(item_id) in ids:
            self._display_order_repository.save_ids([value for value in ids if value != item_id])
        logger.info("menu_item_deleted", extra={"item_id": str(item_id)})
        return True


class ReorderMenu:
    def __init__(
        self,
        menu_repository: MenuRepository,
        display_order_repository: DisplayOrderRepository,
    ) -> None:
        self._get_menu = GetMenu(menu_repository, display_order_repository)
        self._display_order_repository = display_order_repository

    def save(self, item_ids: list[str]) -> MenuResponse:
        ordered = apply_display_order(self._get_menu.ordered_items(), item_ids)
        self._display_order_repository.save_ids([str(item.item_id) for item in ordered])
        return to_menu_response(ordered)

    def move(self, item_id: str, target_item_id: str) -> MenuResponse:
        current_ids = [str(item.item_id) for item in self._get_menu.ordered_items()]
        if item_id not in current_ids:
            raise MenuItemNotFoundError(f"menu item {item_id} does not exist")
        if target_item_id not in current_ids:
            raise MenuItemNotFoundError(f"menu item {target_item_id} does not exist")

        self._display_order_repository.save_ids(move_item(current_ids, item_id, target_item_id))
        return self._get_menu.execute()
