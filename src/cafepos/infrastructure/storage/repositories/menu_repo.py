from __future__ import annotations

from pydantic import TypeAdapter

from cafepos.application.ports.repositories import DisplayOrderRepository, MenuRepository
from cafepos.application.ports.storage import KeyValueStore
from cafepos.domain.common.ids import MenuItemId
from cafepos.domain.menu.entities import MenuItem
from cafepos.infrastructure.storage.records import MenuItemRecord, from_menu_item, to_menu_item
from cafepos.infrastructure.storage.repositories.json_collection import (
    JsonCollection,
    load_entities,
)

MENU_KEY = "cafe-menu"
DISPLAY_ORDER_KEY = "cafe-menu-display-order"

_MENU_ADAPTER = TypeAdapter(list[MenuItemRecord])
_DISPLAY_ORDER_ADAPTER = TypeAdapter(list[str])


class JsonMenuRepository(MenuRepository):
    def __init__(self, store: KeyValueStore, currency: str) -> None:
        self._collection = JsonCollection(store, MENU_KEY, _MENU_ADAPTER)
        self._currency = currency

    def list_items(self) -> list[MenuItem]:
        return load_entities(
            self._collection,
            lambda record: to_menu_item(record, self._currency),
        )

    def save_items(self, items: list[MenuItem]) -> None:
        self._collection.write([from_menu_item(item) for item in items])


class JsonDisplayOrderRepository(DisplayOrderRepository):
    def __init__(self, store: KeyValueStore) -> None:
        self._collection = JsonCollection(store, DISPLAY_ORDER_KEY, _DISPLAY_ORDER_ADAPTER)

    def get_ids(self) -> list[MenuItemId]:
        return load_entities(self._collection, MenuItemId)

    def save_ids(self, item_ids: list[MenuItemId]) -> None:
        self._collection.write([str(item_id) for item_id in item_ids])
