from __future__ import annotations

from pydantic import TypeAdapter

from cafepos.application.ports.repositories import OrderLedgerRepository
from cafepos.application.ports.storage import KeyValueStore
from cafepos.domain.order.entities import Order
from cafepos.infrastructure.storage.records import OrderRecord, from_order, to_order
from cafepos.infrastructure.storage.repositories.json_collection import (
    JsonCollection,
    load_entities,
)

ORDERS_KEY = "cafe-orders"

_ORDERS_ADAPTER = TypeAdapter(list[OrderRecord])


class JsonOrderLedgerRepository(OrderLedgerRepository):
    def __init__(self, store: KeyValueStore, currency: str) -> None:
        self._collection = JsonCollection(store, ORDERS_KEY, _ORDERS_ADAPTER)
        self._currency = currency

    def list_orders(self) -> list[Order]:
        return load_entities(self._collection, lambda record: to_order(record, self._currency))

    def save_orders(self, orders: list[Order]) -> None:
        self._collection.write([from_order(order) for order in orders])
