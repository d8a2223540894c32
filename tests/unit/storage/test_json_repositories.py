from __future__ import annotations

import json
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from cafepos.domain.archive.entities import open_session
from cafepos.domain.common.ids import MenuItemId, OrderId, SessionId
from cafepos.domain.common.money import Money
from cafepos.domain.menu.entities import AddOnDefinition, Category, MenuItem
from cafepos.domain.order.entities import Order, OrderItem, SelectedAddOn
from cafepos.infrastructure.storage.memory_store import InMemoryKeyValueStore
from cafepos.infrastructure.storage.repositories.archive_repo import (
    ARCHIVE_KEY,
    JsonArchiveRepository,
)
from cafepos.infrastructure.storage.repositories.menu_repo import (
    DISPLAY_ORDER_KEY,
    MENU_KEY,
    JsonDisplayOrderRepository,
    JsonMenuRepository,
)
from cafepos.infrastructure.storage.repositories.order_repo import (
    ORDERS_KEY,
    JsonOrderLedgerRepository,
)

NOW = datetime(2026, 5, 4, 18, 0).astimezone()
SHOT = AddOnDefinition(name="Extra Shot", price=Money(50, "USD"), allow_quantity=True)
LATTE = MenuItem(
    item_id=MenuItemId("itm_latte"),
    name="Latte",
    price=Money(350, "USD"),
    category=Category.DRINK,
    add_ons=(SHOT,),
)


def _order() -> Order:
    return Order(
        order_id=OrderId("ord_1"),
        items=(
            OrderItem(
                menu_item=LATTE,
                quantity=2,
                add_ons=(SelectedAddOn(add_on=SHOT, quantity=2),),
                custom_text="extra hot",
            ),
        ),
        timestamp="2026-05-04T09:15:00+00:00",
        date="2026-05-04",
    )


def test_menu_round_trip_uses_camel_case_wire_names() -> None:
    store = InMemoryKeyValueStore()
    repository = JsonMenuRepository(store, "USD")

    repository.save_items([LATTE])

    stored = json.loads(store.get(MENU_KEY) or "")
    assert stored[0]["id"] == "itm_latte"
    assert stored[0]["price"] == 3.5
    assert stored[0]["addOns"][0] == {"name": "Extra Shot", "price": 0.5, "allowQuantity": True}
    assert repository.list_items() == [LATTE]


def test_order_round_trip_preserves_all_fields() -> None:
    store = InMemoryKeyValueStore()
    repository = JsonOrderLedgerRepository(store, "USD")

    repository.save_orders([_order()])

    stored = json.loads(store.get(ORDERS_KEY) or "")
    assert stored[0]["total"] == 9.0
    assert stored[0]["items"][0]["subtotal"] == 9.0
    assert stored[0]["items"][0]["customText"] == "extra hot"
    assert repository.list_orders() == [_order()]


def test_archive_round_trip_recomputes_cached_totals() -> None:
    store = InMemoryKeyValueStore()
    repository = JsonArchiveRepository(store, "USD")
    session = open_session(
        session_id=SessionId("ses_1"),
        orders=[_order()],
        name="Evening",
        date="2026-05-04",
        currency="USD",
        now=NOW,
    )
    repository.save_sessions([session])

    stored = json.loads(store.get(ARCHIVE_KEY) or "")
    assert stored[0]["closedAt"] == session.closed_at
    assert stored[0]["totalSales"] == 9.0
    assert stored[0]["totalItems"] == 2
    assert stored[0]["orderCount"] == 1

    # A drifted cache on disk does not leak into the entity.
    stored[0]["totalSales"] = 999
    store.set(ARCHIVE_KEY, json.dumps(stored))
    assert repository.list_sessions()[0].total_sales == Money(900, "USD")


def test_legacy_string_add_ons_become_free_add_ons() -> None:
    store = InMemoryKeyValueStore(
        {
            MENU_KEY: json.dumps(
                [
                    {
                        "id": 17,
                        "name": "Toast",
                        "price": 2,
                        "category": "food",
                        "addOns": ["Butter", {"name": "Jam", "price": 0.3}],
                    }
                ]
            )
        }
    )

    items = JsonMenuRepository(store, "USD").list_items()

    assert str(items[0].item_id) == "17"
    assert [(a.name, a.price.amount_cents) for a in items[0].add_ons] == [
        ("Butter", 0),
        ("Jam", 30),
    ]


def test_malformed_collections_read_as_empty() -> None:
    store = InMemoryKeyValueStore(
        {
            MENU_KEY: "{not json",
            ORDERS_KEY: json.dumps([{"id": "ord_1", "items": []}]),
            ARCHIVE_KEY: json.dumps({"unexpected": "shape"}),
            DISPLAY_ORDER_KEY: json.dumps([1, {"x": 2}]),
        }
    )

    assert JsonMenuRepository(store, "USD").list_items() == []
    assert JsonOrderLedgerRepository(store, "USD").list_orders() == []
    assert JsonArchiveRepository(store, "USD").list_sessions() == []
    assert JsonDisplayOrderRepository(store).get_ids() == []


def test_missing_collections_read_as_empty() -> None:
    store = InMemoryKeyValueStore()

    assert JsonOrderLedgerRepository(store, "USD").list_orders() == []
    assert JsonDisplayOrderRepository(store).get_ids() == []


def test_display_order_round_trip() -> None:
    store = InMemoryKeyValueStore()
    repository = JsonDisplayOrderRepository(store)

    repository.save_ids(["itm_b", "itm_a"])

    assert json.loads(store.get(DISPLAY_ORDER_KEY) or "") == ["itm_b", "itm_a"]
    assert repository.get_ids() == ["itm_b", "itm_a"]
