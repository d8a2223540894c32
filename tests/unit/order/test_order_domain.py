from __future__ import annotations

import sys
from datetime import date, datetime
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from cafepos.domain.common.ids import MenuItemId, OrderId
from cafepos.domain.common.money import Money
from cafepos.domain.common.timestamps import parse_day, parse_timestamp
from cafepos.domain.menu.entities import AddOnDefinition, Category, MenuItem
from cafepos.domain.order.entities import (
    Order,
    OrderItem,
    SelectedAddOn,
    create_order,
    select_add_on,
)
from cafepos.domain.order.ledger import LedgerScope, newest_first, order_day, select_scope

SYRUP = AddOnDefinition(name="Vanilla Syrup", price=Money(40, "USD"))


def _mocha_line(quantity: int = 1) -> OrderItem:
    menu_item = MenuItem(
        item_id=MenuItemId("itm_mocha"),
        name="Mocha",
        price=Money(400, "USD"),
        category=Category.DRINK,
        add_ons=(SYRUP,),
    )
    return OrderItem(menu_item=menu_item, quantity=quantity)


def _order(order_id: str, timestamp: str, date: str) -> Order:
    return Order(order_id=OrderId(order_id), items=(_mocha_line(),), timestamp=timestamp, date=date)


def test_add_on_quantity_requires_multiplier() -> None:
    with pytest.raises(ValueError):
        SelectedAddOn(add_on=SYRUP, quantity=2)
    with pytest.raises(ValueError):
        SelectedAddOn(add_on=SYRUP, quantity=0)


def test_select_add_on_clamps_quantity_without_multiplier() -> None:
    assert select_add_on(SYRUP, quantity=3).quantity == 1


def test_order_requires_items() -> None:
    with pytest.raises(ValueError):
        Order(order_id=OrderId("ord_1"), items=(), timestamp="", date="2026-05-04")
    with pytest.raises(ValueError):
        create_order(OrderId("ord_1"), [], datetime(2026, 5, 4, 9, 0).astimezone())


def test_create_order_stamps_time_and_day() -> None:
    now = datetime(2026, 5, 4, 9, 15, 30).astimezone()

    order = create_order(OrderId("ord_1"), [_mocha_line(quantity=2)], now)

    assert order.date == "2026-05-04"
    assert order.created_at == now
    assert order.total == Money(800, "USD")
    assert order.item_count == 2


def test_order_search_matches_id_or_item_name() -> None:
    order = _order("ord_20260504_abc", "", "2026-05-04")

    assert order.matches_search("MOCHA")
    assert order.matches_search("abc")
    assert order.matches_search("  ")
    assert not order.matches_search("bagel")


def test_legacy_timestamps_are_parsed() -> None:
    day_first = parse_timestamp("04/05/2026, 09:15:00")
    month_first = parse_timestamp("5/4/2026, 9:15:00 AM")

    assert day_first is not None and (day_first.month, day_first.day, day_first.hour) == (5, 4, 9)
    assert month_first is not None and (month_first.month, month_first.day) == (5, 4)


def test_unparseable_timestamp_is_none() -> None:
    assert parse_timestamp("yesterday-ish") is None
    assert parse_timestamp("") is None
    assert parse_timestamp(None) is None


def test_parse_day_accepts_legacy_date_keys() -> None:
    assert parse_day("2026-05-04").isoformat() == "2026-05-04"
    assert parse_day("Mon May 04 2026").isoformat() == "2026-05-04"
    assert parse_day("not a day") is None


def test_today_scope_selects_only_todays_orders() -> None:
    now = datetime(2026, 5, 4, 18, 0).astimezone()
    orders = [
        _order("ord_old", "2026-05-03T10:00:00", "2026-05-03"),
        _order("ord_new", "2026-05-04T10:00:00", "2026-05-04"),
    ]

    assert [o.order_id for o in select_scope(orders, LedgerScope.TODAY, now)] == ["ord_new"]
    assert len(select_scope(orders, LedgerScope.ALL, now)) == 2


def test_today_scope_reads_browser_date_strings() -> None:
    now = datetime(2024, 1, 15, 14, 0).astimezone()
    orders = [
        _order("ord_browser", "1/15/2024, 2:10:45 PM", "Mon Jan 15 2024"),
        _order("ord_yesterday", "1/14/2024, 9:00:00 AM", "Sun Jan 14 2024"),
        _order("ord_no_day", "2024-01-15T08:30:00", ""),
    ]

    selected = select_scope(orders, LedgerScope.TODAY, now)

    assert [o.order_id for o in selected] == ["ord_browser", "ord_no_day"]
    assert order_day(orders[0]) == date(2024, 1, 15)


def test_newest_first_puts_unreadable_timestamps_last() -> None:
    orders = [
        _order("ord_bad", "garbage", "2026-05-04"),
        _order("ord_early", "2026-05-04T08:00:00", "2026-05-04"),
        _order("ord_late", "2026-05-04T17:00:00", "2026-05-04"),
    ]

    assert [o.order_id for o in newest_first(orders)] == ["ord_late", "ord_early", "ord_bad"]
