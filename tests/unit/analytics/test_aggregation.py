from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from cafepos.domain.analytics.aggregation import (
    TimeRange,
    average_order_value,
    build_sales_report,
    daily_revenue,
    filter_orders,
    orders_by_hour,
    peak_hour,
    summarize,
    top_selling_items,
)
from cafepos.domain.common.ids import MenuItemId, OrderId
from cafepos.domain.common.money import Money
from cafepos.domain.menu.entities import Category, MenuItem
from cafepos.domain.order.entities import Order, OrderItem

NOW = datetime(2026, 5, 20, 15, 30).astimezone()


def _line(name: str, cents: int, quantity: int, category: Category = Category.DRINK) -> OrderItem:
    item = MenuItem(
        item_id=MenuItemId(f"itm_{name.lower()}"),
        name=name,
        price=Money(cents, "USD"),
        category=category,
    )
    return OrderItem(menu_item=item, quantity=quantity)


def _order(
    order_id: str,
    moment: datetime | None,
    *lines: OrderItem,
    date: str | None = None,
) -> Order:
    timestamp = moment.isoformat(timespec="seconds") if moment else "not a time"
    return Order(
        order_id=OrderId(order_id),
        items=lines,
        timestamp=timestamp,
        date=date or (moment.date().isoformat() if moment else ""),
    )


def test_average_order_value_is_zero_without_orders() -> None:
    totals = summarize([], "USD")

    assert average_order_value(totals) == Money.zero("USD")


def test_average_order_value_rounds_to_the_cent() -> None:
    orders = [
        _order("o1", NOW, _line("Latte", 100, 1)),
        _order("o2", NOW, _line("Latte", 100, 1)),
        _order("o3", NOW, _line("Latte", 150, 1)),
    ]

    assert average_order_value(summarize(orders, "USD")) == Money(117, "USD")


def test_orders_by_hour_skips_unparseable_timestamp() -> None:
    orders = [
        _order("o1", NOW.replace(hour=9), _line("Latte", 350, 1)),
        _order("o2", None, _line("Latte", 350, 1), date="2026-05-20"),
    ]

    buckets = orders_by_hour(orders)

    assert len(buckets) == 24
    assert sum(buckets) == 1
    assert buckets[9] == 1


def test_peak_hour_ties_pick_lowest_hour_and_empty_is_none() -> None:
    buckets = [0] * 24
    assert peak_hour(buckets) is None

    buckets[14] = 3
    buckets[8] = 3
    assert peak_hour(buckets) == 8


def test_top_sellers_group_by_name_with_stable_ties() -> None:
    orders = [
        _order("o1", NOW, _line("Mocha", 400, 2), _line("Bagel", 250, 1, Category.FOOD)),
        _order("o2", NOW, _line("Cookie", 200, 2, Category.FOOD)),
        _order("o3", NOW, _line("Bagel", 250, 3, Category.FOOD)),
    ]

    ranked = top_selling_items(orders, "USD")

    assert [(sales.name, sales.quantity) for sales in ranked] == [
        ("Bagel", 4),
        ("Mocha", 2),
        ("Cookie", 2),
    ]
    assert ranked[0].revenue == Money(1000, "USD")
    assert len(top_selling_items(orders, "USD", limit=1)) == 1


def test_time_range_cutoff_is_calendar_midnight() -> None:
    this_morning = NOW.replace(hour=0, minute=5)
    yesterday_late = NOW.replace(hour=23, minute=50) - timedelta(days=1)
    eight_days_ago = NOW - timedelta(days=8)
    orders = [
        _order("today", this_morning, _line("Latte", 350, 1)),
        _order("yesterday", yesterday_late, _line("Latte", 350, 1)),
        _order("old", eight_days_ago, _line("Latte", 350, 1)),
    ]

    assert [o.order_id for o in filter_orders(orders, TimeRange.TODAY, NOW)] == ["today"]
    assert [o.order_id for o in filter_orders(orders, TimeRange.LAST_7_DAYS, NOW)] == [
        "today",
        "yesterday",
    ]
    assert len(filter_orders(orders, TimeRange.LAST_30_DAYS, NOW)) == 3
    assert len(filter_orders(orders, TimeRange.ALL, NOW)) == 3


def test_unparseable_timestamp_falls_back_to_day_key_for_range() -> None:
    orders = [_order("o1", None, _line("Latte", 350, 1), date="2026-05-20")]

    assert len(filter_orders(orders, TimeRange.TODAY, NOW)) == 1


def test_daily_revenue_is_ascending_and_keeps_last_30_days() -> None:
    orders = [
        _order(f"o{offset}", NOW - timedelta(days=offset), _line("Latte", 100, 1))
        for offset in range(35)
    ]

    days = daily_revenue(orders, "USD")

    assert len(days) == 30
    assert days[0].day < days[-1].day
    assert days[-1].day == NOW.date()
    assert all(entry.revenue == Money(100, "USD") for entry in days)


def test_sales_report_splits_revenue_by_category() -> None:
    orders = [
        _order(
            "o1",
            NOW.replace(hour=10),
            _line("Latte", 350, 2),
            _line("Bagel", 250, 1, Category.FOOD),
        ),
        _order("o2", NOW.replace(hour=10), _line("Cookie", 200, 1, Category.FOOD)),
    ]

    report = build_sales_report(orders, TimeRange.ALL, NOW, "USD")

    assert report.totals.revenue == Money(1150, "USD")
    assert report.totals.order_count == 2
    assert report.totals.item_count == 4
    assert report.revenue_by_category == {
        Category.DRINK: Money(700, "USD"),
        Category.FOOD: Money(450, "USD"),
    }
    assert report.peak_hour == 10
