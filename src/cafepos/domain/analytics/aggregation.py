from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable, Sequence

from cafepos.domain.common.money import Money
from cafepos.domain.common.timestamps import parse_day
from cafepos.domain.menu.entities import Category
from cafepos.domain.order.entities import Order
from cafepos.domain.order.ledger import order_day

HOURS_PER_DAY = 24
DAILY_REVENUE_WINDOW = 30


class TimeRange(str, Enum):
    TODAY = "today"
    LAST_7_DAYS = "last-7-days"
    LAST_30_DAYS = "last-30-days"
    ALL = "all"


_RANGE_DAYS = {
    TimeRange.TODAY: 0,
    TimeRange.LAST_7_DAYS: 7,
    TimeRange.LAST_30_DAYS: 30,
}


@dataclass(frozen=True)
class OrderTotals:
    revenue: Money
    order_count: int
    item_count: int


@dataclass(frozen=True)
class ItemSales:
    name: str
    quantity: int
    revenue: Money


@dataclass(frozen=True)
class DailyRevenue:
    day: date
    revenue: Money
    order_count: int


@dataclass(frozen=True)
class SalesReport:
    time_range: TimeRange
    totals: OrderTotals
    average_order_value: Money
    top_selling_items: list[ItemSales]
    revenue_by_category: dict[Category, Money]
    orders_by_hour: list[int]
    peak_hour: int | None
    daily_revenue: list[DailyRevenue] = field(default_factory=list)


def range_cutoff(time_range: TimeRange, now: datetime) -> datetime | None:
    days = _RANGE_DAYS.get(time_range)
    if days is None:
        return None
    local = now.astimezone()
    midnight = datetime.combine(local.date(), time.min, tzinfo=local.tzinfo)
    return midnight - timedelta(days=days)


def order_moment(order: Order) -> datetime | None:
    """Best known instant of an order: its timestamp, else midnight of its day key."""
    created_at = order.created_at
    if created_at is not None:
        return created_at
    day = parse_day(order.date)
    if day is None:
        return None
    return datetime.combine(day, time.min).astimezone()


def filter_orders(orders: Iterable[Order], time_range: TimeRange, now: datetime) -> list[Order]:
    cutoff = range_cutoff(time_range, now)
    if cutoff is None:
        return list(orders)
    selected: list[Order] = []
    for order in orders:
        moment = order_moment(order)
        if moment is not None and moment >= cutoff:
            selected.append(order)
    return selected


def summarize(orders: Sequence[Order], currency: str) -> OrderTotals:
    return OrderTotals(
        revenue=Money.sum((order.total for order in orders), currency=currency),
        order_count=len(orders),
        item_count=sum(order.item_count for order in orders),
    )


def average_order_value(totals: OrderTotals) -> Money:
    if totals.order_count == 0:
        return Money.zero(totals.revenue.currency)
    average = (Decimal(totals.revenue.amount_cents) / totals.order_count).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return Money(amount_cents=int(average), currency=totals.revenue.currency)


def top_selling_items(
    orders: Iterable[Order],
    currency: str,
    limit: int | None = None,
) -> list[ItemSales]:
    """Group sold lines by display name, highest quantity first.

    Equal quantities keep the order in which the names were first seen.
    """
    quantities: dict[str, int] = {}
    revenues: dict[str, Money] = {}
    for order in orders:
        for item in order.items:
            name = item.menu_item.name
            quantities[name] = quantities.get(name, 0) + item.quantity
            revenues[name] = revenues.get(name, Money.zero(currency)) + item.subtotal

    ranked = sorted(
        (
            ItemSales(name=name, quantity=quantity, revenue=revenues[name])
            for name, quantity in quantities.items()
        ),
        key=lambda sales: sales.quantity,
        reverse=True,
    )
    if limit is not None:
        return ranked[:limit]
    return ranked


def revenue_by_category(orders: Iterable[Order], currency: str) -> dict[Category, Money]:
    totals = {category: Money.zero(currency) for category in Category}
    for order in orders:
        for item in order.items:
            category = item.menu_item.category
            totals[category] = totals[category] + item.subtotal
    return totals


def orders_by_hour(orders: Iterable[Order]) -> list[int]:
    buckets = [0] * HOURS_PER_DAY
    for order in orders:
        created_at = order.created_at
        if created_at is None:
            continue
        buckets[created_at.hour] += 1
    return buckets


def peak_hour(buckets: Sequence[int]) -> int | None:
    best_hour: int | None = None
    best_count = 0
    for hour, count in enumerate(buckets):
        if count > best_count:
            best_hour = hour
            best_count = count
    return best_hour


def daily_revenue(
    orders: Iterable[Order],
    currency: str,
    window: int = DAILY_REVENUE_WINDOW,
) -> list[DailyRevenue]:
    revenue: dict[date, Money] = {}
    counts: dict[date, int] = {}
    for order in orders:
        day = order_day(order)
        if day is None:
            continue
        revenue[day] = revenue.get(day, Money.zero(currency)) + order.total
        counts[day] = counts.get(day, 0) + 1

    days = sorted(revenue)[-window:]
    return [DailyRevenue(day=day, revenue=revenue[day], order_count=counts[day]) for day in days]


def build_sales_report(
    orders: Iterable[Order],
    time_range: TimeRange,
    now: datetime,
    currency: str,
    top_items_limit: int | None = 10,
) -> SalesReport:
    selected = filter_orders(orders, time_range, now)
    totals = summarize(selected, currency)
    buckets = orders_by_hour(selected)
    return SalesReport(
        time_range=time_range,
        totals=totals,
        average_order_value=average_order_value(totals),
        top_selling_items=top_selling_items(selected, currency, limit=top_items_limit),
        revenue_by_category=revenue_by_category(selected, currency),
        orders_by_hour=buckets,
        peak_hour=peak_hour(buckets),
        daily_revenue=daily_revenue(selected, currency),
    )
