from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from cafepos.application.use_cases.analytics import GetSalesAnalytics
from cafepos.application.use_cases.dashboard import GetDashboard
from cafepos.domain.analytics.aggregation import TimeRange
from cafepos.domain.archive.entities import SaleSession
from cafepos.domain.common.ids import MenuItemId, OrderId, SessionId
from cafepos.domain.common.money import Money
from cafepos.domain.menu.entities import Category, MenuItem
from cafepos.domain.order.entities import Order, OrderItem

NOW = datetime(2026, 5, 4, 18, 0).astimezone()

LATTE = MenuItem(
    item_id=MenuItemId("itm_latte"),
    name="Latte",
    price=Money(350, "USD"),
    category=Category.DRINK,
)
BAGEL = MenuItem(
    item_id=MenuItemId("itm_bagel"),
    name="Bagel",
    price=Money(250, "USD"),
    category=Category.FOOD,
)


class FakeMenuRepository:
    def list_items(self) -> list[MenuItem]:
        return [LATTE, BAGEL]

    def save_items(self, items: list[MenuItem]) -> None:
        raise AssertionError("read-only")


class FakeOrderLedgerRepository:
    def __init__(self, orders: list[Order]) -> None:
        self.orders = orders

    def list_orders(self) -> list[Order]:
        return list(self.orders)

    def save_orders(self, orders: list[Order]) -> None:
        raise AssertionError("read-only")


class FakeArchiveRepository:
    def __init__(self, sessions: list[SaleSession]) -> None:
        self.sessions = sessions

    def list_sessions(self) -> list[SaleSession]:
        return list(self.sessions)

    def save_sessions(self, sessions: list[SaleSession]) -> None:
        raise AssertionError("read-only")


def _order(order_id: str, item: MenuItem, quantity: int, timestamp: str) -> Order:
    return Order(
        order_id=OrderId(order_id),
        items=(OrderItem(menu_item=item, quantity=quantity),),
        timestamp=timestamp,
        date=timestamp[:10],
    )


def _repositories() -> tuple[FakeOrderLedgerRepository, FakeArchiveRepository]:
    ledger = FakeOrderLedgerRepository(
        [
            _order("ord_1", LATTE, 2, "2026-05-04T09:10:00"),
            _order("ord_2", BAGEL, 1, "2026-05-04T09:40:00"),
            _order("ord_3", LATTE, 1, "2026-05-04T13:00:00"),
            _order("ord_4", BAGEL, 1, "2026-05-04T16:00:00"),
        ]
    )
    archive = FakeArchiveRepository(
        [
            SaleSession(
                session_id=SessionId("ses_1"),
                name="Friday",
                date="2026-05-01",
                closed_at="2026-05-01T18:00:00",
                currency="USD",
                orders=(_order("ord_0", BAGEL, 4, "2026-05-01T11:00:00"),),
            )
        ]
    )
    return ledger, archive


def test_analytics_combines_ledger_and_archive() -> None:
    ledger, archive = _repositories()

    response = GetSalesAnalytics(ledger, archive, "USD").execute(TimeRange.ALL, now=NOW)

    assert response.range == "all"
    assert response.totalOrders == 5
    assert response.totalItems == 9
    assert response.totalRevenue.amount == "25.50"
    assert response.averageOrderValue.amount == "5.10"
    assert [item.name for item in response.topSellingItems] == ["Bagel", "Latte"]
    assert response.revenueByCategory["food"].amount == "15.00"
    assert response.peakHour == "09:00"
    assert [day.date for day in response.dailyRevenue] == ["2026-05-01", "2026-05-04"]


def test_analytics_today_excludes_archive_from_other_days() -> None:
    ledger, archive = _repositories()

    response = GetSalesAnalytics(ledger, archive, "USD").execute(TimeRange.TODAY, now=NOW)

    assert response.totalOrders == 4


def test_analytics_with_no_orders_reports_na_peak() -> None:
    response = GetSalesAnalytics(
        FakeOrderLedgerRepository([]),
        FakeArchiveRepository([]),
        "USD",
    ).execute(now=NOW)

    assert response.totalOrders == 0
    assert response.averageOrderValue.amountCents == 0
    assert response.peakHour == "N/A"
    assert response.ordersByHour == [0] * 24


def test_dashboard_summarises_today_and_archive() -> None:
    ledger, archive = _repositories()

    response = GetDashboard(FakeMenuRepository(), ledger, archive, "USD").execute(now=NOW)

    assert response.todayOrderCount == 4
    assert response.todayRevenue.amount == "15.50"
    assert response.todayItemsSold == 5
    assert response.menuItemCount == 2
    assert (response.drinkCount, response.foodCount) == (1, 1)
    assert response.archivedRevenue.amount == "10.00"
    assert response.totalRevenue.amount == "25.50"
    assert [order.orderId for order in response.recentOrders] == ["ord_4", "ord_3", "ord_2"]
