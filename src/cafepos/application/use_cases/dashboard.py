from __future__ import annotations

from datetime import datetime

from cafepos.application.dto.responses import DashboardResponse
from cafepos.application.mappers.money_mapper import to_money_response
from cafepos.application.mappers.order_mapper import to_order_response
from cafepos.application.ports.repositories import (
    ArchiveRepository,
    MenuRepository,
    OrderLedgerRepository,
)
from cafepos.domain.analytics.aggregation import summarize
from cafepos.domain.common.money import Money
from cafepos.domain.common.timestamps import local_now
from cafepos.domain.menu.entities import Category
from cafepos.domain.order.ledger import LedgerScope, newest_first, select_scope

RECENT_ORDER_LIMIT = 3


class GetDashboard:
    def __init__(
        self,
        menu_repository: MenuRepository,
        ledger_repository: OrderLedgerRepository,
        archive_repository: ArchiveRepository,
        currency: str,
    ) -> None:
        self._menu_repository = menu_repository
        self._ledger_repository = ledger_repository
        self._archive_repository = archive_repository
        self._currency = currency

    def execute(self, now: datetime | None = None) -> DashboardResponse:
        today_orders = select_scope(
            self._ledger_repository.list_orders(),
            LedgerScope.TODAY,
            now or local_now(),
        )
        today = summarize(today_orders, self._currency)
        archived_revenue = Money.sum(
            (session.total_sales for session in self._archive_repository.list_sessions()),
            currency=self._currency,
        )
        menu_items = self._menu_repository.list_items()

        return DashboardResponse(
            todayOrderCount=today.order_count,
            todayRevenue=to_money_response(today.revenue),
            todayItemsSold=today.item_count,
            menuItemCount=len(menu_items),
            drinkCount=sum(1 for item in menu_items if item.category == Category.DRINK),
            foodCount=sum(1 for item in menu_items if item.category == Category.FOOD),
            archivedRevenue=to_money_response(archived_revenue),
            totalRevenue=to_money_response(today.revenue + archived_revenue),
            recentOrders=[
                to_order_response(order)
                for order in newest_first(today_orders)[:RECENT_ORDER_LIMIT]
            ],
        )
