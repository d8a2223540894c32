from __future__ import annotations

from datetime import datetime

from cafepos.application.dto.responses import AnalyticsResponse
from cafepos.application.mappers.analytics_mapper import to_analytics_response
from cafepos.application.ports.repositories import ArchiveRepository, OrderLedgerRepository
from cafepos.domain.analytics.aggregation import TimeRange, build_sales_report
from cafepos.domain.common.timestamps import local_now
from cafepos.domain.order.entities import Order

TOP_SELLING_LIMIT = 10


def all_orders(
    ledger_repository: OrderLedgerRepository,
    archive_repository: ArchiveRepository,
) -> list[Order]:
    orders = ledger_repository.list_orders()
    for session in archive_repository.list_sessions():
        orders.extend(session.orders)
    return orders


class GetSalesAnalytics:
    """Read-only statistics over the open ledger and every archived session."""

    def __init__(
        self,
        ledger_repository: OrderLedgerRepository,
        archive_repository: ArchiveRepository,
        currency: str,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._archive_repository = archive_repository
        self._currency = currency

    def execute(
        self,
        time_range: TimeRange = TimeRange.ALL,
        now: datetime | None = None,
    ) -> AnalyticsResponse:
        report = build_sales_report(
            all_orders(self._ledger_repository, self._archive_repository),
            time_range=time_range,
            now=now or local_now(),
            currency=self._currency,
            top_items_limit=TOP_SELLING_LIMIT,
        )
        return to_analytics_response(report)
