from __future__ import annotations

from fastapi import APIRouter, Query

from cafepos.application.dto.responses import AnalyticsResponse, DashboardResponse
from cafepos.application.use_cases.analytics import GetSalesAnalytics
from cafepos.application.use_cases.dashboard import GetDashboard
from cafepos.domain.analytics.aggregation import TimeRange
from cafepos.infrastructure.storage.factory import get_currency, get_key_value_store
from cafepos.infrastructure.storage.repositories.archive_repo import JsonArchiveRepository
from cafepos.infrastructure.storage.repositories.menu_repo import JsonMenuRepository
from cafepos.infrastructure.storage.repositories.order_repo import JsonOrderLedgerRepository

router = APIRouter()


@router.get("/v1/analytics", response_model=AnalyticsResponse)
def get_analytics(
    time_range: TimeRange = Query(default=TimeRange.ALL, alias="range"),
) -> AnalyticsResponse:
    store = get_key_value_store()
    currency = get_currency()
    use_case = GetSalesAnalytics(
        ledger_repository=JsonOrderLedgerRepository(store, currency),
        archive_repository=JsonArchiveRepository(store, currency),
        currency=currency,
    )
    return use_case.execute(time_range=time_range)


@router.get("/v1/dashboard", response_model=DashboardResponse)
def get_dashboard() -> DashboardResponse:
    store = get_key_value_store()
    currency = get_currency()
    use_case = GetDashboard(
        menu_repository=JsonMenuRepository(store, currency),
        ledger_repository=JsonOrderLedgerRepository(store, currency),
        archive_repository=JsonArchiveRepository(store, currency),
        currency=currency,
    )
    return use_case.execute()
