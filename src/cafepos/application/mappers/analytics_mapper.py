from __future__ import annotations

from cafepos.application.dto.responses import (
    AnalyticsResponse,
    DailyRevenueResponse,
    ItemSalesResponse,
)
from cafepos.application.mappers.money_mapper import to_money_response
from cafepos.domain.analytics.aggregation import SalesReport

NO_PEAK_HOUR = "N/A"


def format_peak_hour(hour: int | None) -> str:
    if hour is None:
        return NO_PEAK_HOUR
    return f"{hour:02d}:00"


def to_analytics_response(report: SalesReport) -> AnalyticsResponse:
    return AnalyticsResponse(
        range=report.time_range.value,
        totalRevenue=to_money_response(report.totals.revenue),
        totalOrders=report.totals.order_count,
        totalItems=report.totals.item_count,
        averageOrderValue=to_money_response(report.average_order_value),
        topSellingItems=[
            ItemSalesResponse(
                name=sales.name,
                quantity=sales.quantity,
                revenue=to_money_response(sales.revenue),
            )
            for sales in report.top_selling_items
        ],
        revenueByCategory={
            category.value: to_money_response(amount)
            for category, amount in report.revenue_by_category.items()
        },
        ordersByHour=list(report.orders_by_hour),
        peakHour=format_peak_hour(report.peak_hour),
        dailyRevenue=[
            DailyRevenueResponse(
                date=entry.day.isoformat(),
                revenue=to_money_response(entry.revenue),
                orderCount=entry.order_count,
            )
            for entry in report.daily_revenue
        ],
    )
