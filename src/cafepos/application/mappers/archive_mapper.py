from __future__ import annotations

from cafepos.application.dto.responses import ArchiveResponse, SaleSessionResponse
from cafepos.application.mappers.money_mapper import to_money_response
from cafepos.application.mappers.order_mapper import to_order_response
from cafepos.domain.archive.entities import SaleSession
from cafepos.domain.common.money import Money


def to_sale_session_response(session: SaleSession) -> SaleSessionResponse:
    return SaleSessionResponse(
        sessionId=str(session.session_id),
        name=session.name,
        date=session.date,
        closedAt=session.closed_at,
        lastUpdated=session.last_updated,
        orders=[to_order_response(order) for order in session.orders],
        totalSales=to_money_response(session.total_sales),
        totalItems=session.total_items,
        orderCount=session.order_count,
    )


def to_archive_response(sessions: list[SaleSession], currency: str) -> ArchiveResponse:
    return ArchiveResponse(
        sessions=[to_sale_session_response(session) for session in sessions],
        sessionCount=len(sessions),
        orderCount=sum(session.order_count for session in sessions),
        totalSales=to_money_response(
            Money.sum((session.total_sales for session in sessions), currency=currency)
        ),
    )
