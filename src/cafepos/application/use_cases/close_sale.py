from __future__ import annotations

import logging
from datetime import date, datetime

from cafepos.application.dto.responses import SaleSessionResponse
from cafepos.application.mappers.archive_mapper import to_sale_session_response
from cafepos.application.metrics.sales_lifecycle import record_open_ledger_size, record_sale_closed
from cafepos.application.ports.repositories import ArchiveRepository, OrderLedgerRepository
from cafepos.domain.archive.entities import CloseSaleMode, SaleSession, open_session
from cafepos.domain.common.ids import new_session_id
from cafepos.domain.common.timestamps import day_key, local_now, parse_day
from cafepos.domain.order.ledger import LedgerScope, select_scope

logger = logging.getLogger(__name__)


class NothingToCloseError(Exception):
    pass


class SessionNotFoundError(Exception):
    pass


def default_session_name(now: datetime) -> str:
    return f"Sale Session {now:%H:%M:%S}"


class CloseSale:
    """Move eligible ledger orders into a new or existing sale session.

    The archive is written before the ledger is trimmed, and only the drained
    orders leave the ledger.
    """

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
        mode: CloseSaleMode,
        scope: LedgerScope = LedgerScope.TODAY,
        session_id: str | None = None,
        name: str | None = None,
        now: datetime | None = None,
    ) -> SaleSessionResponse:
        current = now or local_now()
        ledger = self._ledger_repository.list_orders()
        drained = select_scope(ledger, scope, current)
        if not drained:
            raise NothingToCloseError(f"no {scope.value} orders to close")

        sessions = self._archive_repository.list_sessions()
        if mode == CloseSaleMode.NEW:
            session = open_session(
                session_id=new_session_id(),
                orders=drained,
                name=(name or "").strip() or default_session_name(current),
                date=day_key(current),
                currency=self._currency,
                now=current,
            )
            sessions.append(session)
        else:
            index = _find_session(sessions, session_id)
            if index is None:
                raise SessionNotFoundError(f"sale session {session_id} does not exist")
            session = sessions[index].merge(drained, current)
            sessions[index] = session

        self._archive_repository.save_sessions(sessions)

        drained_ids = {order.order_id for order in drained}
        remaining = [order for order in ledger if order.order_id not in drained_ids]
        self._ledger_repository.save_orders(remaining)

        record_sale_closed(mode.value, len(drained))
        record_open_ledger_size(len(remaining))
        logger.info(
            "sale_closed",
            extra={
                "session_id": str(session.session_id),
                "mode": mode.value,
                "order_count": len(drained),
            },
        )
        return to_sale_session_response(session)


class ListMergeTargets:
    """Sessions dated today, which a close-sale may append to."""

    def __init__(self, archive_repository: ArchiveRepository) -> None:
        self._archive_repository = archive_repository

    def execute(self, now: datetime | None = None) -> list[SaleSessionResponse]:
        today = (now or local_now()).date()
        return [
            to_sale_session_response(session)
            for session in self._archive_repository.list_sessions()
            if _session_day(session) == today
        ]


def _session_day(session: SaleSession) -> date | None:
    day = parse_day(session.date)
    if day is not None:
        return day
    closed_at = session.closed_at_time
    if closed_at is None:
        return None
    return closed_at.date()


def _find_session(sessions: list[SaleSession], session_id: str | None) -> int | None:
    if session_id is None:
        return None
    for index, session in enumerate(sessions):
        if session.session_id == session_id:
            return index
    return None
