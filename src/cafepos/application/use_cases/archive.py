from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum

from cafepos.application.dto.responses import ArchiveResponse
from cafepos.application.mappers.archive_mapper import to_archive_response
from cafepos.application.ports.repositories import ArchiveRepository
from cafepos.domain.archive.entities import SaleSession
from cafepos.domain.common.ids import OrderId, SessionId
from cafepos.domain.common.timestamps import local_now

logger = logging.getLogger(__name__)


class ArchiveSort(str, Enum):
    DATE = "date"
    SALES = "sales"


def sort_sessions(sessions: list[SaleSession], sort_by: ArchiveSort) -> list[SaleSession]:
    if sort_by == ArchiveSort.SALES:
        return sorted(sessions, key=lambda session: session.total_sales.amount_cents, reverse=True)
    return sorted(
        sessions,
        key=lambda session: (
            session.closed_at_time is not None,
            session.closed_at_time or datetime.min,
        ),
        reverse=True,
    )


class ListArchive:
    def __init__(self, archive_repository: ArchiveRepository, currency: str) -> None:
        self._archive_repository = archive_repository
        self._currency = currency

    def execute(self, search: str = "", sort_by: ArchiveSort = ArchiveSort.DATE) -> ArchiveResponse:
        sessions = sort_sessions(self._archive_repository.list_sessions(), sort_by)
        matching = [session for session in sessions if session.matches_search(search)]
        return to_archive_response(matching, self._currency)


class DeleteSession:
    def __init__(self, archive_repository: ArchiveRepository) -> None:
        self._archive_repository = archive_repository

    def execute(self, session_id: SessionId) -> bool:
        sessions = self._archive_repository.list_sessions()
        remaining = [session for session in sessions if session.session_id != session_id]
        if len(remaining) == len(sessions):
            return False

        self._archive_repository.save_sessions(remaining)
        logger.info("sale_session_deleted", extra={"session_id": str(session_id)})
        return True


class DeleteOrderFromSession:
    def __init__(self, archive_repository: ArchiveRepository) -> None:
        self._archive_repository = archive_repository

    def execute(
        self,
        session_id: SessionId,
        order_id: OrderId,
        now: datetime | None = None,
    ) -> bool:
        sessions = self._archive_repository.list_sessions()
        for index, session in enumerate(sessions):
            if session.session_id != session_id:
                continue
            updated = session.without_order(order_id, now or local_now())
            if updated is None:
                return False
            sessions[index] = updated
            self._archive_repository.save_sessions(sessions)
            logger.info(
                "archived_order_deleted",
                extra={"session_id": str(session_id), "order_id": str(order_id)},
            )
            return True
        return False
