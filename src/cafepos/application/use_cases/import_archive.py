from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from threading import Lock
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from cafepos.application.dto.responses import ImportResultResponse
from cafepos.application.metrics.sales_lifecycle import (
    record_archive_import_rejected,
    record_archive_imported,
)
from cafepos.application.ports.repositories import ArchiveRepository
from cafepos.domain.archive.categorization import classify
from cafepos.domain.archive.entities import SaleSession, open_session
from cafepos.domain.common.ids import MenuItemId, OrderId, new_order_id, new_session_id
from cafepos.domain.common.money import Money
from cafepos.domain.common.timestamps import local_now, parse_day
from cafepos.domain.menu.entities import MenuItem
from cafepos.domain.order.entities import Order, OrderItem

logger = logging.getLogger(__name__)


class InvalidImportFormatError(Exception):
    pass


class LegacyLineItem(BaseModel):
    price: Decimal = Field(default=Decimal("0"), ge=0)
    quantity: int = Field(default=1, ge=1)

    @field_validator("price", mode="before")
    @classmethod
    def _missing_price(cls, value: Any) -> Any:
        return Decimal("0") if value is None else value

    @field_validator("quantity", mode="before")
    @classmethod
    def _missing_quantity(cls, value: Any) -> Any:
        return 1 if value is None or value == 0 else value


class LegacyOrderRecord(BaseModel):
    id: str | int | None = None
    details: dict[str, LegacyLineItem] = Field(min_length=1)
    timestamp: str | None = None


class ImportPreviewNotFoundError(Exception):
    pass


class PendingImport:
    """The most recent import preview, held until it is confirmed.

    A new preview replaces the previous one, so only the sessions the
    operator last saw can be written.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._preview_id: str | None = None
        self._sessions: list[SaleSession] = []

    def hold(self, sessions: list[SaleSession]) -> str:
        preview_id = f"imp_{uuid4().hex}"
        with self._lock:
            self._preview_id = preview_id
            self._sessions = list(sessions)
        return preview_id

    def take(self, preview_id: str) -> list[SaleSession]:
        with self._lock:
            if preview_id != self._preview_id:
                raise ImportPreviewNotFoundError(f"import preview {preview_id} is not pending")
            sessions = self._sessions
            self._preview_id = None
            self._sessions = []
        return sessions


_PAYLOAD_ADAPTER = TypeAdapter(dict[str, list[LegacyOrderRecord]])


def import_session_name(day: date) -> str:
    return f"Imported Session - {day.isoformat()}"


class ImportArchive:
    """Two-phase import of a legacy ``{date: [order, ...]}`` export.

    ``preview`` converts without writing; ``confirm`` appends the previewed
    sessions to the archive.
    """

    def __init__(self, archive_repository: ArchiveRepository, currency: str) -> None:
        self._archive_repository = archive_repository
        self._currency = currency

    def preview(self, payload: str | bytes, now: datetime | None = None) -> list[SaleSession]:
        try:
            parsed = _PAYLOAD_ADAPTER.validate_json(payload)
        except ValidationError as exc:
            record_archive_import_rejected()
            raise InvalidImportFormatError(f"import payload is not a valid export: {exc}") from exc

        current = now or local_now()
        sessions: list[SaleSession] = []
        for date_key, records in parsed.items():
            day = parse_day(date_key)
            if day is None:
                record_archive_import_rejected()
                raise InvalidImportFormatError(f"unrecognised date key {date_key!r}")
            try:
                orders = [self._convert_order(record, day, current) for record in records]
            except ValueError as exc:
                record_archive_import_rejected()
                raise InvalidImportFormatError(
                    f"orders under {date_key!r} could not be converted: {exc}"
                ) from exc
            sessions.append(
                open_session(
                    session_id=new_session_id(),
                    orders=orders,
                    name=import_session_name(day),
                    date=day.isoformat(),
                    currency=self._currency,
                    now=current,
                )
            )
        return sessions

    def confirm(self, sessions: list[SaleSession]) -> ImportResultResponse:
        if not sessions:
            return ImportResultResponse(importedSessions=0, importedOrders=0)

        archive = self._archive_repository.list_sessions()
        archive.extend(sessions)
        self._archive_repository.save_sessions(archive)

        imported_orders = sum(session.order_count for session in sessions)
        record_archive_imported(len(sessions))
        logger.info(
            "archive_imported",
            extra={"session_count": len(sessions), "order_count": imported_orders},
        )
        return ImportResultResponse(importedSessions=len(sessions), importedOrders=imported_orders)

    def execute(self, payload: str | bytes, now: datetime | None = None) -> ImportResultResponse:
        return self.confirm(self.preview(payload, now=now))

    def _convert_order(self, record: LegacyOrderRecord, day: date, now: datetime) -> Order:
        items = []
        for raw_name, line in record.details.items():
            name = raw_name.strip()
            menu_item = MenuItem(
                item_id=MenuItemId(f"imp_{uuid4().hex[:12]}"),
                name=name,
                price=Money.from_decimal(line.price, self._currency),
                category=classify(name),
            )
            items.append(OrderItem(menu_item=menu_item, quantity=line.quantity))

        order_id = OrderId(str(record.id)) if record.id is not None else new_order_id(now)
        return Order(
            order_id=order_id,
            items=tuple(items),
            timestamp=record.timestamp or "",
            date=day.isoformat(),
        )
