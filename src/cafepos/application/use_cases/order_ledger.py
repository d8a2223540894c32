from __future__ import annotations

import logging
from datetime import datetime

from cafepos.application.dto.responses import OrderListResponse
from cafepos.application.mappers.order_mapper import to_order_list_response
from cafepos.application.metrics.sales_lifecycle import record_open_ledger_size
from cafepos.application.ports.repositories import OrderLedgerRepository
from cafepos.domain.common.ids import OrderId
from cafepos.domain.common.timestamps import local_now
from cafepos.domain.order.ledger import LedgerScope, newest_first, select_scope

logger = logging.getLogger(__name__)


class ListLedgerOrders:
    def __init__(self, ledger_repository: OrderLedgerRepository, currency: str) -> None:
        self._ledger_repository = ledger_repository
        self._currency = currency

    def execute(
        self,
        scope: LedgerScope = LedgerScope.TODAY,
        search: str = "",
        now: datetime | None = None,
    ) -> OrderListResponse:
        orders = select_scope(self._ledger_repository.list_orders(), scope, now or local_now())
        matching = [order for order in newest_first(orders) if order.matches_search(search)]
        return to_order_list_response(matching, self._currency)


class DeleteLedgerOrder:
    def __init__(self, ledger_repository: OrderLedgerRepository) -> None:
        self._ledger_repository = ledger_repository

    def execute(self, order_id: OrderId) -> bool:
        orders = self._ledger_repository.list_orders()
        remaining = [order for order in orders if order.order_id != order_id]
        if len(remaining) == len(orders):
            return False

        self._ledger_repository.save_orders(remaining)
        record_open_ledger_size(len(remaining))
        logger.info("ledger_order_deleted", extra={"order_id": str(order_id)})
        return True
