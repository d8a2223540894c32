from __future__ import annotations

from fastapi import APIRouter, Response, status

from cafepos.application.dto.responses import OrderListResponse
from cafepos.application.use_cases.order_ledger import DeleteLedgerOrder, ListLedgerOrders
from cafepos.domain.common.ids import OrderId
from cafepos.domain.order.ledger import LedgerScope
from cafepos.infrastructure.storage.factory import get_currency, get_key_value_store
from cafepos.infrastructure.storage.repositories.order_repo import JsonOrderLedgerRepository

router = APIRouter()


def _ledger_repository() -> JsonOrderLedgerRepository:
    return JsonOrderLedgerRepository(get_key_value_store(), get_currency())


@router.get("/v1/orders", response_model=OrderListResponse)
def list_orders(scope: LedgerScope = LedgerScope.TODAY, search: str = "") -> OrderListResponse:
    return ListLedgerOrders(_ledger_repository(), get_currency()).execute(scope=scope, search=search)


@router.delete("/v1/orders/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: str) -> Response:
    DeleteLedgerOrder(_ledger_repository()).execute(OrderId(order_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
