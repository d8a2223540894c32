from __future__ import annotations

from fastapi import APIRouter, Request, Response, status

from cafepos.application.dto.requests import CloseSaleRequest
from cafepos.application.dto.responses import (
    ArchiveResponse,
    ImportPreviewResponse,
    ImportResultResponse,
    SaleSessionResponse,
)
from cafepos.application.mappers.archive_mapper import to_sale_session_response
from cafepos.application.use_cases.archive import (
    ArchiveSort,
    DeleteOrderFromSession,
    DeleteSession,
    ListArchive,
)
from cafepos.application.use_cases.close_sale import CloseSale, ListMergeTargets
from cafepos.application.use_cases.import_archive import ImportArchive, PendingImport
from cafepos.domain.common.ids import OrderId, SessionId
from cafepos.infrastructure.storage.factory import get_currency, get_key_value_store
from cafepos.infrastructure.storage.repositories.archive_repo import JsonArchiveRepository
from cafepos.infrastructure.storage.repositories.order_repo import JsonOrderLedgerRepository

router = APIRouter()


def _archive_repository() -> JsonArchiveRepository:
    return JsonArchiveRepository(get_key_value_store(), get_currency())


def _close_sale_use_case() -> CloseSale:
    return CloseSale(
        ledger_repository=JsonOrderLedgerRepository(get_key_value_store(), get_currency()),
        archive_repository=_archive_repository(),
        currency=get_currency(),
    )


def _import_use_case() -> ImportArchive:
    return ImportArchive(_archive_repository(), get_currency())


def _pending_import(request: Request) -> PendingImport:
    return request.app.state.pending_import


@router.post(
    "/v1/sales/close",
    response_model=SaleSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
def close_sale(payload: CloseSaleRequest) -> SaleSessionResponse:
    return _close_sale_use_case().execute(
        mode=payload.mode,
        scope=payload.scope,
        session_id=payload.session_id,
        name=payload.name,
    )


@router.get("/v1/archive", response_model=ArchiveResponse)
def list_archive(search: str = "", sort: ArchiveSort = ArchiveSort.DATE) -> ArchiveResponse:
    return ListArchive(_archive_repository(), get_currency()).execute(search=search, sort_by=sort)


@router.get("/v1/archive/merge-targets", response_model=list[SaleSessionResponse])
def list_merge_targets() -> list[SaleSessionResponse]:
    return ListMergeTargets(_archive_repository()).execute()


@router.post("/v1/archive/import/preview", response_model=ImportPreviewResponse)
async def preview_import(request: Request) -> ImportPreviewResponse:
    sessions = _import_use_case().preview(await request.body())
    return ImportPreviewResponse(
        previewId=_pending_import(request).hold(sessions),
        sessions=[to_sale_session_response(session) for session in sessions],
    )


@router.post(
    "/v1/archive/import/{preview_id}/confirm",
    response_model=ImportResultResponse,
    status_code=status.HTTP_201_CREATED,
)
def confirm_import(preview_id: str, request: Request) -> ImportResultResponse:
    return _import_use_case().confirm(_pending_import(request).take(preview_id))


@router.post(
    "/v1/archive/import",
    response_model=ImportResultResponse,
    status_code=status.HTTP_201_CREATED,
)
async def import_archive(request: Request) -> ImportResultResponse:
    """Preview and confirm in one step; ids are generated afresh."""
    return _import_use_case().execute(await request.body())


@router.delete("/v1/archive/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str) -> Response:
    DeleteSession(_archive_repository()).execute(SessionId(session_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/v1/archive/{session_id}/orders/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_archived_order(session_id: str, order_id: str) -> Response:
    DeleteOrderFromSession(_archive_repository()).execute(SessionId(session_id), OrderId(order_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
