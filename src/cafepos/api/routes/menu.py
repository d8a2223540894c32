from __future__ import annotations

from fastapi import APIRouter, Response, status

from cafepos.application.dto.requests import (
    DisplayOrderRequest,
    MenuItemRequest,
    MoveMenuItemRequest,
)
from cafepos.application.dto.responses import MenuItemResponse, MenuResponse
from cafepos.application.use_cases.menu_catalog import (
    CreateMenuItem,
    DeleteMenuItem,
    GetMenu,
    ReorderMenu,
    UpdateMenuItem,
)
from cafepos.domain.common.ids import MenuItemId
from cafepos.domain.menu.entities import Category
from cafepos.infrastructure.storage.factory import get_currency, get_key_value_store
from cafepos.infrastructure.storage.repositories.menu_repo import (
    JsonDisplayOrderRepository,
    JsonMenuRepository,
)

router = APIRouter()


def _menu_repository() -> JsonMenuRepository:
    return JsonMenuRepository(get_key_value_store(), get_currency())


def _display_order_repository() -> JsonDisplayOrderRepository:
    return JsonDisplayOrderRepository(get_key_value_store())


@router.get("/v1/menu", response_model=MenuResponse)
def get_menu(category: Category | None = None) -> MenuResponse:
    return GetMenu(_menu_repository(), _display_order_repository()).execute(category=category)


@router.post(
    "/v1/menu",
    response_model=MenuItemResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_menu_item(payload: MenuItemRequest) -> MenuItemResponse:
    return CreateMenuItem(_menu_repository(), get_currency()).execute(payload)


@router.put("/v1/menu/display-order", response_model=MenuResponse)
def save_display_order(payload: DisplayOrderRequest) -> MenuResponse:
    use_case = ReorderMenu(_menu_repository(), _display_order_repository())
    return use_case.save(payload.item_ids)


@router.post("/v1/menu/display-order/move", response_model=MenuResponse)
def move_menu_item(payload: MoveMenuItemRequest) -> MenuResponse:
    use_case = ReorderMenu(_menu_repository(), _display_order_repository())
    return use_case.move(payload.item_id, payload.target_item_id)


@router.put("/v1/menu/{item_id}", response_model=MenuItemResponse)
def update_menu_item(item_id: str, payload: MenuItemRequest) -> MenuItemResponse:
    use_case = UpdateMenuItem(_menu_repository(), get_currency())
    return use_case.execute(MenuItemId(item_id), payload)


@router.delete("/v1/menu/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(item_id: str) -> Response:
    DeleteMenuItem(_menu_repository(), _display_order_repository()).execute(MenuItemId(item_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
