from __future__ import annotations

from datetime import datetime
from typing import NewType
from uuid import uuid4

MenuItemId = NewType("MenuItemId", str)
OrderId = NewType("OrderId", str)
SessionId = NewType("SessionId", str)


def new_menu_item_id() -> MenuItemId:
    return MenuItemId(f"itm_{uuid4().hex[:12]}")


def new_order_id(now: datetime) -> OrderId:
    return OrderId(f"ord_{now:%Y%m%d%H%M%S}_{uuid4().hex[:6]}")


def new_session_id() -> SessionId:
    return SessionId(f"ses_{uuid4().hex[:12]}")
