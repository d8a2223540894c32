from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from cafepos.domain.common.ids import MenuItemId
from cafepos.domain.common.money import Money


class Category(str, Enum):
    DRINK = "drink"
    FOOD = "food"


@dataclass(frozen=True)
class AddOnDefinition:
    name: str
    price: Money
    allow_quantity: bool = False

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("add-on name must be non-empty")


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    name: str
    price: Money
    category: Category
    add_ons: tuple[AddOnDefinition, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        for add_on in self.add_ons:
            if add_on.price.currency != self.price.currency:
                raise ValueError("add-on currency must match item currency")

    def find_add_on(self, name: str) -> AddOnDefinition | None:
        for add_on in self.add_ons:
            if add_on.name == name:
                return add_on
        return None


def apply_display_order(items: Sequence[MenuItem], ordered_ids: Sequence[str]) -> list[MenuItem]:
    """Sort items by a saved id list.

    Ids with no matching item are ignored; items missing from the list keep
    their natural order after the listed ones.
    """
    by_id = {str(item.item_id): item for item in items}
    ordered: list[MenuItem] = []
    seen: set[str] = set()
    for item_id in ordered_ids:
        item = by_id.get(item_id)
        if item is None or item_id in seen:
            continue
        ordered.append(item)
        seen.add(item_id)
    ordered.extend(item for item in items if str(item.item_id) not in seen)
    return ordered


def move_item(ordered_ids: Sequence[str], item_id: str, target_item_id: str) -> list[str]:
    """Move ``item_id`` into the slot currently held by ``target_item_id``."""
    ids = list(ordered_ids)
    if item_id == target_item_id or item_id not in ids or target_item_id not in ids:
        return ids
    target_index = ids.index(target_item_id)
    ids.remove(item_id)
    ids.insert(target_index, item_id)
    return ids
