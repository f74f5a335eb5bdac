from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from kitchenpos.domain.common.ids import MenuId


@dataclass(frozen=True)
class Menu:
    menu_id: MenuId
    name: str
    price: Decimal
    displayed: bool

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if self.price < 0:
            raise ValueError("price must be >= 0")
