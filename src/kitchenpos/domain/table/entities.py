from __future__ import annotations

from dataclasses import dataclass, replace

from kitchenpos.domain.common.ids import OrderTableId

MAX_NAME_LENGTH = 255


@dataclass(frozen=True)
class OrderTable:
    table_id: OrderTableId
    name: str
    number_of_guests: int = 0
    occupied: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name must be non-empty")
        if len(self.name) > MAX_NAME_LENGTH:
            raise ValueError(f"name must be at most {MAX_NAME_LENGTH} characters")
        if self.number_of_guests < 0:
            raise ValueError("number_of_guests must be >= 0")

    def sit(self) -> OrderTable:
        return replace(self, occupied=True)

    def clear(self) -> OrderTable:
        return replace(self, number_of_guests=0, occupied=False)

    def change_number_of_guests(self, number_of_guests: int) -> OrderTable:
        if number_of_guests < 0:
            raise InvalidNumberOfGuestsError("number_of_guests must be >= 0")
        self.ensure_occupied()
        return replace(self, number_of_guests=number_of_guests)

    def ensure_occupied(self) -> None:
        if not self.occupied:
            raise TableNotOccupiedError(f"order table {self.table_id} is not occupied")


class TableNotOccupiedError(Exception):
    pass


class InvalidNumberOfGuestsError(Exception):
    pass
