from __future__ import annotations

from uuid import uuid4

from kitchenpos.application.dto.requests import (
    ChangeNumberOfGuestsRequest,
    CreateOrderTableRequest,
)
from kitchenpos.application.dto.responses import OrderTableResponse
from kitchenpos.application.errors import (
    InvalidOrderTableRequestError,
    OrderTableClearBlockedError,
    OrderTableNotFoundError,
    OrderTableNotOccupiedError,
)
from kitchenpos.application.mappers.table_mapper import to_order_table_response
from kitchenpos.application.metrics.order_lifecycle import (
    record_table_clear_blocked,
    record_table_cleared,
    record_table_occupied,
)
from kitchenpos.application.ports.repositories import OrderRepository, OrderTableRepository
from kitchenpos.domain.common.ids import OrderTableId
from kitchenpos.domain.order.entities import OrderStatus
from kitchenpos.domain.table.entities import (
    InvalidNumberOfGuestsError,
    OrderTable,
    TableNotOccupiedError,
)


def _get_table(table_repository: OrderTableRepository, table_id: OrderTableId) -> OrderTable:
    table = table_repository.get(table_id)
    if table is None:
        raise OrderTableNotFoundError(f"order table {table_id} not found")
    return table


class CreateOrderTable:
    def __init__(self, table_repository: OrderTableRepository) -> None:
        self._table_repository = table_repository

    def execute(self, request_dto: CreateOrderTableRequest) -> OrderTableResponse:
        if request_dto.name is None:
            raise InvalidOrderTableRequestError("name is required")
        try:
            table = OrderTable(
                table_id=OrderTableId(f"tbl_{uuid4().hex[:12]}"),
                name=request_dto.name,
            )
        except ValueError as exc:
            raise InvalidOrderTableRequestError(str(exc)) from exc

        self._table_repository.add(table)
        return to_order_table_response(table)


class ListOrderTables:
    def __init__(self, table_repository: OrderTableRepository) -> None:
        self._table_repository = table_repository

    def execute(self) -> list[OrderTableResponse]:
        return [to_order_table_response(table) for table in self._table_repository.list_all()]


class SitOrderTable:
    def __init__(self, table_repository: OrderTableRepository) -> None:
        self._table_repository = table_repository

    def execute(self, table_id: OrderTableId) -> OrderTableResponse:
        table = _get_table(self._table_repository, table_id)
        occupied = table.sit()
        self._table_repository.update(occupied)
        record_table_occupied()
        return to_order_table_response(occupied)


class ClearOrderTable:
    def __init__(
        self,
        table_repository: OrderTableRepository,
        order_repository: OrderRepository,
    ) -> None:
        self._table_repository = table_repository
        self._order_repository = order_repository

    def execute(self, table_id: OrderTableId) -> OrderTableResponse:
        table = _get_table(self._table_repository, table_id)

        if self._order_repository.exists_by_table_and_status_not(
            table_id=table.table_id,
            status=OrderStatus.COMPLETED,
        ):
            reason = "HAS_UNCOMPLETED_ORDERS"
            record_table_clear_blocked(reason=reason)
            raise OrderTableClearBlockedError(
                f"order table {table_id} cannot be cleared while uncompleted orders exist",
                reason=reason,
            )

        cleared = table.clear()
        self._table_repository.update(cleared)
        record_table_cleared(source="manual")
        return to_order_table_response(cleared)


class ChangeNumberOfGuests:
    def __init__(self, table_repository: OrderTableRepository) -> None:
        self._table_repository = table_repository

    def execute(
        self,
        table_id: OrderTableId,
        request_dto: ChangeNumberOfGuestsRequest,
    ) -> OrderTableResponse:
        if request_dto.number_of_guests < 0:
            raise InvalidOrderTableRequestError("number_of_guests must be >= 0")

        table = _get_table(self._table_repository, table_id)
        try:
            changed = table.change_number_of_guests(request_dto.number_of_guests)
        except InvalidNumberOfGuestsError as exc:
            raise InvalidOrderTableRequestError(str(exc)) from exc
        except TableNotOccupiedError as exc:
            raise OrderTableNotOccupiedError(str(exc)) from exc

        self._table_repository.update(changed)
        return to_order_table_response(changed)
