from __future__ import annotations

from fastapi import APIRouter, status

from kitchenpos.application.dto.requests import ChangeNumberOfGuestsRequest, CreateOrderTableRequest
from kitchenpos.application.dto.responses import OrderTableResponse
from kitchenpos.application.use_cases.table_lifecycle import (
    ChangeNumberOfGuests,
    ClearOrderTable,
    CreateOrderTable,
    ListOrderTables,
    SitOrderTable,
)
from kitchenpos.domain.common.ids import OrderTableId
from kitchenpos.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from kitchenpos.infrastructure.db.repositories.table_repo import SqlAlchemyOrderTableRepository

router = APIRouter(prefix="/v1/order-tables", tags=["order-tables"])


def _create_table_use_case() -> CreateOrderTable:
    return CreateOrderTable(table_repository=SqlAlchemyOrderTableRepository())


def _list_tables_use_case() -> ListOrderTables:
    return ListOrderTables(table_repository=SqlAlchemyOrderTableRepository())


def _sit_table_use_case() -> SitOrderTable:
    return SitOrderTable(table_repository=SqlAlchemyOrderTableRepository())


def _clear_table_use_case() -> ClearOrderTable:
    return ClearOrderTable(
        table_repository=SqlAlchemyOrderTableRepository(),
        order_repository=SqlAlchemyOrderRepository(),
    )


def _change_guests_use_case() -> ChangeNumberOfGuests:
    return ChangeNumberOfGuests(table_repository=SqlAlchemyOrderTableRepository())


@router.post("", response_model=OrderTableResponse, status_code=status.HTTP_201_CREATED)
def create_order_table(request_dto: CreateOrderTableRequest) -> OrderTableResponse:
    return _create_table_use_case().execute(request_dto=request_dto)


@router.get("", response_model=list[OrderTableResponse])
def list_order_tables() -> list[OrderTableResponse]:
    return _list_tables_use_case().execute()


@router.post("/{table_id}/sit", response_model=OrderTableResponse)
def sit_order_table(table_id: str) -> OrderTableResponse:
    return _sit_table_use_case().execute(table_id=OrderTableId(table_id))


@router.post("/{table_id}/clear", response_model=OrderTableResponse)
def clear_order_table(table_id: str) -> OrderTableResponse:
    return _clear_table_use_case().execute(table_id=OrderTableId(table_id))


@router.put("/{table_id}/number-of-guests", response_model=OrderTableResponse)
def change_number_of_guests(
    table_id: str,
    request_dto: ChangeNumberOfGuestsRequest,
) -> OrderTableResponse:
    return _change_guests_use_case().execute(
        table_id=OrderTableId(table_id),
        request_dto=request_dto,
    )
