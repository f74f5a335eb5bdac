from __future__ import annotations

from kitchenpos.application.dto.responses import OrderTableResponse
from kitchenpos.domain.table.entities import OrderTable


def to_order_table_response(table: OrderTable) -> OrderTableResponse:
    return OrderTableResponse(
        tableId=str(table.table_id),
        name=table.name,
        numberOfGuests=table.number_of_guests,
        occupied=table.occupied,
    )
