from __future__ import annotations

import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from kitchenpos.application.dto.requests import ChangeNumberOfGuestsRequest, CreateOrderTableRequest
from kitchenpos.application.errors import (
    InvalidOrderTableRequestError,
    OrderTableClearBlockedError,
    OrderTableNotFoundError,
    OrderTableNotOccupiedError,
)
from kitchenpos.application.use_cases.table_lifecycle import (
    ChangeNumberOfGuests,
    ClearOrderTable,
    CreateOrderTable,
    ListOrderTables,
    SitOrderTable,
)
from kitchenpos.domain.common.ids import MenuId, OrderId, OrderLineItemId, OrderTableId
from kitchenpos.domain.order.entities import Order, OrderLineItem, OrderStatus, OrderType


def _eat_in_order(status: OrderStatus, table_id: str = "tbl_occupied") -> Order:
    return Order(
        order_id=OrderId(f"ord_{status.value.lower()}"),
        type=OrderType.EAT_IN,
        status=status,
        order_line_items=[
            OrderLineItem(
                line_id=OrderLineItemId("oli_001"),
                menu_id=MenuId("mnu_001"),
                quantity=1,
                price=Decimal("16000"),
            )
        ],
        created_at=datetime.now(timezone.utc),
        order_table_id=OrderTableId(table_id),
    )


def test_create_table_starts_empty(table_repository) -> None:
    response = CreateOrderTable(table_repository).execute(CreateOrderTableRequest(name="9번"))

    assert response.name == "9번"
    assert response.numberOfGuests == 0
    assert response.occupied is False
    assert response.tableId in table_repository.tables


@pytest.mark.parametrize("name", [None, ""])
def test_create_table_requires_name(table_repository, name) -> None:
    with pytest.raises(InvalidOrderTableRequestError):
        CreateOrderTable(table_repository).execute(CreateOrderTableRequest(name=name))


def test_list_tables(table_repository) -> None:
    names = {table.name for table in ListOrderTables(table_repository).execute()}

    assert names == {"1번", "2번"}


def test_sit_marks_table_occupied(table_repository) -> None:
    response = SitOrderTable(table_repository).execute(OrderTableId("tbl_empty"))

    assert response.occupied is True
    assert table_repository.get(OrderTableId("tbl_empty")).occupied is True


def test_sit_unknown_table_is_not_found(table_repository) -> None:
    with pytest.raises(OrderTableNotFoundError):
        SitOrderTable(table_repository).execute(OrderTableId("tbl_missing"))


def test_clear_resets_table_when_all_orders_completed(table_repository, order_repository) -> None:
    order_repository.add(_eat_in_order(OrderStatus.COMPLETED))

    response = ClearOrderTable(table_repository, order_repository).execute(OrderTableId("tbl_occupied"))

    assert response.occupied is False
    assert response.numberOfGuests == 0


@pytest.mark.parametrize(
    "status",
    [status for status in OrderStatus if status != OrderStatus.COMPLETED],
)
def test_clear_blocked_by_uncompleted_order(table_repository, order_repository, status) -> None:
    order_repository.add(_eat_in_order(status))

    with pytest.raises(OrderTableClearBlockedError) as exc_info:
        ClearOrderTable(table_repository, order_repository).execute(OrderTableId("tbl_occupied"))

    assert exc_info.value.reason == "HAS_UNCOMPLETED_ORDERS"
    assert table_repository.get(OrderTableId("tbl_occupied")).occupied is True


def test_clear_ignores_orders_on_other_tables(table_repository, order_repository) -> None:
    order_repository.add(_eat_in_order(OrderStatus.WAITING, table_id="tbl_empty"))

    response = ClearOrderTable(table_repository, order_repository).execute(OrderTableId("tbl_occupied"))

    assert response.occupied is False


def test_clear_unknown_table_is_not_found(table_repository, order_repository) -> None:
    with pytest.raises(OrderTableNotFoundError):
        ClearOrderTable(table_repository, order_repository).execute(OrderTableId("tbl_missing"))


def test_change_number_of_guests(table_repository) -> None:
    response = ChangeNumberOfGuests(table_repository).execute(
        OrderTableId("tbl_occupied"),
        ChangeNumberOfGuestsRequest(number_of_guests=4),
    )

    assert response.numberOfGuests == 4


def test_change_number_of_guests_rejects_negative(table_repository) -> None:
    with pytest.raises(InvalidOrderTableRequestError):
        ChangeNumberOfGuests(table_repository).execute(
            OrderTableId("tbl_occupied"),
            ChangeNumberOfGuestsRequest(number_of_guests=-1),
        )


def test_change_number_of_guests_requires_occupied(table_repository) -> None:
    with pytest.raises(OrderTableNotOccupiedError):
        ChangeNumberOfGuests(table_repository).execute(
            OrderTableId("tbl_empty"),
            ChangeNumberOfGuestsRequest(number_of_guests=2),
        )


def test_change_number_of_guests_unknown_table(table_repository) -> None:
    with pytest.raises(OrderTableNotFoundError):
        ChangeNumberOfGuests(table_repository).execute(
            OrderTableId("tbl_missing"),
            ChangeNumberOfGuestsRequest(number_of_guests=2),
        )
