from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol

from kitchenpos.domain.common.ids import MenuId, OrderId, OrderTableId
from kitchenpos.domain.menu.entities import Menu
from kitchenpos.domain.order.entities import Order, OrderStatus
from kitchenpos.domain.table.entities import OrderTable


class MenuRepository(Protocol):
    def get(self, menu_id: MenuId) -> Menu | None: ...


class OrderTableRepository(Protocol):
    def get(self, table_id: OrderTableId) -> OrderTable | None: ...

    def add(self, table: OrderTable) -> None: ...

    def update(self, table: OrderTable) -> None: ...

    def list_all(self) -> list[OrderTable]: ...


class LockedOrder(Protocol):
    """An order row held for one transaction.

    Writes made through the handle commit together when the lock context exits
    normally and are rolled back when it exits with an exception.
    """

    order: Order

    def update_status(self, new_status: OrderStatus) -> Order: ...

    def save_table(self, table: OrderTable) -> None: ...


class OrderRepository(Protocol):
    def add(self, order: Order) -> None: ...

    def get(self, order_id: OrderId) -> Order | None: ...

    def list_all(self) -> list[Order]: ...

    def lock_for_update(self, order_id: OrderId) -> AbstractContextManager[LockedOrder | None]: ...

    def exists_by_table_and_status_not(
        self,
        table_id: OrderTableId,
        status: OrderStatus,
    ) -> bool: ...


class OptimisticConcurrencyError(Exception):
    pass
