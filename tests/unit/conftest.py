from __future__ import annotations

import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from kitchenpos.application.ports.delivery import DeliveryDispatchError
from kitchenpos.application.ports.repositories import OptimisticConcurrencyError
from kitchenpos.domain.common.ids import MenuId, OrderId, OrderTableId
from kitchenpos.domain.menu.entities import Menu
from kitchenpos.domain.order.entities import Order, OrderStatus
from kitchenpos.domain.table.entities import OrderTable


class FakeMenuRepository:
    def __init__(self, menus: list[Menu]) -> None:
        self._menus = {str(menu.menu_id): menu for menu in menus}

    def get(self, menu_id: MenuId) -> Menu | None:
        return self._menus.get(str(menu_id))


class FakeOrderTableRepository:
    def __init__(self) -> None:
        self.tables: dict[str, OrderTable] = {}

    def get(self, table_id: OrderTableId) -> OrderTable | None:
        return self.tables.get(str(table_id))

    def add(self, table: OrderTable) -> None:
        self.tables[str(table.table_id)] = table

    def update(self, table: OrderTable) -> None:
        self.tables[str(table.table_id)] = table

    def list_all(self) -> list[OrderTable]:
        return list(self.tables.values())


class FakeLockedOrder:
    def __init__(self, repository: FakeOrderRepository, order: Order) -> None:
        self._repository = repository
        self.order = order
        self.staged_tables: list[OrderTable] = []

    def update_status(self, new_status: OrderStatus) -> Order:
        stored = self._repository.orders[str(self.order.order_id)]
        if stored.version != self.order.version:
            raise OptimisticConcurrencyError(f"order {self.order.order_id} version conflict")
        self.order = replace(self.order, status=new_status, version=self.order.version + 1)
        return self.order

    def save_table(self, table: OrderTable) -> None:
        self.staged_tables.append(table)


class FakeOrderRepository:
    def __init__(self, tables: FakeOrderTableRepository) -> None:
        self.orders: dict[str, Order] = {}
        self._tables = tables
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def add(self, order: Order) -> None:
        self.orders[str(order.order_id)] = order

    def get(self, order_id: OrderId) -> Order | None:
        return self.orders.get(str(order_id))

    def list_all(self) -> list[Order]:
        return list(self.orders.values())

    @contextmanager
    def lock_for_update(self, order_id: OrderId) -> Iterator[FakeLockedOrder | None]:
        with self._guard:
            lock = self._locks.setdefault(str(order_id), threading.Lock())
        with lock:
            order = self.orders.get(str(order_id))
            if order is None:
                yield None
                return

            locked = FakeLockedOrder(self, order)
            yield locked
            # commit: the table write goes first so a failing write leaves the order untouched
            for table in locked.staged_tables:
                self._tables.update(table)
            self.orders[str(order_id)] = locked.order

    def exists_by_table_and_status_not(
        self,
        table_id: OrderTableId,
        status: OrderStatus,
    ) -> bool:
        return any(
            order.order_table_id == table_id and order.status != status
            for order in self.orders.values()
        )


class FakePublisher:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []
        self.fail = False

    def publish(self, channel: str, message: str) -> None:
        if self.fail:
            raise ConnectionError("redis unavailable")
        self.messages.append((channel, message))


class FakeDeliveryClient:
    def __init__(self) -> None:
        self.calls: list[tuple[OrderId, str, Decimal]] = []
        self.error: Exception | None = None

    def request_delivery(self, order_id: OrderId, delivery_address: str, amount: Decimal) -> None:
        self.calls.append((order_id, delivery_address, amount))
        if self.error is not None:
            raise self.error


MENUS = [
    Menu(menu_id=MenuId("mnu_001"), name="후라이드치킨", price=Decimal("16000"), displayed=True),
    Menu(menu_id=MenuId("mnu_002"), name="양념치킨", price=Decimal("17000"), displayed=True),
    Menu(menu_id=MenuId("mnu_hidden"), name="파닭치킨", price=Decimal("18000"), displayed=False),
]


@pytest.fixture
def menu_repository() -> FakeMenuRepository:
    return FakeMenuRepository(MENUS)


@pytest.fixture
def table_repository() -> FakeOrderTableRepository:
    repository = FakeOrderTableRepository()
    repository.add(OrderTable(table_id=OrderTableId("tbl_occupied"), name="1번").sit())
    repository.add(OrderTable(table_id=OrderTableId("tbl_empty"), name="2번"))
    return repository


@pytest.fixture
def order_repository(table_repository: FakeOrderTableRepository) -> FakeOrderRepository:
    return FakeOrderRepository(table_repository)


@pytest.fixture
def publisher() -> FakePublisher:
    return FakePublisher()


@pytest.fixture
def delivery_client() -> FakeDeliveryClient:
    return FakeDeliveryClient()


@pytest.fixture
def dispatch_error() -> DeliveryDispatchError:
    return DeliveryDispatchError("rider service down")
