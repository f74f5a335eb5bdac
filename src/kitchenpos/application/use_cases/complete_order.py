from __future__ import annotations

from kitchenpos.application.errors import OrderTableNotFoundError
from kitchenpos.application.metrics.order_lifecycle import (
    record_table_cleared,
    record_time_to_complete,
)
from kitchenpos.application.ports.publisher import EventPublisher
from kitchenpos.application.ports.repositories import (
    LockedOrder,
    OrderRepository,
    OrderTableRepository,
)
from kitchenpos.application.use_cases.order_transition import OrderTransitionUseCase
from kitchenpos.domain.order.entities import Order, OrderAction, Transition
from kitchenpos.domain.order.events import OrderStatusChanged
from kitchenpos.domain.table.entities import OrderTable


class CompleteOrder(OrderTransitionUseCase):
    action = OrderAction.COMPLETE

    def __init__(
        self,
        order_repository: OrderRepository,
        table_repository: OrderTableRepository,
        publisher: EventPublisher,
    ) -> None:
        super().__init__(order_repository=order_repository, publisher=publisher)
        self._table_repository = table_repository

    def _stage(self, locked: LockedOrder, order: Order, transition: Transition) -> None:
        if not transition.releases_table:
            return

        # other open orders on the table do not block this release
        locked.save_table(self._load_table(order).clear())

    def _after_commit(self, order: Order, transition: Transition) -> None:
        if transition.releases_table:
            record_table_cleared(source="order_completed")

    def _record(self, order: Order, event: OrderStatusChanged) -> None:
        record_time_to_complete(order, now=event.occurred_at)

    def _load_table(self, order: Order) -> OrderTable:
        table = None
        if order.order_table_id is not None:
            table = self._table_repository.get(order.order_table_id)
        if table is None:
            raise OrderTableNotFoundError(
                f"order table {order.order_table_id} of order {order.order_id} not found"
            )
        return table
