from __future__ import annotations

from kitchenpos.application.metrics.order_lifecycle import record_delivery_dispatch
from kitchenpos.application.ports.delivery import DeliveryDispatchClient
from kitchenpos.application.ports.publisher import EventPublisher
from kitchenpos.application.ports.repositories import OrderRepository
from kitchenpos.application.use_cases.order_transition import OrderTransitionUseCase
from kitchenpos.domain.order.entities import Order, OrderAction, Transition


class AcceptOrder(OrderTransitionUseCase):
    action = OrderAction.ACCEPT

    def __init__(
        self,
        order_repository: OrderRepository,
        delivery_client: DeliveryDispatchClient,
        publisher: EventPublisher,
    ) -> None:
        super().__init__(order_repository=order_repository, publisher=publisher)
        self._delivery_client = delivery_client

    def _before_commit(self, order: Order, transition: Transition) -> None:
        if not transition.dispatches_delivery:
            return

        # runs under the order lock; a raise here rolls the transition back
        try:
            self._delivery_client.request_delivery(
                order_id=order.order_id,
                delivery_address=order.delivery_address or "",
                amount=order.total_price,
            )
        except Exception:
            record_delivery_dispatch(outcome="failed")
            raise
        record_delivery_dispatch(outcome="requested")
