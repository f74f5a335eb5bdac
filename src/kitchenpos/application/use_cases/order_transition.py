from __future__ import annotations

import logging
from datetime import datetime, timezone

from kitchenpos.application.dto.responses import OrderResponse
from kitchenpos.application.errors import (
    InvalidOrderTransitionError,
    OrderConflictError,
    OrderNotFoundError,
)
from kitchenpos.application.mappers.event_envelope import EVENT_TYPES, serialize_order_event
from kitchenpos.application.mappers.order_mapper import to_order_response
from kitchenpos.application.metrics.order_lifecycle import record_order_status, record_transition
from kitchenpos.application.ports.publisher import ORDER_EVENTS_CHANNEL, EventPublisher
from kitchenpos.application.ports.repositories import (
    LockedOrder,
    OptimisticConcurrencyError,
    OrderRepository,
)
from kitchenpos.application.use_cases.context import TraceContext
from kitchenpos.domain.common.ids import OrderId
from kitchenpos.domain.order.entities import Order, OrderAction, OrderTransitionError, Transition
from kitchenpos.domain.order.events import OrderStatusChanged

logger = logging.getLogger(__name__)


class OrderTransitionUseCase:
    """Runs one transition while holding the order's row lock.

    Subclasses set ``action`` and may hook ``_before_commit`` (validated, nothing
    written yet), ``_stage`` (status written, same transaction) and
    ``_after_commit`` (transaction committed).
    """

    action: OrderAction

    def __init__(self, order_repository: OrderRepository, publisher: EventPublisher) -> None:
        self._order_repository = order_repository
        self._publisher = publisher

    def execute(self, order_id: OrderId, trace_ctx: TraceContext | None = None) -> OrderResponse:
        trace_ctx = trace_ctx or TraceContext.empty()

        with self._order_repository.lock_for_update(order_id) as locked:
            if locked is None:
                raise OrderNotFoundError(f"order {order_id} not found")

            order = locked.order
            try:
                transition = order.transition_for(self.action)
            except OrderTransitionError as exc:
                raise InvalidOrderTransitionError(str(exc)) from exc

            self._before_commit(order, transition)

            try:
                persisted_order = locked.update_status(transition.target)
            except OptimisticConcurrencyError as exc:
                raise OrderConflictError(f"order {order_id} changed concurrently") from exc

            self._stage(locked, persisted_order, transition)

        self._after_commit(persisted_order, transition)

        event = OrderStatusChanged(
            order_id=persisted_order.order_id,
            type=persisted_order.type,
            from_status=order.status,
            to_status=persisted_order.status,
            occurred_at=datetime.now(timezone.utc),
        )
        record_transition(persisted_order, from_status=event.from_status, to_status=event.to_status)
        record_order_status(persisted_order)
        self._record(persisted_order, event)

        message = serialize_order_event(
            event_type=EVENT_TYPES[self.action],
            occurred_at=event.occurred_at,
            order=persisted_order,
            trace_id=trace_ctx.trace_id,
            request_id=trace_ctx.request_id,
        )
        try:
            self._publisher.publish(channel=ORDER_EVENTS_CHANNEL, message=message)
        except Exception:
            logger.warning("order_event_publish_failed", exc_info=True)

        return to_order_response(persisted_order)

    def _before_commit(self, order: Order, transition: Transition) -> None:
        return None

    def _stage(self, locked: LockedOrder, order: Order, transition: Transition) -> None:
        return None

    def _after_commit(self, order: Order, transition: Transition) -> None:
        return None

    def _record(self, order: Order, event: OrderStatusChanged) -> None:
        return None
