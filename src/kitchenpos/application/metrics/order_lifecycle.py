from __future__ import annotations

from datetime import datetime, timezone

from prometheus_client import Counter, Histogram

from kitchenpos.domain.order.entities import Order, OrderStatus

ORDERS_TOTAL = Counter(
    "kitchenpos_orders_total",
    "Total number of orders observed by type and status.",
    ["type", "status"],
)

ORDER_TRANSITION_TOTAL = Counter(
    "kitchenpos_order_transition_total",
    "Total number of order lifecycle transitions.",
    ["type", "from", "to"],
)

ORDER_TIME_TO_COMPLETE_SECONDS = Histogram(
    "kitchenpos_order_time_to_complete_seconds",
    "Time between order creation and completion.",
    ["type"],
)

DELIVERY_DISPATCH_TOTAL = Counter(
    "kitchenpos_delivery_dispatch_total",
    "Total number of delivery dispatch requests by outcome.",
    ["outcome"],
)

TABLES_OCCUPIED_TOTAL = Counter(
    "kitchenpos_order_tables_occupied_total",
    "Total number of times a guest party sat at an order table.",
)

TABLES_CLEARED_TOTAL = Counter(
    "kitchenpos_order_tables_cleared_total",
    "Total number of order tables cleared.",
    ["source"],
)

TABLE_CLEAR_BLOCKED_TOTAL = Counter(
    "kitchenpos_order_table_clear_blocked_total",
    "Total number of blocked order table clear attempts.",
    ["reason"],
)


def record_order_status(order: Order) -> None:
    ORDERS_TOTAL.labels(type=order.type.value, status=order.status.value).inc()


def record_transition(order: Order, from_status: OrderStatus, to_status: OrderStatus) -> None:
    ORDER_TRANSITION_TOTAL.labels(
        **{"type": order.type.value, "from": from_status.value, "to": to_status.value}
    ).inc()


def record_time_to_complete(order: Order, now: datetime | None = None) -> None:
    current = now or datetime.now(timezone.utc)
    ORDER_TIME_TO_COMPLETE_SECONDS.labels(type=order.type.value).observe(
        max((current - order.created_at).total_seconds(), 0.0)
    )


def record_delivery_dispatch(outcome: str) -> None:
    DELIVERY_DISPATCH_TOTAL.labels(outcome=outcome).inc()


def record_table_occupied() -> None:
    TABLES_OCCUPIED_TOTAL.inc()


def record_table_cleared(source: str) -> None:
    TABLES_CLEARED_TOTAL.labels(source=source).inc()


def record_table_clear_blocked(reason: str) -> None:
    TABLE_CLEAR_BLOCKED_TOTAL.labels(reason=reason).inc()
