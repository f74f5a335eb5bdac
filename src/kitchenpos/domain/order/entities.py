from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum

from kitchenpos.domain.common.ids import MenuId, OrderId, OrderLineItemId, OrderTableId


class OrderType(str, Enum):
    DELIVERY = "DELIVERY"
    TAKEOUT = "TAKEOUT"
    EAT_IN = "EAT_IN"


class OrderStatus(str, Enum):
    WAITING = "WAITING"
    ACCEPTED = "ACCEPTED"
    SERVED = "SERVED"
    DELIVERING = "DELIVERING"
    DELIVERED = "DELIVERED"
    COMPLETED = "COMPLETED"


class OrderAction(str, Enum):
    ACCEPT = "ACCEPT"
    SERVE = "SERVE"
    START_DELIVERY = "START_DELIVERY"
    COMPLETE_DELIVERY = "COMPLETE_DELIVERY"
    COMPLETE = "COMPLETE"


@dataclass(frozen=True)
class Transition:
    source: OrderStatus
    target: OrderStatus
    dispatches_delivery: bool = False
    releases_table: bool = False


TRANSITIONS: dict[tuple[OrderAction, OrderType], Transition] = {
    (OrderAction.ACCEPT, OrderType.DELIVERY): Transition(
        OrderStatus.WAITING, OrderStatus.ACCEPTED, dispatches_delivery=True
    ),
    (OrderAction.ACCEPT, OrderType.TAKEOUT): Transition(OrderStatus.WAITING, OrderStatus.ACCEPTED),
    (OrderAction.ACCEPT, OrderType.EAT_IN): Transition(OrderStatus.WAITING, OrderStatus.ACCEPTED),
    (OrderAction.SERVE, OrderType.DELIVERY): Transition(OrderStatus.ACCEPTED, OrderStatus.SERVED),
    (OrderAction.SERVE, OrderType.TAKEOUT): Transition(OrderStatus.ACCEPTED, OrderStatus.SERVED),
    (OrderAction.SERVE, OrderType.EAT_IN): Transition(OrderStatus.ACCEPTED, OrderStatus.SERVED),
    (OrderAction.START_DELIVERY, OrderType.DELIVERY): Transition(
        OrderStatus.SERVED, OrderStatus.DELIVERING
    ),
    (OrderAction.COMPLETE_DELIVERY, OrderType.DELIVERY): Transition(
        OrderStatus.DELIVERING, OrderStatus.DELIVERED
    ),
    (OrderAction.COMPLETE, OrderType.DELIVERY): Transition(
        OrderStatus.DELIVERED, OrderStatus.COMPLETED
    ),
    (OrderAction.COMPLETE, OrderType.TAKEOUT): Transition(
        OrderStatus.SERVED, OrderStatus.COMPLETED
    ),
    (OrderAction.COMPLETE, OrderType.EAT_IN): Transition(
        OrderStatus.SERVED, OrderStatus.COMPLETED, releases_table=True
    ),
}


@dataclass(frozen=True)
class OrderLineItem:
    line_id: OrderLineItemId
    menu_id: MenuId
    quantity: int
    price: Decimal

    @property
    def amount(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    type: OrderType
    status: OrderStatus
    order_line_items: list[OrderLineItem]
    created_at: datetime
    delivery_address: str | None = None
    order_table_id: OrderTableId | None = None
    version: int = 1

    def __post_init__(self) -> None:
        if not self.order_line_items:
            raise ValueError("order must contain at least one line item")
        if self.type != OrderType.EAT_IN and any(
            item.quantity < 0 for item in self.order_line_items
        ):
            raise ValueError("quantity must be >= 0 unless the order is EAT_IN")
        if self.type == OrderType.DELIVERY and not (self.delivery_address or "").strip():
            raise ValueError("delivery_address must be set for DELIVERY orders")
        if self.type == OrderType.EAT_IN and self.order_table_id is None:
            raise ValueError("order_table_id must be set for EAT_IN orders")

    @property
    def total_price(self) -> Decimal:
        return sum((item.amount for item in self.order_line_items), Decimal("0"))

    def transition_for(self, action: OrderAction) -> Transition:
        transition = TRANSITIONS.get((action, self.type))
        if transition is None:
            raise OrderTransitionError(
                f"cannot {action.value.lower()} order of type={self.type.value}"
            )
        if self.status != transition.source:
            raise OrderTransitionError(
                f"cannot {action.value.lower()} order from status={self.status.value}"
            )
        return transition

    def apply(self, action: OrderAction) -> Order:
        transition = self.transition_for(action)
        return replace(self, status=transition.target)

    def accept(self) -> Order:
        return self.apply(OrderAction.ACCEPT)

    def serve(self) -> Order:
        return self.apply(OrderAction.SERVE)

    def start_delivery(self) -> Order:
        return self.apply(OrderAction.START_DELIVERY)

    def complete_delivery(self) -> Order:
        return self.apply(OrderAction.COMPLETE_DELIVERY)

    def complete(self) -> Order:
        return self.apply(OrderAction.COMPLETE)


def create_waiting_order(
    order_id: OrderId,
    order_type: OrderType,
    order_line_items: list[OrderLineItem],
    now: datetime,
    delivery_address: str | None = None,
    order_table_id: OrderTableId | None = None,
) -> Order:
    if not order_line_items:
        raise ValueError("order must contain at least one line item")

    return Order(
        order_id=order_id,
        type=order_type,
        status=OrderStatus.WAITING,
        order_line_items=order_line_items,
        created_at=now,
        delivery_address=delivery_address if order_type == OrderType.DELIVERY else None,
        order_table_id=order_table_id if order_type == OrderType.EAT_IN else None,
    )


class OrderTransitionError(Exception):
    pass
