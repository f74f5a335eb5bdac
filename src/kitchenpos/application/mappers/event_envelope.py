from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import uuid4

from kitchenpos.domain.order.entities import Order, OrderAction

EVENT_TYPES: dict[OrderAction, str] = {
    OrderAction.ACCEPT: "order.accepted",
    OrderAction.SERVE: "order.served",
    OrderAction.START_DELIVERY: "order.delivery_started",
    OrderAction.COMPLETE_DELIVERY: "order.delivery_completed",
    OrderAction.COMPLETE: "order.completed",
}


def _serialize_event(
    *,
    event_type: str,
    occurred_at: datetime,
    order_id: str,
    payload: dict[str, Any],
    trace_id: str | None,
    request_id: str | None,
) -> str:
    envelope = {
        "event_id": str(uuid4()),
        "event_type": event_type,
        "occurred_at": occurred_at.isoformat(),
        "request_id": request_id,
        "trace_id": trace_id,
        "order_id": order_id,
        "payload": payload,
    }
    return json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)


def serialize_order_event(
    *,
    event_type: str,
    occurred_at: datetime,
    order: Order,
    trace_id: str | None,
    request_id: str | None,
) -> str:
    return _serialize_event(
        event_type=event_type,
        occurred_at=occurred_at,
        order_id=str(order.order_id),
        trace_id=trace_id,
        request_id=request_id,
        payload={
            "orderId": str(order.order_id),
            "type": order.type.value,
            "status": order.status.value,
            "totalPrice": str(order.total_price),
            "deliveryAddress": order.delivery_address,
            "orderTableId": str(order.order_table_id) if order.order_table_id else None,
            "createdAt": order.created_at.isoformat(),
            "orderLineItems": [
                {
                    "lineId": str(item.line_id),
                    "menuId": str(item.menu_id),
                    "quantity": item.quantity,
                    "price": str(item.price),
                }
                for item in order.order_line_items
            ],
        },
    )
