from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from kitchenpos.domain.common.ids import OrderId
from kitchenpos.domain.order.entities import OrderStatus, OrderType


@dataclass(frozen=True)
class OrderStatusChanged:
    order_id: OrderId
    type: OrderType
    from_status: OrderStatus
    to_status: OrderStatus
    occurred_at: datetime
