from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from kitchenpos.domain.common.ids import OrderId


class DeliveryDispatchClient(Protocol):
    def request_delivery(
        self,
        order_id: OrderId,
        delivery_address: str,
        amount: Decimal,
    ) -> None: ...


class DeliveryDispatchError(Exception):
    pass
