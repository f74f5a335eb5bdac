from __future__ import annotations

from kitchenpos.application.dto.responses import OrderResponse
from kitchenpos.application.errors import OrderNotFoundError
from kitchenpos.application.mappers.order_mapper import to_order_response
from kitchenpos.application.ports.repositories import OrderRepository
from kitchenpos.domain.common.ids import OrderId


class GetOrder:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, order_id: OrderId) -> OrderResponse:
        order = self._order_repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")
        return to_order_response(order)


class ListOrders:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self) -> list[OrderResponse]:
        return [to_order_response(order) for order in self._order_repository.list_all()]
