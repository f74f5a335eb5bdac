from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from kitchenpos.application.dto.requests import CreateOrderRequest
from kitchenpos.application.dto.responses import OrderResponse
from kitchenpos.application.errors import (
    InvalidOrderRequestError,
    MenuNotDisplayedError,
    MenuNotFoundError,
    OrderTableNotFoundError,
    OrderTableNotOccupiedError,
)
from kitchenpos.application.mappers.event_envelope import serialize_order_event
from kitchenpos.application.mappers.order_mapper import to_order_response
from kitchenpos.application.metrics.order_lifecycle import record_order_status
from kitchenpos.application.ports.publisher import ORDER_EVENTS_CHANNEL, EventPublisher
from kitchenpos.application.ports.repositories import (
    MenuRepository,
    OrderRepository,
    OrderTableRepository,
)
from kitchenpos.application.use_cases.context import TraceContext
from kitchenpos.domain.common.ids import MenuId, OrderId, OrderLineItemId, OrderTableId
from kitchenpos.domain.menu.entities import Menu
from kitchenpos.domain.order.entities import OrderLineItem, OrderType, create_waiting_order
from kitchenpos.domain.table.entities import TableNotOccupiedError

logger = logging.getLogger(__name__)


class CreateOrder:
    def __init__(
        self,
        menu_repository: MenuRepository,
        table_repository: OrderTableRepository,
        order_repository: OrderRepository,
        publisher: EventPublisher,
    ) -> None:
        self._menu_repository = menu_repository
        self._table_repository = table_repository
        self._order_repository = order_repository
        self._publisher = publisher

    def execute(
        self,
        request_dto: CreateOrderRequest,
        trace_ctx: TraceContext | None = None,
    ) -> OrderResponse:
        trace_ctx = trace_ctx or TraceContext.empty()
        order_type = request_dto.type
        if order_type is None:
            raise InvalidOrderRequestError("order type is required")

        request_items = request_dto.order_line_items
        if not request_items:
            raise InvalidOrderRequestError("order must contain at least one line item")

        menus: list[Menu] = []
        for request_item in request_items:
            menu = self._menu_repository.get(MenuId(request_item.menu_id))
            if menu is None:
                raise MenuNotFoundError(f"menu {request_item.menu_id} not found")
            menus.append(menu)

        if order_type != OrderType.EAT_IN:
            for request_item in request_items:
                if request_item.quantity < 0:
                    raise InvalidOrderRequestError(
                        f"quantity must be >= 0 for {order_type.value} orders"
                    )

        for menu in menus:
            if not menu.displayed:
                raise MenuNotDisplayedError(f"menu {menu.menu_id} is not displayed")

        for request_item, menu in zip(request_items, menus):
            if request_item.price is not None and request_item.price != menu.price:
                raise InvalidOrderRequestError(
                    f"price {request_item.price} does not match menu {menu.menu_id} "
                    f"price {menu.price}"
                )

        delivery_address: str | None = None
        if order_type == OrderType.DELIVERY:
            delivery_address = request_dto.delivery_address
            if delivery_address is None or not delivery_address.strip():
                raise InvalidOrderRequestError("delivery address is required for DELIVERY orders")

        order_table_id: OrderTableId | None = None
        if order_type == OrderType.EAT_IN:
            order_table_id = self._load_occupied_table_id(request_dto.order_table_id)

        order = create_waiting_order(
            order_id=OrderId(f"ord_{uuid4().hex[:12]}"),
            order_type=order_type,
            order_line_items=[
                OrderLineItem(
                    line_id=OrderLineItemId(f"oli_{uuid4().hex[:12]}"),
                    menu_id=menu.menu_id,
                    quantity=request_item.quantity,
                    price=menu.price,
                )
                for request_item, menu in zip(request_items, menus)
            ],
            now=datetime.now(timezone.utc),
            delivery_address=delivery_address,
            order_table_id=order_table_id,
        )
        self._order_repository.add(order)

        message = serialize_order_event(
            event_type="order.created",
            occurred_at=order.created_at,
            order=order,
            trace_id=trace_ctx.trace_id,
            request_id=trace_ctx.request_id,
        )
        record_order_status(order)
        try:
            self._publisher.publish(channel=ORDER_EVENTS_CHANNEL, message=message)
        except Exception:
            logger.warning("order_event_publish_failed", exc_info=True)

        return to_order_response(order)

    def _load_occupied_table_id(self, raw_table_id: str | None) -> OrderTableId:
        if raw_table_id is None:
            raise OrderTableNotFoundError("order table is required for EAT_IN orders")

        table = self._table_repository.get(OrderTableId(raw_table_id))
        if table is None:
            raise OrderTableNotFoundError(f"order table {raw_table_id} not found")
        try:
            table.ensure_occupied()
        except TableNotOccupiedError as exc:
            raise OrderTableNotOccupiedError(str(exc)) from exc
        return table.table_id
