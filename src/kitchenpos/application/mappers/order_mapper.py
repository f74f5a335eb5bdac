from __future__ import annotations

from kitchenpos.application.dto.responses import OrderLineItemResponse, OrderResponse
from kitchenpos.domain.order.entities import Order


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        orderId=str(order.order_id),
        type=order.type.value,
        status=order.status.value,
        orderLineItems=[
            OrderLineItemResponse(
                lineId=str(item.line_id),
                menuId=str(item.menu_id),
                quantity=item.quantity,
                price=item.price,
            )
            for item in order.order_line_items
        ],
        totalPrice=order.total_price,
        deliveryAddress=order.delivery_address,
        orderTableId=str(order.order_table_id) if order.order_table_id is not None else None,
        createdAt=order.created_at,
    )
