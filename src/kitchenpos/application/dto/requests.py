from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from kitchenpos.domain.order.entities import OrderType


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class OrderLineItemRequest(CamelBaseModel):
    menu_id: str
    quantity: int
    price: Decimal | None = None


class CreateOrderRequest(CamelBaseModel):
    type: OrderType | None = None
    order_line_items: list[OrderLineItemRequest] | None = None
    delivery_address: str | None = None
    order_table_id: str | None = None


class CreateOrderTableRequest(CamelBaseModel):
    name: str | None = None


class ChangeNumberOfGuestsRequest(CamelBaseModel):
    number_of_guests: int
