from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class OrderLineItemResponse(BaseModel):
    lineId: str
    menuId: str
    quantity: int
    price: Decimal


class OrderResponse(BaseModel):
    orderId: str
    type: str
    status: str
    orderLineItems: list[OrderLineItemResponse] = Field(default_factory=list)
    totalPrice: Decimal
    deliveryAddress: str | None = None
    orderTableId: str | None = None
    createdAt: datetime


class OrderTableResponse(BaseModel):
    tableId: str
    name: str
    numberOfGuests: int
    occupied: bool
