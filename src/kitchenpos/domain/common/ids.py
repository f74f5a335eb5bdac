from __future__ import annotations

from typing import NewType

MenuId = NewType("MenuId", str)
OrderId = NewType("OrderId", str)
OrderLineItemId = NewType("OrderLineItemId", str)
OrderTableId = NewType("OrderTableId", str)
