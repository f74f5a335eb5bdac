from __future__ import annotations

from kitchenpos.application.use_cases.order_transition import OrderTransitionUseCase
from kitchenpos.domain.order.entities import OrderAction


class ServeOrder(OrderTransitionUseCase):
    action = OrderAction.SERVE
