from __future__ import annotations

from kitchenpos.application.use_cases.order_transition import OrderTransitionUseCase
from kitchenpos.domain.order.entities import OrderAction


class StartOrderDelivery(OrderTransitionUseCase):
    action = OrderAction.START_DELIVERY


class CompleteOrderDelivery(OrderTransitionUseCase):
    action = OrderAction.COMPLETE_DELIVERY
