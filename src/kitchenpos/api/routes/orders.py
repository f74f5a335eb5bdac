from __future__ import annotations

from fastapi import APIRouter, status

from kitchenpos.api.middleware.request_id import get_request_id
from kitchenpos.application.dto.requests import CreateOrderRequest
from kitchenpos.application.dto.responses import OrderResponse
from kitchenpos.application.use_cases.accept_order import AcceptOrder
from kitchenpos.application.use_cases.complete_order import CompleteOrder
from kitchenpos.application.use_cases.context import TraceContext
from kitchenpos.application.use_cases.create_order import CreateOrder
from kitchenpos.application.use_cases.delivery import CompleteOrderDelivery, StartOrderDelivery
from kitchenpos.application.use_cases.get_order import GetOrder, ListOrders
from kitchenpos.application.use_cases.order_transition import OrderTransitionUseCase
from kitchenpos.application.use_cases.serve_order import ServeOrder
from kitchenpos.domain.common.ids import OrderId
from kitchenpos.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from kitchenpos.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from kitchenpos.infrastructure.db.repositories.table_repo import SqlAlchemyOrderTableRepository
from kitchenpos.infrastructure.delivery.kitchenriders_client import KitchenRidersClient
from kitchenpos.infrastructure.messaging.redis_publisher import RedisEventPublisher
from kitchenpos.infrastructure.observability.otel import current_trace_id

router = APIRouter(prefix="/v1/orders", tags=["orders"])


def _trace_context() -> TraceContext:
    return TraceContext(trace_id=current_trace_id(), request_id=get_request_id())


def _create_order_use_case() -> CreateOrder:
    return CreateOrder(
        menu_repository=SqlAlchemyMenuRepository(),
        table_repository=SqlAlchemyOrderTableRepository(),
        order_repository=SqlAlchemyOrderRepository(),
        publisher=RedisEventPublisher(),
    )


def _get_order_use_case() -> GetOrder:
    return GetOrder(order_repository=SqlAlchemyOrderRepository())


def _list_orders_use_case() -> ListOrders:
    return ListOrders(order_repository=SqlAlchemyOrderRepository())


def _accept_order_use_case() -> AcceptOrder:
    return AcceptOrder(
        order_repository=SqlAlchemyOrderRepository(),
        delivery_client=KitchenRidersClient(),
        publisher=RedisEventPublisher(),
    )


def _serve_order_use_case() -> ServeOrder:
    return ServeOrder(order_repository=SqlAlchemyOrderRepository(), publisher=RedisEventPublisher())


def _start_delivery_use_case() -> StartOrderDelivery:
    return StartOrderDelivery(
        order_repository=SqlAlchemyOrderRepository(),
        publisher=RedisEventPublisher(),
    )


def _complete_delivery_use_case() -> CompleteOrderDelivery:
    return CompleteOrderDelivery(
        order_repository=SqlAlchemyOrderRepository(),
        publisher=RedisEventPublisher(),
    )


def _complete_order_use_case() -> CompleteOrder:
    return CompleteOrder(
        order_repository=SqlAlchemyOrderRepository(),
        table_repository=SqlAlchemyOrderTableRepository(),
        publisher=RedisEventPublisher(),
    )


def _run_transition(use_case: OrderTransitionUseCase, order_id: str) -> OrderResponse:
    return use_case.execute(order_id=OrderId(order_id), trace_ctx=_trace_context())


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(request_dto: CreateOrderRequest) -> OrderResponse:
    return _create_order_use_case().execute(request_dto=request_dto, trace_ctx=_trace_context())


@router.get("", response_model=list[OrderResponse])
def list_orders() -> list[OrderResponse]:
    return _list_orders_use_case().execute()


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: str) -> OrderResponse:
    return _get_order_use_case().execute(order_id=OrderId(order_id))


@router.post("/{order_id}/accept", response_model=OrderResponse)
def accept_order(order_id: str) -> OrderResponse:
    return _run_transition(_accept_order_use_case(), order_id)


@router.post("/{order_id}/serve", response_model=OrderResponse)
def serve_order(order_id: str) -> OrderResponse:
    return _run_transition(_serve_order_use_case(), order_id)


@router.post("/{order_id}/start-delivery", response_model=OrderResponse)
def start_delivery(order_id: str) -> OrderResponse:
    return _run_transition(_start_delivery_use_case(), order_id)


@router.post("/{order_id}/complete-delivery", response_model=OrderResponse)
def complete_delivery(order_id: str) -> OrderResponse:
    return _run_transition(_complete_delivery_use_case(), order_id)


@router.post("/{order_id}/complete", response_model=OrderResponse)
def complete_order(order_id: str) -> OrderResponse:
    return _run_transition(_complete_order_use_case(), order_id)
