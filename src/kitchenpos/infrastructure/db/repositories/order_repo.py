from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from datetime import timezone

from sqlalchemy import Engine, select, update
from sqlalchemy.orm import Session, joinedload, selectinload

from kitchenpos.application.ports.repositories import (
    LockedOrder,
    OptimisticConcurrencyError,
    OrderRepository,
)
from kitchenpos.domain.common.ids import MenuId, OrderId, OrderLineItemId, OrderTableId
from kitchenpos.domain.order.entities import Order, OrderLineItem, OrderStatus, OrderType
from kitchenpos.domain.table.entities import OrderTable
from kitchenpos.infrastructure.db.models.order import OrderLineItemModel, OrderModel
from kitchenpos.infrastructure.db.models.table import OrderTableModel
from kitchenpos.infrastructure.db.session import get_engine


class SqlAlchemyLockedOrder(LockedOrder):
    def __init__(self, session: Session, order: Order) -> None:
        self._session = session
        self.order = order

    def update_status(self, new_status: OrderStatus) -> Order:
        statement = (
            update(OrderModel)
            .where(
                OrderModel.id == str(self.order.order_id),
                OrderModel.version == self.order.version,
            )
            .values(status=new_status.value, version=OrderModel.version + 1)
        )
        result = self._session.execute(statement)
        if result.rowcount != 1:
            raise OptimisticConcurrencyError(f"order {self.order.order_id} version conflict")

        self.order = replace(self.order, status=new_status, version=self.order.version + 1)
        return self.order

    def save_table(self, table: OrderTable) -> None:
        self._session.execute(
            update(OrderTableModel)
            .where(OrderTableModel.id == str(table.table_id))
            .values(
                name=table.name,
                number_of_guests=table.number_of_guests,
                occupied=table.occupied,
            )
        )


class SqlAlchemyOrderRepository(OrderRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, order: Order) -> None:
        order_model = self._to_model(order)
        with Session(self._engine) as session:
            session.add(order_model)
            session.commit()

    def get(self, order_id: OrderId) -> Order | None:
        statement = (
            select(OrderModel)
            .options(joinedload(OrderModel.order_line_items))
            .where(OrderModel.id == str(order_id))
            .limit(1)
        )
        with Session(self._engine) as session:
            model = session.execute(statement).unique().scalar_one_or_none()

        if model is None:
            return None

        return self._to_domain(model)

    def list_all(self) -> list[Order]:
        statement = (
            select(OrderModel)
            .options(joinedload(OrderModel.order_line_items))
            .order_by(OrderModel.created_at, OrderModel.id)
        )
        with Session(self._engine) as session:
            models = list(session.execute(statement).unique().scalars().all())
        return [self._to_domain(model) for model in models]

    @contextmanager
    def lock_for_update(self, order_id: OrderId) -> Iterator[SqlAlchemyLockedOrder | None]:
        # selectinload keeps FOR UPDATE off the outer join to line items
        statement = (
            select(OrderModel)
            .options(selectinload(OrderModel.order_line_items))
            .where(OrderModel.id == str(order_id))
            .with_for_update()
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                yield None
                return

            locked = SqlAlchemyLockedOrder(session, self._to_domain(model))
            try:
                yield locked
            except BaseException:
                session.rollback()
                raise
            session.commit()

    def exists_by_table_and_status_not(
        self,
        table_id: OrderTableId,
        status: OrderStatus,
    ) -> bool:
        statement = (
            select(OrderModel.id)
            .where(
                OrderModel.order_table_id == str(table_id),
                OrderModel.status != status.value,
            )
            .limit(1)
        )
        with Session(self._engine) as session:
            value = session.execute(statement).scalar_one_or_none()
        return value is not None

    def _to_model(self, order: Order) -> OrderModel:
        order_model = OrderModel(
            id=str(order.order_id),
            type=order.type.value,
            status=order.status.value,
            created_at=order.created_at,
            delivery_address=order.delivery_address,
            order_table_id=str(order.order_table_id) if order.order_table_id else None,
            version=order.version,
        )
        order_model.order_line_items = [
            OrderLineItemModel(
                id=str(item.line_id),
                order_id=str(order.order_id),
                seq=seq,
                menu_id=str(item.menu_id),
                quantity=item.quantity,
                price=item.price,
            )
            for seq, item in enumerate(order.order_line_items, start=1)
        ]
        return order_model

    def _to_domain(self, model: OrderModel) -> Order:
        created_at = model.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return Order(
            order_id=OrderId(model.id),
            type=OrderType(model.type),
            status=OrderStatus(model.status),
            order_line_items=[
                OrderLineItem(
                    line_id=OrderLineItemId(item.id),
                    menu_id=MenuId(item.menu_id),
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in model.order_line_items
            ],
            created_at=created_at,
            delivery_address=model.delivery_address,
            order_table_id=OrderTableId(model.order_table_id) if model.order_table_id else None,
            version=model.version,
        )
