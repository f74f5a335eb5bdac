from __future__ import annotations

from sqlalchemy import Engine, select, update
from sqlalchemy.orm import Session

from kitchenpos.application.ports.repositories import OrderTableRepository
from kitchenpos.domain.common.ids import OrderTableId
from kitchenpos.domain.table.entities import OrderTable
from kitchenpos.infrastructure.db.models.table import OrderTableModel
from kitchenpos.infrastructure.db.session import get_engine


class SqlAlchemyOrderTableRepository(OrderTableRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, table_id: OrderTableId) -> OrderTable | None:
        statement = select(OrderTableModel).where(OrderTableModel.id == str(table_id))
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()

        if model is None:
            return None

        return self._to_domain(model)

    def add(self, table: OrderTable) -> None:
        with Session(self._engine) as session:
            session.add(
                OrderTableModel(
                    id=str(table.table_id),
                    name=table.name,
                    number_of_guests=table.number_of_guests,
                    occupied=table.occupied,
                )
            )
            session.commit()

    def update(self, table: OrderTable) -> None:
        statement = (
            update(OrderTableModel)
            .where(OrderTableModel.id == str(table.table_id))
            .values(
                name=table.name,
                number_of_guests=table.number_of_guests,
                occupied=table.occupied,
            )
        )
        with Session(self._engine) as session:
            session.execute(statement)
            session.commit()

    def list_all(self) -> list[OrderTable]:
        statement = select(OrderTableModel).order_by(OrderTableModel.name, OrderTableModel.id)
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
        return [self._to_domain(model) for model in models]

    def _to_domain(self, model: OrderTableModel) -> OrderTable:
        return OrderTable(
            table_id=OrderTableId(model.id),
            name=model.name,
            number_of_guests=model.number_of_guests,
            occupied=model.occupied,
        )
