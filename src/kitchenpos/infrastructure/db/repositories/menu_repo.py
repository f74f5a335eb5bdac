from __future__ import annotations

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from kitchenpos.application.ports.repositories import MenuRepository
from kitchenpos.domain.common.ids import MenuId
from kitchenpos.domain.menu.entities import Menu
from kitchenpos.infrastructure.db.models.menu import MenuModel
from kitchenpos.infrastructure.db.session import get_engine


class SqlAlchemyMenuRepository(MenuRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, menu_id: MenuId) -> Menu | None:
        statement = select(MenuModel).where(MenuModel.id == str(menu_id)).limit(1)

        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()

        if model is None:
            return None

        return Menu(
            menu_id=MenuId(model.id),
            name=model.name,
            price=model.price,
            displayed=model.displayed,
        )
