from __future__ import annotations

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from kitchenpos.infrastructure.db.models.menu import Base


class OrderTableModel(Base):
    __tablename__ = "order_tables"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    number_of_guests: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    occupied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
