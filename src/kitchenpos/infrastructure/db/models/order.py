from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kitchenpos.infrastructure.db.models.menu import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    delivery_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    order_table_id: Mapped[str | None] = mapped_column(
        String(50),
        ForeignKey("order_tables.id"),
        nullable=True,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    order_line_items: Mapped[list["OrderLineItemModel"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLineItemModel.seq",
    )

    __table_args__ = (
        Index("ix_orders_order_table_id_status", "order_table_id", "status"),
        Index("ix_orders_created_at", "created_at"),
    )


class OrderLineItemModel(Base):
    __tablename__ = "order_line_items"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    order_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    seq: Mapped[int] = mapped_column(Integer, nullable=False)
    menu_id: Mapped[str] = mapped_column(String(50), ForeignKey("menus.id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(19, 2), nullable=False)

    order: Mapped[OrderModel] = relationship(back_populates="order_line_items")
