from __future__ import annotations

from alembic import context
from sqlalchemy import create_engine, pool

from kitchenpos.infrastructure.db.models.menu import Base
from kitchenpos.infrastructure.db.models.order import OrderLineItemModel, OrderModel  # noqa: F401
from kitchenpos.infrastructure.db.models.table import OrderTableModel  # noqa: F401
from kitchenpos.infrastructure.db.session import database_url

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(database_url(), poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
