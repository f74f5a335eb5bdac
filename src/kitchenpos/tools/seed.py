from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from kitchenpos.infrastructure.db.models.menu import MenuModel
from kitchenpos.infrastructure.db.models.table import OrderTableModel
from kitchenpos.infrastructure.db.session import get_engine
from kitchenpos.infrastructure.observability.logging_config import configure_logging

logger = logging.getLogger(__name__)

MENUS = [
    {"id": "mnu_001", "name": "Fried Chicken", "price": Decimal("16000.00"), "displayed": True},
    {"id": "mnu_002", "name": "Seasoned Chicken", "price": Decimal("17000.00"), "displayed": True},
    {"id": "mnu_003", "name": "Half and Half", "price": Decimal("17500.00"), "displayed": True},
    {"id": "mnu_004", "name": "Green Onion Chicken", "price": Decimal("18000.00"), "displayed": False},
]

ORDER_TABLES = [{"id": f"tbl_{number:03d}", "name": f"{number}번"} for number in range(1, 9)]


def main() -> None:
    configure_logging()
    engine = get_engine(timeout_seconds=2.0)
    if not {"menus", "order_tables"}.issubset(set(inspect(engine).get_table_names())):
        logger.warning("seed_skipped_no_schema")
        return

    with Session(engine) as session:
        for menu in MENUS:
            session.merge(MenuModel(**menu))
        for table in ORDER_TABLES:
            existing = session.get(OrderTableModel, table["id"])
            if existing is None:
                session.add(OrderTableModel(number_of_guests=0, occupied=False, **table))
            else:
                existing.name = table["name"]
        session.commit()

    logger.info("seed_complete")


if __name__ == "__main__":
    main()
