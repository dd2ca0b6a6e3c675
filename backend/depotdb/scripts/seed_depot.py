"""
First-run seeding for a depot database.

Creates the diesel tank row and the default pick-lists and, with --demo, a
handful of stock items so a fresh terminal has something to show. Safe to run
repeatedly: existing rows are left alone.

    python -m depotdb.scripts.seed_depot --demo --actor "Depot Admin"
"""

from __future__ import annotations

import argparse
import logging
from decimal import Decimal
from typing import Dict, List

from sqlalchemy.orm import Session

from depotdb.apps.fuel import services as fuel_services
from depotdb.apps.stock import schemas as stock_schemas
from depotdb.apps.stock import services as stock_services
from depotdb.apps.stock.models import StockCategory, StockItem
from depotdb.apps.vocabulary import services as vocabulary_services
from depotdb.database import WriteSessionLocal

logger = logging.getLogger(__name__)

SEED_ACTOR = "seed"

DEMO_ITEMS: Dict[StockCategory, List[dict]] = {
    StockCategory.OIL: [
        {"name": "Hydraulic oil HV46", "quantity": Decimal("200"), "alert_threshold": Decimal("40")},
        {"name": "Engine oil 15W40", "quantity": Decimal("120"), "alert_threshold": Decimal("30")},
    ],
    StockCategory.CHEMICAL: [
        {"name": "Bentonite", "quantity": Decimal("500"), "alert_threshold": Decimal("100")},
        {"name": "Polymer additive", "quantity": Decimal("25"), "alert_threshold": Decimal("10")},
    ],
    StockCategory.PART: [
        {
            "name": "Drill bit 152mm",
            "quantity": Decimal("6"),
            "alert_threshold": Decimal("2"),
            "family": "Drilling",
            "location": "Rack A2",
        },
        {
            "name": "Hydraulic hose 1/2in",
            "quantity": Decimal("10"),
            "alert_threshold": Decimal("4"),
            "family": "Hydraulics",
            "location": "Rack C1",
        },
    ],
}


def _item_exists(db: Session, category: StockCategory, name: str) -> bool:
    return (
        db.query(StockItem.id)
        .filter(StockItem.category == category, StockItem.name == name)
        .first()
        is not None
    )


def seed_demo_items(db: Session, *, actor: str = SEED_ACTOR) -> int:
    created = 0
    for category, rows in DEMO_ITEMS.items():
        for row in rows:
            if _item_exists(db, category, row["name"]):
                continue
            stock_services.create_item(
                db,
                category=category,
                payload=stock_schemas.StockItemCreate(**row),
                actor=actor,
            )
            created += 1
    return created


def seed(db: Session, *, demo: bool = False, initial_diesel=None, actor: str = SEED_ACTOR) -> dict:
    fuel_services.ensure_tank(db)
    if initial_diesel is not None and fuel_services.get_balance(db) == 0:
        fuel_services.set_balance(db, new_total=initial_diesel, actor=actor)
    terms_added = vocabulary_services.seed_defaults(db, actor=actor)
    created = seed_demo_items(db, actor=actor) if demo else 0
    balance = fuel_services.get_balance(db)
    logger.info(
        "Depot seeded",
        extra={"items_created": created, "terms_added": terms_added, "diesel_balance": str(balance)},
    )
    return {"items_created": created, "terms_added": terms_added, "diesel_balance": balance}


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a depot stock database.")
    parser.add_argument("--demo", action="store_true", help="Add demo oils, chemicals and spare parts.")
    parser.add_argument("--diesel", type=Decimal, default=None, help="Initial diesel balance in litres.")
    parser.add_argument("--actor", default=SEED_ACTOR, help="Name recorded in the audit log.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    db = WriteSessionLocal()
    try:
        result = seed(db, demo=args.demo, initial_diesel=args.diesel, actor=args.actor)
    finally:
        db.close()

    print(f"[OK] Items created: {result['items_created']}")
    print(f"[OK] Pick-list terms added: {result['terms_added']}")
    print(f"[OK] Diesel balance: {result['diesel_balance']} L")


if __name__ == "__main__":
    main()
