"""
Cross-category overview: low-stock alerts and dashboard counters.

Everything here is recomputed from the record stores on each call. The depot
holds a few hundred rows at most, and an alert view must never be stale.
"""

from __future__ import annotations

from typing import Dict, List

from sqlalchemy.orm import Session

from depotdb.apps.audit import services as audit_services
from depotdb.apps.fuel import services as fuel_services
from depotdb.apps.stock import services as stock_services
from depotdb.apps.stock.models import StockCategory
from depotdb.apps.stock.thresholds import is_low

from . import schemas


def _tag(item, category: StockCategory) -> schemas.LowStockItem:
    return schemas.LowStockItem(
        category=category,
        id=item.id,
        name=item.name,
        quantity=float(item.quantity),
        unit=item.unit,
        alert_threshold=float(item.alert_threshold),
        location=item.location,
    )


def compute_low_stock(db: Session) -> Dict[StockCategory, List[schemas.LowStockItem]]:
    """Low items per category; every category is present, possibly empty."""
    report: Dict[StockCategory, List[schemas.LowStockItem]] = {}
    for category in StockCategory:
        items = stock_services.list_items(db, category=category)
        report[category] = [_tag(item, category) for item in items if is_low(item)]
    return report


def list_low_stock(db: Session) -> List[schemas.LowStockItem]:
    report = compute_low_stock(db)
    return [item for category in StockCategory for item in report[category]]


def summary_counts(db: Session) -> schemas.OverviewSummary:
    counts: Dict[StockCategory, int] = {}
    low_stock_count = 0
    for category in StockCategory:
        items = stock_services.list_items(db, category=category)
        counts[category] = len(items)
        low_stock_count += sum(1 for item in items if is_low(item))

    return schemas.OverviewSummary(
        oils_count=counts[StockCategory.OIL],
        chemicals_count=counts[StockCategory.CHEMICAL],
        parts_count=counts[StockCategory.PART],
        diesel_balance=float(fuel_services.get_balance(db)),
        low_stock_count=low_stock_count,
        total_activity_count=audit_services.count_entries(db),
    )
