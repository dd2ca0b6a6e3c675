from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from depotdb.database import get_read_db

from . import schemas, services

router = APIRouter(
    prefix="/overview",
    tags=["overview"],
)


@router.get("/low-stock", response_model=schemas.LowStockReport)
def low_stock_report(db: Session = Depends(get_read_db)):
    by_category = services.compute_low_stock(db)
    return schemas.LowStockReport(
        by_category=by_category,
        total=sum(len(items) for items in by_category.values()),
    )


@router.get("/low-stock/items", response_model=List[schemas.LowStockItem])
def low_stock_items(db: Session = Depends(get_read_db)):
    return services.list_low_stock(db)


@router.get("/summary", response_model=schemas.OverviewSummary)
def summary(db: Session = Depends(get_read_db)):
    return services.summary_counts(db)
