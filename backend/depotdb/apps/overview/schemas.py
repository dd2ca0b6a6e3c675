from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel

from depotdb.apps.stock.models import StockCategory


class LowStockItem(BaseModel):
    category: StockCategory
    id: str
    name: str
    quantity: float
    unit: str
    alert_threshold: float
    location: Optional[str] = None


class LowStockReport(BaseModel):
    by_category: Dict[StockCategory, List[LowStockItem]]
    total: int


class OverviewSummary(BaseModel):
    oils_count: int
    chemicals_count: int
    parts_count: int
    diesel_balance: float
    low_stock_count: int
    total_activity_count: int
