from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from . import models


class StockItemBase(BaseModel):
    name: str
    quantity: Decimal
    unit: Optional[str] = None
    alert_threshold: Decimal
    family: Optional[str] = None
    location: Optional[str] = None


class StockItemCreate(StockItemBase):
    pass


class StockItemUpdate(BaseModel):
    name: Optional[str] = None
    quantity: Optional[Decimal] = None
    unit: Optional[str] = None
    alert_threshold: Optional[Decimal] = None
    family: Optional[str] = None
    location: Optional[str] = None
    # When set, the update only applies if nobody changed the item since.
    expected_revision: Optional[int] = None


class StockItemRead(BaseModel):
    id: str
    category: models.StockCategory
    name: str
    quantity: float
    unit: str
    alert_threshold: float
    family: Optional[str] = None
    location: Optional[str] = None
    revision: int
    is_low: bool
    created_at: datetime
    last_modified: datetime
    last_modified_by: str

    class Config:
        from_attributes = True
