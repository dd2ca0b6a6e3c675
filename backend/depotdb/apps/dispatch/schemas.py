from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class DispatchCreate(BaseModel):
    item_name: str
    quantity: Decimal
    destination: str
    recipient: str


class DispatchRead(BaseModel):
    id: str
    occurred_at: datetime
    item_name: str
    quantity: float
    destination: str
    recipient: str
    actor: str

    class Config:
        from_attributes = True
