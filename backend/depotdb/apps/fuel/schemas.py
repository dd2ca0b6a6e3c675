from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from . import models


class FuelBalanceRead(BaseModel):
    total_liters: float


class FuelBalanceUpdate(BaseModel):
    total_liters: Decimal


class FuelConsumptionCreate(BaseModel):
    machine: str
    shift: str
    amount: Decimal
    idempotency_key: Optional[str] = None


class FuelEventRead(BaseModel):
    id: str
    occurred_at: datetime
    kind: models.FuelEventKindEnum
    amount: float
    balance_before: float
    balance_after: float
    actor: str
    machine: Optional[str] = None
    shift: Optional[models.ShiftEnum] = None

    class Config:
        from_attributes = True


class FuelConsumptionRead(BaseModel):
    balance: float
    event: FuelEventRead
    replayed: bool = False
