from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Enum as SAEnum,
    Index,
    Integer,
    Numeric,
    String,
    desc,
)

from depotdb.database import Base
from depotdb.utils.identifiers import generate_uuid7


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FuelEventKindEnum(str, enum.Enum):
    CONSUMPTION = "CONSUMPTION"
    MANUAL_ADJUSTMENT = "MANUAL_ADJUSTMENT"


class ShiftEnum(str, enum.Enum):
    DAY = "DAY"
    NIGHT = "NIGHT"


class FuelTank(Base):
    """
    Diesel on hand. One row per deployment; every write to `total_liters`
    is paired with exactly one FuelEvent in the same transaction.
    """

    __tablename__ = "fuel_tanks"
    __table_args__ = (
        CheckConstraint("total_liters >= 0", name="ck_fuel_tanks_total_non_negative"),
    )

    id = Column(String(16), primary_key=True)
    total_liters = Column(Numeric(14, 3), nullable=False, default=0)
    version = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_by = Column(String(128), nullable=True)


class FuelEvent(Base):
    """
    Append-only record of one balance change. Never updated or deleted.
    """

    __tablename__ = "fuel_events"
    __table_args__ = (
        Index("ix_fuel_events_time_desc", desc("occurred_at")),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid7, index=True)
    occurred_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    kind = Column(SAEnum(FuelEventKindEnum, name="fuel_event_kind_enum"), nullable=False, index=True)
    # Consumption: positive draw. Adjustment: signed delta (new - previous).
    amount = Column(Numeric(14, 3), nullable=False)
    balance_before = Column(Numeric(14, 3), nullable=False)
    balance_after = Column(Numeric(14, 3), nullable=False)
    actor = Column(String(128), nullable=False)
    machine = Column(String(128), nullable=True)
    shift = Column(SAEnum(ShiftEnum, name="fuel_shift_enum"), nullable=True)
    idempotency_key = Column(String(128), nullable=True, unique=True)
    payload_hash = Column(String(128), nullable=True)

    def __repr__(self) -> str:
        return f"<FuelEvent id={self.id} kind={self.kind} amount={self.amount}>"
