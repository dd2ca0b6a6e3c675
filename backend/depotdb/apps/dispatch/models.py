from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Numeric, String

from depotdb.database import Base
from depotdb.utils.identifiers import generate_uuid7


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DispatchRecord(Base):
    """
    Material handed out of the depot. Informational only: recording a
    dispatch never changes a stock item's quantity.
    """

    __tablename__ = "dispatch_records"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_dispatch_records_quantity_positive"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid7, index=True)
    occurred_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    item_name = Column(String(255), nullable=False)
    quantity = Column(Numeric(14, 3), nullable=False)
    destination = Column(String(255), nullable=False)
    recipient = Column(String(255), nullable=False)
    actor = Column(String(128), nullable=False)
