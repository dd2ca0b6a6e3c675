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
)

from depotdb.database import Base
from depotdb.utils.identifiers import generate_uuid7

from . import thresholds


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StockCategory(str, enum.Enum):
    OIL = "OIL"
    CHEMICAL = "CHEMICAL"
    PART = "PART"


DEFAULT_UNITS = {
    StockCategory.OIL: "L",
    StockCategory.CHEMICAL: "KG",
    StockCategory.PART: "EA",
}


class StockItem(Base):
    """
    One tracked consumable. Each category is an independent collection
    partitioned by `category`; nothing links quantities across rows.
    """

    __tablename__ = "stock_items"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_stock_items_quantity_non_negative"),
        CheckConstraint("alert_threshold >= 0", name="ck_stock_items_threshold_non_negative"),
        Index("ix_stock_items_category_created", "category", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid7, index=True)
    category = Column(SAEnum(StockCategory, name="stock_category_enum"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Numeric(14, 3), nullable=False, default=0)
    unit = Column(String(16), nullable=False)
    alert_threshold = Column(Numeric(14, 3), nullable=False, default=0)

    # Spare parts carry a family label and a shelf location; optional elsewhere.
    family = Column(String(128), nullable=True)
    location = Column(String(128), nullable=True)

    revision = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    last_modified = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    last_modified_by = Column(String(128), nullable=False)

    @property
    def is_low(self) -> bool:
        return thresholds.is_low(self)

    def __repr__(self) -> str:
        return f"<StockItem id={self.id} category={self.category} name={self.name!r} qty={self.quantity}>"
