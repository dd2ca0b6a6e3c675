from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum as SAEnum, Index, JSON, String, Text, desc

from ...database import Base
from ...utils.identifiers import generate_uuid7


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditActionEnum(str, enum.Enum):
    ADD = "ADD"
    MODIFY = "MODIFY"
    DELETE = "DELETE"
    CONSUMPTION = "CONSUMPTION"
    STOCK_ADJUSTMENT = "STOCK_ADJUSTMENT"
    DISPATCH = "DISPATCH"


class AuditEntry(Base):
    """
    Append-only activity trail for every stock, fuel and dispatch mutation.
    """

    __tablename__ = "audit_entries"
    __table_args__ = (
        Index("ix_audit_entries_entity", "entity_type", "entity_id"),
        Index("ix_audit_entries_time_desc", desc("occurred_at")),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid7, index=True)
    occurred_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    action = Column(SAEnum(AuditActionEnum, name="audit_action_enum"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    actor = Column(String(128), nullable=False, index=True)
    entity_type = Column(String(64), nullable=True, index=True)
    entity_id = Column(String(64), nullable=True)
    before = Column(JSON, nullable=True)
    after = Column(JSON, nullable=True)

    def __repr__(self) -> str:
        return f"<AuditEntry id={self.id} action={self.action} actor={self.actor}>"
