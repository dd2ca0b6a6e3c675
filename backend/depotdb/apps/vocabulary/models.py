from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum as SAEnum, String, UniqueConstraint

from depotdb.database import Base
from depotdb.utils.identifiers import generate_uuid7


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VocabularyListEnum(str, enum.Enum):
    MACHINES = "MACHINES"
    OILS = "OILS"
    CHEMICALS = "CHEMICALS"
    PART_FAMILIES = "PART_FAMILIES"


class VocabularyTerm(Base):
    """
    One suggested value in a pick-list. Suggestions only: stock names and
    machines stay free text.
    """

    __tablename__ = "vocabulary_terms"
    __table_args__ = (
        UniqueConstraint("list_name", "value_key", name="uq_vocabulary_terms_list_value"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid7, index=True)
    list_name = Column(SAEnum(VocabularyListEnum, name="vocabulary_list_enum"), nullable=False, index=True)
    value = Column(String(255), nullable=False)
    # Case-folded copy used for uniqueness and ordering.
    value_key = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    created_by = Column(String(128), nullable=False)

    def __repr__(self) -> str:
        return f"<VocabularyTerm list={self.list_name} value={self.value!r}>"
