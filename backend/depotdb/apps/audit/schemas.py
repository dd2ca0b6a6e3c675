from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .models import AuditActionEnum


class AuditEntryRead(BaseModel):
    id: str
    occurred_at: datetime
    action: AuditActionEnum
    description: str
    actor: str
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    before: Optional[dict] = None
    after: Optional[dict] = None

    class Config:
        from_attributes = True


class AuditCount(BaseModel):
    total: int
