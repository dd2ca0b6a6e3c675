from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from depotdb.database import get_read_db

from . import schemas, services
from .models import AuditActionEnum


router = APIRouter(
    prefix="/audit",
    tags=["audit"],
)


@router.get("/entries", response_model=List[schemas.AuditEntryRead])
def list_audit_entries(
    action: Optional[AuditActionEnum] = None,
    actor: Optional[str] = None,
    entity_type: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_read_db),
):
    return services.list_entries(
        db,
        action=action,
        actor=actor,
        entity_type=entity_type,
        start=start,
        end=end,
        limit=limit,
    )


@router.get("/entries/count", response_model=schemas.AuditCount)
def count_audit_entries(db: Session = Depends(get_read_db)):
    return schemas.AuditCount(total=services.count_entries(db))
