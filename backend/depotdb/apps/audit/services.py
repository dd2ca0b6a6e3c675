from __future__ import annotations

import enum
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from depotdb.database import is_storage_failure, reading
from depotdb.errors import StorageUnavailable

from . import models

logger = logging.getLogger(__name__)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def append_entry(
    db: Session,
    *,
    action: models.AuditActionEnum,
    description: str,
    actor: str,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    before: Optional[dict] = None,
    after: Optional[dict] = None,
) -> models.AuditEntry:
    """
    Append one entry inside the caller's transaction.

    Unlike a best-effort logger this always raises on failure: the mutation
    that triggered the entry must not commit without it.
    """
    entry = models.AuditEntry(
        action=action,
        description=description,
        actor=actor,
        entity_type=entity_type,
        entity_id=entity_id,
        before=_jsonable(before) if before is not None else None,
        after=_jsonable(after) if after is not None else None,
    )
    try:
        db.add(entry)
        db.flush()
    except SQLAlchemyError as exc:
        logger.warning(
            "Failed to append audit entry",
            extra={"action": getattr(action, "value", action), "entity_type": entity_type, "entity_id": entity_id},
        )
        if is_storage_failure(exc):
            raise StorageUnavailable("The audit log is unavailable.") from exc
        raise
    return entry


def list_entries(
    db: Session,
    *,
    action: Optional[models.AuditActionEnum] = None,
    actor: Optional[str] = None,
    entity_type: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    limit: Optional[int] = None,
) -> List[models.AuditEntry]:
    with reading(db):
        query = db.query(models.AuditEntry)
        if action:
            query = query.filter(models.AuditEntry.action == action)
        if actor:
            query = query.filter(models.AuditEntry.actor == actor)
        if entity_type:
            query = query.filter(models.AuditEntry.entity_type == entity_type)
        if start:
            query = query.filter(models.AuditEntry.occurred_at >= start)
        if end:
            query = query.filter(models.AuditEntry.occurred_at <= end)
        query = query.order_by(models.AuditEntry.occurred_at.desc(), models.AuditEntry.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()


def count_entries(db: Session) -> int:
    with reading(db):
        return int(db.query(func.count(models.AuditEntry.id)).scalar() or 0)
