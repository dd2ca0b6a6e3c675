from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from depotdb.apps.audit import services as audit_services
from depotdb.apps.audit.models import AuditActionEnum
from depotdb.database import reading, transaction
from depotdb.errors import ValidationError
from depotdb.utils.quantities import format_quantity, parse_quantity

from . import models, schemas


def _required(value: Optional[str], field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field} must not be empty.", field=field)
    return cleaned


def record_dispatch(
    db: Session,
    *,
    payload: schemas.DispatchCreate,
    actor: str,
) -> models.DispatchRecord:
    item_name = _required(payload.item_name, "item_name")
    destination = _required(payload.destination, "destination")
    recipient = _required(payload.recipient, "recipient")
    quantity = parse_quantity(payload.quantity, field="quantity", positive=True)

    with transaction(db):
        record = models.DispatchRecord(
            item_name=item_name,
            quantity=quantity,
            destination=destination,
            recipient=recipient,
            actor=actor,
        )
        db.add(record)
        db.flush()
        audit_services.append_entry(
            db,
            action=AuditActionEnum.DISPATCH,
            description=f"{item_name} - {format_quantity(quantity)} units to {destination}",
            actor=actor,
            entity_type="DispatchRecord",
            entity_id=record.id,
            after={"item_name": item_name, "quantity": quantity, "destination": destination, "recipient": recipient},
        )
    return record


def list_dispatches(db: Session, *, limit: Optional[int] = None) -> List[models.DispatchRecord]:
    with reading(db):
        query = db.query(models.DispatchRecord).order_by(
            models.DispatchRecord.occurred_at.desc(),
            models.DispatchRecord.id.desc(),
        )
        if limit:
            query = query.limit(limit)
        return query.all()
