from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from depotdb.apps.audit import services as audit_services
from depotdb.apps.audit.models import AuditActionEnum
from depotdb.database import reading, transaction
from depotdb.errors import Conflict, NotFound, ValidationError
from depotdb.utils.quantities import as_decimal, format_quantity, parse_quantity

from . import models, schemas

logger = logging.getLogger(__name__)

CATEGORY_LABELS = {
    models.StockCategory.OIL: "Oil",
    models.StockCategory.CHEMICAL: "Chemical",
    models.StockCategory.PART: "Part",
}

LIST_ORDERINGS = ("name", "quantity")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("name must not be empty.", field="name")
    return cleaned


def _clean_optional(value: Optional[str]) -> Optional[str]:
    cleaned = (value or "").strip()
    return cleaned or None


def _snapshot(item: models.StockItem) -> dict:
    return {
        "category": item.category,
        "name": item.name,
        "quantity": as_decimal(item.quantity),
        "unit": item.unit,
        "alert_threshold": as_decimal(item.alert_threshold),
        "family": item.family,
        "location": item.location,
        "revision": item.revision,
    }


def _get_item(db: Session, *, category: models.StockCategory, item_id: str) -> models.StockItem:
    item = (
        db.query(models.StockItem)
        .filter(
            models.StockItem.id == item_id,
            models.StockItem.category == category,
        )
        .populate_existing()
        .first()
    )
    if not item:
        raise NotFound(f"{CATEGORY_LABELS[category]} item {item_id} not found.")
    return item


def _claim_item(
    db: Session,
    *,
    category: models.StockCategory,
    item_id: str,
    expected_revision: Optional[int] = None,
) -> models.StockItem:
    """
    Bump the item's revision and return the row as of that write.

    The bump is the write lock: a concurrent update of the same item waits
    for this transaction, so every committed update gets its own revision.
    With `expected_revision` the bump only matches the revision the caller
    read, and a miss raises Conflict.
    """
    claim = (
        update(models.StockItem)
        .where(
            models.StockItem.id == item_id,
            models.StockItem.category == category,
        )
        .values(revision=models.StockItem.revision + 1)
        .execution_options(synchronize_session=False)
    )
    if expected_revision is not None:
        claim = claim.where(models.StockItem.revision == expected_revision)

    if db.execute(claim).rowcount != 1:
        current = _get_item(db, category=category, item_id=item_id)
        raise Conflict(
            f"Item {item_id} was changed by someone else (revision {current.revision}, expected {expected_revision}).",
            field="expected_revision",
        )

    return db.execute(
        select(models.StockItem)
        .where(models.StockItem.id == item_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    ).scalar_one()


def get_item(db: Session, *, category: models.StockCategory, item_id: str) -> models.StockItem:
    with reading(db):
        return _get_item(db, category=category, item_id=item_id)


def list_items(
    db: Session,
    *,
    category: models.StockCategory,
    order_by: Optional[str] = None,
) -> List[models.StockItem]:
    if order_by is not None and order_by not in LIST_ORDERINGS:
        raise ValidationError(f"order_by must be one of {', '.join(LIST_ORDERINGS)}.", field="order_by")
    with reading(db):
        query = db.query(models.StockItem).filter(models.StockItem.category == category)
        if order_by == "name":
            query = query.order_by(func.lower(models.StockItem.name).asc(), models.StockItem.id.asc())
        elif order_by == "quantity":
            query = query.order_by(models.StockItem.quantity.asc(), models.StockItem.id.asc())
        else:
            query = query.order_by(models.StockItem.created_at.asc(), models.StockItem.id.asc())
        return query.all()


def create_item(
    db: Session,
    *,
    category: models.StockCategory,
    payload: schemas.StockItemCreate,
    actor: str,
) -> models.StockItem:
    name = _clean_name(payload.name)
    quantity = parse_quantity(payload.quantity, field="quantity")
    threshold = parse_quantity(payload.alert_threshold, field="alert_threshold")
    unit = _clean_optional(payload.unit) or models.DEFAULT_UNITS[category]

    with transaction(db):
        now = _utcnow()
        item = models.StockItem(
            category=category,
            name=name,
            quantity=quantity,
            unit=unit,
            alert_threshold=threshold,
            family=_clean_optional(payload.family),
            location=_clean_optional(payload.location),
            revision=1,
            created_at=now,
            last_modified=now,
            last_modified_by=actor,
        )
        db.add(item)
        db.flush()
        audit_services.append_entry(
            db,
            action=AuditActionEnum.ADD,
            description=f"{CATEGORY_LABELS[category]} added: {name} - {format_quantity(quantity)}{unit}",
            actor=actor,
            entity_type="StockItem",
            entity_id=item.id,
            after=_snapshot(item),
        )
    return item


def update_item(
    db: Session,
    *,
    category: models.StockCategory,
    item_id: str,
    patch: schemas.StockItemUpdate,
    actor: str,
) -> models.StockItem:
    changes = patch.model_dump(exclude_unset=True)
    expected_revision = changes.pop("expected_revision", None)

    # Validate the whole patch before touching the row.
    cleaned: dict = {}
    if "name" in changes:
        cleaned["name"] = _clean_name(changes["name"])
    if "quantity" in changes:
        cleaned["quantity"] = parse_quantity(changes["quantity"], field="quantity")
    if "alert_threshold" in changes:
        cleaned["alert_threshold"] = parse_quantity(changes["alert_threshold"], field="alert_threshold")
    if "unit" in changes:
        unit = _clean_optional(changes["unit"])
        if not unit:
            raise ValidationError("unit must not be empty.", field="unit")
        cleaned["unit"] = unit
    for field in ("family", "location"):
        if field in changes:
            cleaned[field] = _clean_optional(changes[field])

    with transaction(db):
        item = _claim_item(db, category=category, item_id=item_id, expected_revision=expected_revision)
        before = _snapshot(item)
        before["revision"] = item.revision - 1
        for field, value in cleaned.items():
            setattr(item, field, value)
        item.last_modified = _utcnow()
        item.last_modified_by = actor
        db.flush()
        audit_services.append_entry(
            db,
            action=AuditActionEnum.MODIFY,
            description=f"{CATEGORY_LABELS[category]} modified: {item.name}",
            actor=actor,
            entity_type="StockItem",
            entity_id=item.id,
            before=before,
            after=_snapshot(item),
        )
    return item


def delete_item(
    db: Session,
    *,
    category: models.StockCategory,
    item_id: str,
    actor: str,
) -> None:
    with transaction(db):
        item = _claim_item(db, category=category, item_id=item_id)
        before = _snapshot(item)
        before["revision"] = item.revision - 1
        name = item.name
        db.delete(item)
        db.flush()
        audit_services.append_entry(
            db,
            action=AuditActionEnum.DELETE,
            description=f"{CATEGORY_LABELS[category]} deleted: {name}",
            actor=actor,
            entity_type="StockItem",
            entity_id=item_id,
            before=before,
        )
    logger.info("Stock item deleted", extra={"category": category.value, "item_id": item_id, "actor": actor})
