from __future__ import annotations

import hashlib
import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from depotdb.apps.audit import services as audit_services
from depotdb.apps.audit.models import AuditActionEnum
from depotdb.database import reading, transaction
from depotdb.errors import Conflict, InsufficientStock, ValidationError
from depotdb.utils.quantities import as_decimal, format_quantity, parse_quantity

from . import models

logger = logging.getLogger(__name__)

TANK_ID = os.getenv("FUEL_TANK_ID", "MAIN")

# Shift labels accepted from terminals, including the French ones still on
# older depot screens.
SHIFT_ALIASES = {
    "day": models.ShiftEnum.DAY,
    "jour": models.ShiftEnum.DAY,
    "night": models.ShiftEnum.NIGHT,
    "nuit": models.ShiftEnum.NIGHT,
}


@dataclass
class FuelConsumptionResult:
    balance: Decimal
    event: models.FuelEvent
    replayed: bool = False


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _hash_payload(payload: dict) -> str:
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode("utf-8")).hexdigest()


def parse_shift(value) -> models.ShiftEnum:
    if isinstance(value, models.ShiftEnum):
        return value
    shift = SHIFT_ALIASES.get((value or "").strip().lower()) if isinstance(value, str) else None
    if shift is None:
        raise ValidationError("shift must be Day or Night.", field="shift")
    return shift


def ensure_tank(db: Session) -> models.FuelTank:
    """
    Return the tank row, creating it empty on first use.

    Commits its own insert so the row exists before any balance transaction
    tries to lock it.
    """
    with reading(db):
        tank = db.get(models.FuelTank, TANK_ID)
    if tank is not None:
        return tank
    try:
        with transaction(db):
            db.add(models.FuelTank(id=TANK_ID, total_liters=Decimal("0"), version=0, updated_at=_utcnow()))
    except IntegrityError:
        # Another terminal created it first.
        pass
    with reading(db):
        return db.get(models.FuelTank, TANK_ID, populate_existing=True)


def _lock_tank(db: Session) -> Optional[models.FuelTank]:
    """
    Claim the tank row for the rest of the transaction.

    Bumping `version` takes the row's write lock on every backend (row lock on
    PostgreSQL, the database write lock on SQLite), so the balance read
    afterwards cannot change until this transaction ends.
    """
    db.execute(
        update(models.FuelTank)
        .where(models.FuelTank.id == TANK_ID)
        .values(version=models.FuelTank.version + 1)
        .execution_options(synchronize_session=False)
    )
    return db.execute(
        select(models.FuelTank)
        .where(models.FuelTank.id == TANK_ID)
        .with_for_update()
        .execution_options(populate_existing=True)
    ).scalar_one_or_none()


def _read_balance(db: Session) -> Decimal:
    value = db.execute(select(models.FuelTank.total_liters).where(models.FuelTank.id == TANK_ID)).scalar_one()
    return as_decimal(value)


def get_balance(db: Session) -> Decimal:
    with reading(db):
        value = db.execute(
            select(models.FuelTank.total_liters).where(models.FuelTank.id == TANK_ID)
        ).scalar_one_or_none()
    return as_decimal(value)


def _find_replay(db: Session, *, idempotency_key: str, payload_hash: str) -> Optional[models.FuelEvent]:
    event = (
        db.query(models.FuelEvent)
        .filter(models.FuelEvent.idempotency_key == idempotency_key)
        .first()
    )
    if event is None:
        return None
    if event.payload_hash != payload_hash:
        raise Conflict("Idempotency key reuse with different payload.", field="idempotency_key")
    return event


def record_consumption(
    db: Session,
    *,
    machine: str,
    shift,
    amount,
    actor: str,
    idempotency_key: Optional[str] = None,
) -> FuelConsumptionResult:
    machine_name = (machine or "").strip()
    if not machine_name:
        raise ValidationError("machine must not be empty.", field="machine")
    shift_value = parse_shift(shift)
    draw = parse_quantity(amount, field="amount", positive=True)

    key = (idempotency_key or "").strip() or None
    payload_hash = None
    if key:
        payload_hash = _hash_payload(
            {"machine": machine_name, "shift": shift_value.value, "amount": str(draw), "actor": actor}
        )
        with reading(db):
            replay = _find_replay(db, idempotency_key=key, payload_hash=payload_hash)
        if replay is not None:
            return FuelConsumptionResult(balance=as_decimal(replay.balance_after), event=replay, replayed=True)

    try:
        with transaction(db):
            # No tank row yet means nothing has been stocked: the draw is rejected below.
            tank = _lock_tank(db)
            available = as_decimal(tank.total_liters if tank is not None else None)
            if draw > available:
                logger.warning(
                    "Fuel consumption rejected",
                    extra={"machine": machine_name, "amount": str(draw), "available": str(available), "actor": actor},
                )
                raise InsufficientStock(
                    f"Insufficient diesel: {format_quantity(available)} L on hand, {format_quantity(draw)} L requested.",
                    available=available,
                    requested=draw,
                )

            # The guard repeats the check in the database so the balance can
            # never be driven negative, whatever the isolation level.
            result = db.execute(
                update(models.FuelTank)
                .where(
                    models.FuelTank.id == TANK_ID,
                    models.FuelTank.total_liters >= draw,
                )
                .values(
                    total_liters=models.FuelTank.total_liters - draw,
                    updated_at=_utcnow(),
                    updated_by=actor,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise InsufficientStock(
                    "Insufficient diesel: the balance changed while the request was processed.",
                    available=_read_balance(db),
                    requested=draw,
                )
            balance_after = _read_balance(db)
            balance_before = balance_after + draw

            event = models.FuelEvent(
                kind=models.FuelEventKindEnum.CONSUMPTION,
                amount=draw,
                balance_before=balance_before,
                balance_after=balance_after,
                actor=actor,
                machine=machine_name,
                shift=shift_value,
                idempotency_key=key,
                payload_hash=payload_hash,
            )
            db.add(event)
            db.flush()
            audit_services.append_entry(
                db,
                action=AuditActionEnum.CONSUMPTION,
                description=(
                    f"{machine_name} - {format_quantity(draw)}L "
                    f"(new balance: {format_quantity(balance_after)}L)"
                ),
                actor=actor,
                entity_type="FuelEvent",
                entity_id=event.id,
                before={"total_liters": balance_before},
                after={"total_liters": balance_after, "machine": machine_name, "shift": shift_value},
            )
    except IntegrityError:
        # Two retries of the same request raced; the loser replays the winner.
        if key:
            with reading(db):
                replay = _find_replay(db, idempotency_key=key, payload_hash=payload_hash)
            if replay is not None:
                return FuelConsumptionResult(balance=as_decimal(replay.balance_after), event=replay, replayed=True)
        raise

    logger.info(
        "Fuel consumption recorded",
        extra={"event_id": event.id, "machine": machine_name, "amount": str(draw), "balance": str(balance_after)},
    )
    return FuelConsumptionResult(balance=balance_after, event=event)


def set_balance(db: Session, *, new_total, actor: str) -> Decimal:
    """
    Overwrite the balance after a physical recount or refill.

    This is the only way the balance goes up; the event records the signed
    difference from the previous value.
    """
    target = parse_quantity(new_total, field="total_liters")

    ensure_tank(db)
    with transaction(db):
        tank = _lock_tank(db)
        previous = as_decimal(tank.total_liters)
        tank.total_liters = target
        tank.updated_at = _utcnow()
        tank.updated_by = actor
        event = models.FuelEvent(
            kind=models.FuelEventKindEnum.MANUAL_ADJUSTMENT,
            amount=target - previous,
            balance_before=previous,
            balance_after=target,
            actor=actor,
        )
        db.add(event)
        db.flush()
        audit_services.append_entry(
            db,
            action=AuditActionEnum.STOCK_ADJUSTMENT,
            description=f"Diesel stock set to {format_quantity(target)}L (was {format_quantity(previous)}L)",
            actor=actor,
            entity_type="FuelTank",
            entity_id=TANK_ID,
            before={"total_liters": previous},
            after={"total_liters": target},
        )

    logger.info(
        "Fuel balance adjusted",
        extra={"event_id": event.id, "previous": str(previous), "balance": str(target), "actor": actor},
    )
    return target


def list_history(
    db: Session,
    *,
    kind: Optional[models.FuelEventKindEnum] = None,
    limit: Optional[int] = None,
) -> List[models.FuelEvent]:
    with reading(db):
        query = db.query(models.FuelEvent)
        if kind:
            query = query.filter(models.FuelEvent.kind == kind)
        query = query.order_by(models.FuelEvent.occurred_at.desc(), models.FuelEvent.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()
