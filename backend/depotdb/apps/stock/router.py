from __future__ import annotations

import enum
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from depotdb.database import get_db, get_read_db
from depotdb.security import get_actor

from . import models, schemas, services

router = APIRouter(
    prefix="/stock",
    tags=["stock"],
)


class CategoryPath(str, enum.Enum):
    oil = "oil"
    chemical = "chemical"
    part = "part"

    @property
    def category(self) -> models.StockCategory:
        return models.StockCategory[self.name.upper()]


@router.get(
    "/{category}/items",
    response_model=List[schemas.StockItemRead],
)
def list_items(
    category: CategoryPath,
    order_by: Optional[str] = None,
    db: Session = Depends(get_read_db),
):
    return services.list_items(db, category=category.category, order_by=order_by)


@router.post(
    "/{category}/items",
    response_model=schemas.StockItemRead,
    status_code=status.HTTP_201_CREATED,
)
def create_item(
    category: CategoryPath,
    payload: schemas.StockItemCreate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    item = services.create_item(db, category=category.category, payload=payload, actor=actor)
    db.refresh(item)
    return item


@router.get(
    "/{category}/items/{item_id}",
    response_model=schemas.StockItemRead,
)
def get_item(
    category: CategoryPath,
    item_id: str,
    db: Session = Depends(get_read_db),
):
    return services.get_item(db, category=category.category, item_id=item_id)


@router.patch(
    "/{category}/items/{item_id}",
    response_model=schemas.StockItemRead,
)
def update_item(
    category: CategoryPath,
    item_id: str,
    payload: schemas.StockItemUpdate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    item = services.update_item(db, category=category.category, item_id=item_id, patch=payload, actor=actor)
    db.refresh(item)
    return item


@router.delete(
    "/{category}/items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_item(
    category: CategoryPath,
    item_id: str,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    services.delete_item(db, category=category.category, item_id=item_id, actor=actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
