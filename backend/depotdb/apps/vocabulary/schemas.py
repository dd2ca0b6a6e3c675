from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from . import models


class VocabularyTermCreate(BaseModel):
    value: str


class VocabularyTermRead(BaseModel):
    id: str
    list_name: models.VocabularyListEnum
    value: str
    created_at: datetime
    created_by: str

    class Config:
        from_attributes = True
