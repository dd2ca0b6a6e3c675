# backend/depotdb/__init__.py
"""
Depot stock ledger and audit core.

Importing the package registers every app's tables on `Base.metadata`, so
`create_all()` and Alembic autogenerate see the whole schema. The model
classes themselves live in depotdb/apps/*/models.py.
"""

from .apps.audit import models as audit_models          # activity trail
from .apps.stock import models as stock_models          # oils / chemicals / parts
from .apps.fuel import models as fuel_models            # diesel tank + ledger
from .apps.dispatch import models as dispatch_models    # material dispatches
from .apps.vocabulary import models as vocabulary_models  # operator pick-lists

__all__ = [
    "audit_models",
    "stock_models",
    "fuel_models",
    "dispatch_models",
    "vocabulary_models",
]
