# backend/depotdb/main.py
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List

from alembic.config import Config
from alembic.script import ScriptDirectory
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from .database import WriteSessionLocal
from .errors import (
    Conflict,
    DepotError,
    InsufficientStock,
    NotFound,
    StorageUnavailable,
    ValidationError,
)

from .apps.audit.router import router as audit_router
from .apps.dispatch.router import router as dispatch_router
from .apps.fuel.router import router as fuel_router
from .apps.overview.router import router as overview_router
from .apps.stock.router import router as stock_router
from .apps.vocabulary.router import router as vocabulary_router

logger = logging.getLogger(__name__)

ALEMBIC_DIR = Path(__file__).resolve().parent / "alembic"

ERROR_STATUS = {
    ValidationError: 400,
    NotFound: 404,
    InsufficientStock: 409,
    Conflict: 409,
    StorageUnavailable: 503,
}


def _allowed_origins() -> List[str]:
    """
    Parse CORS_ALLOWED_ORIGINS from env.

    Accepts comma-separated origins. If unset, defaults to local dev ports.
    """
    raw = os.getenv("CORS_ALLOWED_ORIGINS", "")
    if raw:
        origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
        if origins:
            return origins
    return [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
        "http://localhost:4173",
    ]


def _schema_strict() -> bool:
    return os.getenv("SCHEMA_STRICT", "0").strip().lower() in {"1", "true", "yes", "on"}


def _enforce_schema_head_sync_if_configured() -> None:
    """
    Refuse to start against a database that is not at the migration head.

    Only active with SCHEMA_STRICT=1; otherwise startup never touches the
    database.
    """
    if not _schema_strict():
        return

    cfg = Config()
    cfg.set_main_option("script_location", str(ALEMBIC_DIR))
    heads = set(ScriptDirectory.from_config(cfg).get_heads())

    db = WriteSessionLocal()
    try:
        rows = db.execute(text("SELECT version_num FROM alembic_version")).fetchall()
    finally:
        db.close()
    current = {row[0] for row in rows}

    if current != heads:
        raise RuntimeError(
            f"Database schema is at {sorted(current) or 'no revision'}, expected {sorted(heads)}. "
            "Run `alembic upgrade head` before starting the API."
        )


def error_status(exc: DepotError) -> int:
    for error_type, status_code in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return 400


async def depot_error_handler(request: Request, exc: DepotError) -> JSONResponse:
    status_code = error_status(exc)
    if status_code >= 500:
        logger.warning("Request failed: storage unavailable", extra={"path": request.url.path})
    body = {"detail": exc.message, "code": exc.code}
    if exc.field:
        body["field"] = exc.field
    if isinstance(exc, InsufficientStock) and exc.available is not None:
        body["available"] = float(exc.available)
    return JSONResponse(status_code=status_code, content=body)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _enforce_schema_head_sync_if_configured()
    yield


app = FastAPI(title="Depot Stock API", version="1.0.0", lifespan=lifespan)
cors_origins = _allowed_origins()
allow_credentials = "*" not in cors_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(DepotError, depot_error_handler)


@app.get("/", tags=["health"])
def read_root():
    return {"status": "ok", "message": "Depot stock backend is running"}


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


app.include_router(stock_router)
app.include_router(fuel_router)
app.include_router(audit_router)
app.include_router(dispatch_router)
app.include_router(overview_router)
app.include_router(vocabulary_router)
