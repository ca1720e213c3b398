"""Helpers compartidos por los modelos."""

import uuid
from datetime import date, datetime, timezone


def utcnow_iso() -> str:
    """Timestamp actual en UTC, formato ISO."""
    return datetime.now(timezone.utc).isoformat()


def new_id(prefix: str) -> str:
    """Genera un ID legible con prefijo de entidad (ej: 'house-3f2a...')."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def to_date(value: "date | datetime | str") -> date:
    """Normaliza fechas que llegan como date, datetime o 'YYYY-MM-DD'."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])
