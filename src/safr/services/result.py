"""
Resultado de operaciones de servicio.

Los servicios no lanzan excepciones hacia el llamador: devuelven
éxito/falla con un mensaje legible y el tipo de falla.
"""

import functools
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

import structlog

from safr.database.store import StoreError

logger = structlog.get_logger()


class FailureKind(str, Enum):
    """Tipos de falla que puede devolver una operación."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    CONFLICT = "conflict"
    STORE = "store"


@dataclass
class OperationResult:
    """Resultado de una operación de servicio."""

    success: bool
    message: str
    error: Optional[FailureKind] = None
    data: dict[str, Any] = field(default_factory=dict)
    # True si la operación modificó el store
    changed: bool = False

    @classmethod
    def ok(cls, message: str, changed: bool = True, **data: Any) -> "OperationResult":
        return cls(success=True, message=message, data=data, changed=changed)

    @classmethod
    def fail(cls, kind: FailureKind, message: str, **data: Any) -> "OperationResult":
        return cls(success=False, message=message, error=kind, data=data)

    def __bool__(self) -> bool:
        return self.success


def handles_store_errors(failure_message: str):
    """
    Decorador para operaciones que escriben en el store.

    Convierte un StoreError en un resultado de falla genérico
    en lugar de propagarlo al llamador.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> OperationResult:
            try:
                return func(*args, **kwargs)
            except StoreError as e:
                logger.error(
                    "Error de store en operación",
                    operation=func.__qualname__,
                    error=str(e),
                )
                return OperationResult.fail(FailureKind.STORE, failure_message)

        return wrapper

    return decorator
