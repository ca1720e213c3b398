"""
Store key-value abstracto.

Cada bucket (houses, bookings, ...) guarda un valor JSON: una lista
de registros, o un único objeto para site_settings y las sesiones.
No hay transacciones ni locks.
"""

import copy
import json
from abc import ABC, abstractmethod
from typing import Any, Optional

import structlog

logger = structlog.get_logger()


class StoreError(Exception):
    """Falla de lectura/escritura contra el store."""


class KeyValueStore(ABC):
    """Interfaz común para los backends de persistencia."""

    # Nombre del backend (override en subclases)
    BACKEND_NAME: str = "base"

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Lee el valor de `key`, o `default` si no existe."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Escribe `value` (serializable a JSON) en `key`."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Borra `key`. No falla si no existe."""

    def get_list(self, key: str) -> list[dict]:
        """Lee un bucket de tipo colección."""
        value = self.get(key, [])
        if value is None:
            return []
        if not isinstance(value, list):
            raise StoreError(f"El bucket '{key}' no contiene una lista")
        return value


class MemoryStore(KeyValueStore):
    """
    Store en memoria del proceso.

    Serializa a JSON en cada escritura para comportarse igual
    que un backend real (sin aliasing entre lectores).
    """

    BACKEND_NAME = "memory"

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return copy.deepcopy(default)
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Valor no serializable para '{key}': {e}") from e

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


def get_store() -> KeyValueStore:
    """
    Construye el store configurado en settings.

    Returns:
        MemoryStore o SupabaseStore según STORAGE_BACKEND
    """
    from safr.config import get_settings
    from safr.database.supabase_client import SupabaseStore, get_supabase_client

    settings = get_settings()
    backend = settings.storage_backend.lower()

    if backend == "memory":
        logger.info("Usando store en memoria")
        return MemoryStore()
    if backend == "supabase":
        return SupabaseStore(get_supabase_client(), table=settings.kv_table)

    raise ValueError(f"STORAGE_BACKEND no soportado: {settings.storage_backend}")
