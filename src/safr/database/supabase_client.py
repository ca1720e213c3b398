"""
Cliente de Supabase.

Singleton para conexión a la base de datos y store key-value
sobre una tabla:

    create table kv_store (
        key text primary key,
        value jsonb not null,
        updated_at timestamptz default now()
    );
"""

from functools import lru_cache
from typing import Any

import structlog
from supabase import create_client, Client

from safr.config import get_settings
from safr.database.store import KeyValueStore, StoreError
from safr.models.common import utcnow_iso

logger = structlog.get_logger()


class SupabaseClient:
    """Wrapper del cliente de Supabase con métodos de utilidad."""

    def __init__(self, client: Client):
        self._client = client

    @property
    def client(self) -> Client:
        """Acceso directo al cliente de Supabase."""
        return self._client

    def table(self, name: str):
        """Acceso a una tabla específica."""
        return self._client.table(name)


class SupabaseStore(KeyValueStore):
    """Store key-value persistido en una tabla de Supabase (una fila por bucket)."""

    BACKEND_NAME = "supabase"

    def __init__(self, client: SupabaseClient, table: str = "kv_store"):
        self._client = client
        self._table = table

    def get(self, key: str, default: Any = None) -> Any:
        try:
            response = (
                self._client.table(self._table)
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("Error leyendo bucket", key=key, error=str(e))
            raise StoreError(f"No se pudo leer '{key}'") from e
        return response.data[0]["value"] if response.data else default

    def set(self, key: str, value: Any) -> None:
        data = {"key": key, "value": value, "updated_at": utcnow_iso()}
        try:
            self._client.table(self._table).upsert(data, on_conflict="key").execute()
        except Exception as e:
            logger.error("Error escribiendo bucket", key=key, error=str(e))
            raise StoreError(f"No se pudo escribir '{key}'") from e

    def delete(self, key: str) -> None:
        try:
            self._client.table(self._table).delete().eq("key", key).execute()
        except Exception as e:
            logger.error("Error borrando bucket", key=key, error=str(e))
            raise StoreError(f"No se pudo borrar '{key}'") from e


@lru_cache
def get_supabase_client() -> SupabaseClient:
    """
    Obtiene el cliente de Supabase (singleton cacheado).

    Returns:
        SupabaseClient configurado

    Raises:
        ValueError: Si las credenciales no están configuradas
    """
    settings = get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        raise ValueError(
            "SUPABASE_URL y SUPABASE_KEY son requeridos. "
            "Configura las variables de entorno o usa STORAGE_BACKEND=memory."
        )

    # Usar service key si está disponible para operaciones admin
    key = settings.supabase_service_key or settings.supabase_key

    client = create_client(settings.supabase_url, key)
    logger.info("Cliente de Supabase inicializado", url=settings.supabase_url)

    return SupabaseClient(client)
