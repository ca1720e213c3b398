"""
Configuración centralizada del sistema.
Carga variables de entorno y define settings globales.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Encontrar la raíz del proyecto (donde está el .env)
# config.py -> safr/ -> src/ -> project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Configuración principal de la aplicación."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Almacenamiento
    storage_backend: str = Field(
        "supabase",
        description="Backend key-value a usar: 'supabase' o 'memory'",
    )
    kv_table: str = Field(
        "kv_store", description="Tabla de Supabase que guarda los buckets"
    )

    # Supabase
    supabase_url: Optional[str] = Field(None, description="URL del proyecto Supabase")
    supabase_key: Optional[str] = Field(None, description="Anon key de Supabase")
    supabase_service_key: Optional[str] = Field(
        None, description="Service role key para operaciones admin"
    )

    # Administración
    admin_notification_user_id: str = Field(
        "admin-1",
        description="Destinatario de las notificaciones de cancelaciones hechas por usuarios",
    )
    default_admin_id: str = Field("admin-1", description="ID del admin inicial")
    default_admin_username: str = Field("admin", description="Usuario del admin inicial")
    default_admin_email: str = Field(
        "admin@kurdistanhouses.com", description="Email del admin inicial"
    )
    default_admin_password: Optional[str] = Field(
        None, description="Password del admin inicial (si falta no se crea)"
    )

    # Reservas
    user_cancellation_window_days: int = Field(
        7,
        ge=0,
        description="Días mínimos (exclusivo) antes del check-in para que el usuario cancele",
    )
    default_currency: str = Field("USD", description="Moneda por defecto de los precios")

    # Seguridad
    password_hash_iterations: int = Field(
        240_000, ge=1, description="Iteraciones de PBKDF2 para hashear passwords"
    )

    # Logging
    log_level: str = Field("INFO", description="Nivel de logging")


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuración cacheada."""
    return Settings()


# Constantes del sistema
KURDISTAN_AREAS = [
    "Zawita",
    "Amedi",
    "Akre",
    "Soran",
    "Shaqlawa",
    "Rawanduz",
    "Ahmad Awa",
    "Dukan",
    "Sarsing",
    "Bamarni",
]

KURDISTAN_CITIES = [
    "Duhok",
    "Erbil",
    "Sulaymaniyah",
    "Halabja",
]

# Valores "todos" que llegan desde los filtros de búsqueda
ALL_AREAS = "All Areas"
ALL_CITIES = "All Cities"

SUPPORTED_LANGUAGES = ["en", "ar", "ku"]

BOOKING_STATUSES = ["pending", "confirmed", "cancelled"]

CURRENCY_CODES = ["USD", "IQD"]
