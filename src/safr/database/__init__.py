"""
Módulo de base de datos.

Provee el store key-value (memoria o Supabase) y los repositorios.
"""

from safr.database.store import KeyValueStore, MemoryStore, StoreError, get_store
from safr.database.supabase_client import (
    SupabaseClient,
    SupabaseStore,
    get_supabase_client,
)
from safr.database.repositories import (
    AdminRepository,
    BookingRepository,
    DiscountRepository,
    HouseRepository,
    NotificationRepository,
    ReviewRepository,
    SiteSettingsRepository,
    UserRepository,
)

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "StoreError",
    "get_store",
    "get_supabase_client",
    "SupabaseClient",
    "SupabaseStore",
    "HouseRepository",
    "BookingRepository",
    "DiscountRepository",
    "ReviewRepository",
    "NotificationRepository",
    "UserRepository",
    "AdminRepository",
    "SiteSettingsRepository",
]
