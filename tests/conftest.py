"""Fixtures compartidas: store en memoria con las casas por defecto."""

import pytest

from safr.config import get_settings
from safr.database import HouseRepository, MemoryStore
from safr.database import seed


@pytest.fixture(autouse=True)
def settings_env(monkeypatch):
    """Settings de test: store en memoria y hash de passwords rápido."""
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("PASSWORD_HASH_ITERATIONS", "1000")
    monkeypatch.setenv("DEFAULT_ADMIN_PASSWORD", "admin-secret")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def empty_store():
    return MemoryStore()


@pytest.fixture
def store():
    """Store con house-1 (180 USD, 10 huéspedes) y house-2 (120 USD, 8 huéspedes)."""
    store = MemoryStore()
    HouseRepository(store).replace_all(seed.default_houses())
    return store
