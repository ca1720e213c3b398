from safr.database import MemoryStore
from safr.scripts.seed_store import seed_store
from safr.services import HouseService, SiteSettingsService


def test_seed_empty_store():
    store = MemoryStore()

    stats = seed_store(store)

    assert stats["houses"] == 2
    assert stats["site_settings"]
    assert stats["admin"]
    assert stats["reviews"] == 0
    assert SiteSettingsService(store).get_settings() is not None


def test_seed_with_samples_syncs_ratings():
    store = MemoryStore()

    stats = seed_store(store, with_samples=True)

    assert stats["reviews"] == 3
    assert stats["bookings"] == 4
    house = HouseService(store).get_house("house-1")
    assert house.rating == 4.5
    assert house.reviews == 2


def test_seed_is_idempotent():
    store = MemoryStore()
    seed_store(store, with_samples=True)

    stats = seed_store(store, with_samples=True)

    assert stats == {
        "houses": 0,
        "reviews": 0,
        "bookings": 0,
        "admin": False,
        "site_settings": False,
    }
