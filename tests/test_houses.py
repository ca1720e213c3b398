import pytest

from safr.models import HouseFilters
from safr.services import FailureKind, HouseService


@pytest.fixture
def service(store):
    return HouseService(store)


def _add_erbil_house(service, **overrides):
    data = {
        "title": "Shaqlawa Garden House",
        "area": "Shaqlawa",
        "city": "Erbil",
        "price": 90,
        "guests": 5,
        "amenities": ["WiFi", "Garden", "WiFi"],
    }
    data.update(overrides)
    return service.add_house(**data)


def test_add_house(service):
    result = _add_erbil_house(service)

    assert result.success
    house = service.get_house(result.data["house_id"])
    assert house.currency == "USD"
    assert house.amenities == ["WiFi", "Garden"]
    assert len(service.get_all_houses()) == 3


def test_add_house_ignores_readonly_fields(service):
    result = _add_erbil_house(service, id="house-1")
    assert result.data["house_id"] != "house-1"


def test_add_house_validation(service):
    result = service.add_house(area="Zawita", city="Duhok", price=100)
    assert result.error == FailureKind.VALIDATION

    assert _add_erbil_house(service, price=-1).error == FailureKind.VALIDATION


def test_update_house(service):
    assert service.update_house("house-1", price=200, available=False).success

    house = service.get_house("house-1")
    assert house.price == 200
    assert not house.available
    assert house.title == "Mountain View Villa in Zawita"


def test_update_house_validation_keeps_record(service):
    assert service.update_house("house-1", guests=0).error == FailureKind.VALIDATION
    assert service.get_house("house-1").guests == 10


def test_update_and_delete_unknown_house(service):
    assert service.update_house("house-404", price=1).error == FailureKind.NOT_FOUND
    assert service.delete_house("house-404").error == FailureKind.NOT_FOUND


def test_delete_house(service):
    assert service.delete_house("house-2").success
    assert service.get_house("house-2") is None


def test_search_by_area_and_city(service):
    _add_erbil_house(service)

    assert len(service.search_houses(HouseFilters(area="Zawita"))) == 2
    assert [h.city for h in service.search_houses(HouseFilters(city="Erbil"))] == ["Erbil"]
    assert len(service.search_houses(HouseFilters(area="All Areas", city="All Cities"))) == 3


def test_search_by_price_guests_and_availability(service):
    _add_erbil_house(service, available=False)

    results = service.search_houses(HouseFilters(min_price=100, max_price=150))
    assert [h.id for h in results] == ["house-2"]

    assert len(service.search_houses(HouseFilters(min_guests=9))) == 1
    assert len(service.search_houses(HouseFilters(available=True))) == 2


def test_search_sorting(service):
    _add_erbil_house(service)

    low_to_high = service.search_houses(HouseFilters(price_sort="low-to-high"))
    high_to_low = service.search_houses(HouseFilters(price_sort="high-to-low"))

    assert [h.price for h in low_to_high] == [90, 120, 180]
    assert [h.price for h in high_to_low] == [180, 120, 90]


def test_areas_and_cities(service):
    _add_erbil_house(service)

    assert service.get_areas() == ["Shaqlawa", "Zawita"]
    assert service.get_cities() == ["Duhok", "Erbil"]
