"""
Servicio de casas.

CRUD del panel de administración y búsqueda/orden del listado público.
"""

from typing import Optional

import structlog
from pydantic import ValidationError

from safr.config import ALL_AREAS, ALL_CITIES, get_settings
from safr.database import HouseRepository, KeyValueStore, get_store
from safr.models import House, HouseFilters
from safr.models.common import utcnow_iso
from safr.services.result import FailureKind, OperationResult, handles_store_errors

logger = structlog.get_logger()

# Campos que maneja el sistema, no el formulario
READONLY_FIELDS = {"id", "created_at", "updated_at"}


class HouseService:
    """Alta, edición, baja y búsqueda de casas."""

    def __init__(self, store: Optional[KeyValueStore] = None):
        self.house_repo = HouseRepository(store or get_store())

    def get_all_houses(self) -> list[House]:
        return self.house_repo.get_all()

    def get_house(self, house_id: str) -> Optional[House]:
        return self.house_repo.get_by_id(house_id)

    def search_houses(self, filters: Optional[HouseFilters] = None) -> list[House]:
        """
        Filtra y ordena el listado.

        Returns:
            Casas que cumplen los filtros, ordenadas por precio si se pidió
        """
        filters = filters or HouseFilters()
        results = []

        for house in self.house_repo.get_all():
            if filters.area and filters.area != ALL_AREAS and house.area != filters.area:
                continue
            if filters.city and filters.city != ALL_CITIES and house.city != filters.city:
                continue
            if filters.min_price is not None and house.price < filters.min_price:
                continue
            if filters.max_price is not None and house.price > filters.max_price:
                continue
            if filters.available is not None and house.available != filters.available:
                continue
            if filters.min_guests is not None and house.guests < filters.min_guests:
                continue
            results.append(house)

        if filters.price_sort == "low-to-high":
            results.sort(key=lambda h: h.price)
        elif filters.price_sort == "high-to-low":
            results.sort(key=lambda h: h.price, reverse=True)

        return results

    def get_areas(self) -> list[str]:
        """Zonas con al menos una casa publicada."""
        return sorted({h.area for h in self.house_repo.get_all()})

    def get_cities(self) -> list[str]:
        return sorted({h.city for h in self.house_repo.get_all()})

    @handles_store_errors("Failed to add house")
    def add_house(self, **house_data) -> OperationResult:
        """Publica una casa nueva."""
        house_data = {k: v for k, v in house_data.items() if k not in READONLY_FIELDS}
        house_data.setdefault("currency", get_settings().default_currency)
        try:
            house = House(**house_data)
        except ValidationError as e:
            logger.warning("Datos de casa inválidos", error=str(e))
            return OperationResult.fail(FailureKind.VALIDATION, "Invalid house data")

        self.house_repo.create(house)
        logger.info("Casa creada", house_id=house.id, title=house.title, area=house.area)
        return OperationResult.ok("House added successfully", house_id=house.id)

    @handles_store_errors("Failed to update house")
    def update_house(self, house_id: str, **updates) -> OperationResult:
        house = self.house_repo.get_by_id(house_id)
        if not house:
            return OperationResult.fail(FailureKind.NOT_FOUND, "House not found")

        updates = {k: v for k, v in updates.items() if k not in READONLY_FIELDS}
        try:
            updated = House.model_validate(
                {**house.model_dump(), **updates, "updated_at": utcnow_iso()}
            )
        except ValidationError as e:
            logger.warning("Datos de casa inválidos", house_id=house_id, error=str(e))
            return OperationResult.fail(FailureKind.VALIDATION, "Invalid house data")

        self.house_repo.update(updated)
        logger.info("Casa actualizada", house_id=house_id, fields=sorted(updates))
        return OperationResult.ok("House updated successfully")

    @handles_store_errors("Failed to delete house")
    def delete_house(self, house_id: str) -> OperationResult:
        if not self.house_repo.delete(house_id):
            return OperationResult.fail(FailureKind.NOT_FOUND, "House not found")
        return OperationResult.ok("House deleted successfully")
