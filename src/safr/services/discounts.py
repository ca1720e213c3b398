"""
Servicio de descuentos y precios.

Un descuento es activo para una fecha si su flag is_active está
prendido y el período [start_date, end_date] contiene esa fecha.
Si por error hubiera más de uno, gana el primero en orden de
almacenamiento.
"""

import math
from datetime import date, datetime
from typing import Optional, Union

import structlog
from pydantic import ValidationError

from safr.database import DiscountRepository, HouseRepository, KeyValueStore, get_store
from safr.models import Discount, DiscountType
from safr.models.common import to_date
from safr.services.result import FailureKind, OperationResult, handles_store_errors

logger = structlog.get_logger()

DateLike = Union[date, datetime, str]

# Campos que se pueden editar en un descuento existente
EDITABLE_FIELDS = {"discount_type", "discount_value", "start_date", "end_date", "is_active"}


def round_price(value: float) -> int:
    """Redondeo a la unidad más cercana, con .5 hacia arriba."""
    return int(math.floor(value + 0.5))


class DiscountService:
    """Alta/baja de descuentos y cálculo del precio con descuento."""

    def __init__(self, store: Optional[KeyValueStore] = None):
        store = store or get_store()
        self.discount_repo = DiscountRepository(store)
        self.house_repo = HouseRepository(store)

    def get_all_discounts(self) -> list[Discount]:
        return self.discount_repo.get_all()

    def get_house_discounts(self, house_id: str) -> list[Discount]:
        """Descuentos con flag activo de una casa (vigentes o no)."""
        return self.discount_repo.get_by_house(house_id, active_only=True)

    def get_active_discount(
        self, house_id: str, as_of: Optional[DateLike] = None
    ) -> Optional[Discount]:
        """El descuento aplicable a `house_id` en la fecha `as_of` (hoy por defecto)."""
        day = to_date(as_of) if as_of is not None else date.today()
        for discount in self.get_house_discounts(house_id):
            if discount.covers(day):
                return discount
        return None

    def calculate_discounted_price(
        self,
        base_price: float,
        house_id: str,
        as_of: Optional[DateLike] = None,
    ) -> tuple[float, Optional[Discount]]:
        """
        Precio por noche con el descuento vigente aplicado.

        Args:
            base_price: Precio por noche sin descuento
            house_id: Casa a evaluar
            as_of: Fecha de evaluación (hoy por defecto)

        Returns:
            (precio final, descuento aplicado o None)
        """
        discount = self.get_active_discount(house_id, as_of)
        if not discount:
            return base_price, None
        return round_price(discount.apply(base_price)), discount

    def _validate(
        self,
        discount_type: DiscountType,
        discount_value: float,
        start_date: date,
        end_date: date,
    ) -> Optional[OperationResult]:
        if discount_value <= 0:
            return OperationResult.fail(
                FailureKind.VALIDATION, "Discount value must be greater than 0"
            )
        if discount_type == "percentage" and discount_value > 100:
            return OperationResult.fail(
                FailureKind.VALIDATION, "Percentage discount cannot exceed 100%"
            )
        if end_date < start_date:
            return OperationResult.fail(
                FailureKind.VALIDATION, "End date must be on or after start date"
            )
        return None

    def _find_overlap(
        self,
        house_id: str,
        start_date: date,
        end_date: date,
        exclude_id: Optional[str] = None,
    ) -> Optional[Discount]:
        for existing in self.get_house_discounts(house_id):
            if existing.id == exclude_id:
                continue
            if existing.overlaps(start_date, end_date):
                return existing
        return None

    @handles_store_errors("Failed to add discount")
    def add_discount(
        self,
        house_id: str,
        discount_type: DiscountType,
        discount_value: float,
        start_date: DateLike,
        end_date: DateLike,
        created_by: str,
        is_active: bool = True,
    ) -> OperationResult:
        """Crea un descuento validando valor, fechas y solapamiento."""
        try:
            start, end = to_date(start_date), to_date(end_date)
        except ValueError:
            return OperationResult.fail(FailureKind.VALIDATION, "Invalid discount dates")

        try:
            discount = Discount(
                house_id=house_id,
                discount_type=discount_type,
                discount_value=discount_value,
                start_date=start,
                end_date=end,
                is_active=is_active,
                created_by=created_by,
            )
        except ValidationError as e:
            logger.warning("Datos de descuento inválidos", house_id=house_id, error=str(e))
            return OperationResult.fail(FailureKind.VALIDATION, "Invalid discount data")

        invalid = self._validate(
            discount.discount_type,
            discount.discount_value,
            discount.start_date,
            discount.end_date,
        )
        if invalid:
            return invalid

        if not self.house_repo.get_by_id(house_id):
            return OperationResult.fail(FailureKind.NOT_FOUND, "House not found")

        if is_active:
            overlapping = self._find_overlap(house_id, start, end)
            if overlapping:
                logger.warning(
                    "Descuento solapado",
                    house_id=house_id,
                    existing_id=overlapping.id,
                )
                return OperationResult.fail(
                    FailureKind.CONFLICT,
                    "Discount period overlaps with existing discount",
                    existing_id=overlapping.id,
                )

        self.discount_repo.create(discount)
        logger.info(
            "Descuento creado",
            house_id=house_id,
            type=discount.discount_type,
            value=discount.discount_value,
        )
        return OperationResult.ok("Discount added successfully", discount_id=discount.id)

    @handles_store_errors("Failed to update discount")
    def update_discount(self, discount_id: str, **updates) -> OperationResult:
        """Edita un descuento; vuelve a validar y a chequear solapamiento."""
        discount = self.discount_repo.get_by_id(discount_id)
        if not discount:
            return OperationResult.fail(FailureKind.NOT_FOUND, "Discount not found")

        unknown = set(updates) - EDITABLE_FIELDS
        if unknown:
            return OperationResult.fail(
                FailureKind.VALIDATION,
                f"Cannot update fields: {', '.join(sorted(unknown))}",
            )

        try:
            merged = Discount.model_validate({**discount.model_dump(), **updates})
        except ValidationError as e:
            logger.warning("Datos de descuento inválidos", discount_id=discount_id, error=str(e))
            return OperationResult.fail(FailureKind.VALIDATION, "Invalid discount data")

        invalid = self._validate(
            merged.discount_type,
            merged.discount_value,
            merged.start_date,
            merged.end_date,
        )
        if invalid:
            return invalid

        if merged.is_active and self._find_overlap(
            merged.house_id, merged.start_date, merged.end_date, exclude_id=merged.id
        ):
            return OperationResult.fail(
                FailureKind.CONFLICT, "Discount period overlaps with existing discount"
            )

        self.discount_repo.update(merged)
        logger.info("Descuento actualizado", discount_id=discount_id, fields=sorted(updates))
        return OperationResult.ok("Discount updated successfully")

    @handles_store_errors("Failed to delete discount")
    def delete_discount(self, discount_id: str) -> OperationResult:
        if not self.discount_repo.delete(discount_id):
            return OperationResult.fail(FailureKind.NOT_FOUND, "Discount not found")
        return OperationResult.ok("Discount deleted successfully")
