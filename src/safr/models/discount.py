"""
Modelo de Descuento

Rebaja de precio por noche, válida en un período de fechas.
"""

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from safr.models.common import new_id, utcnow_iso

DiscountType = Literal["percentage", "fixed"]


class Discount(BaseModel):
    """
    Descuento temporal de una casa.

    El período es cerrado en ambos extremos: [start_date, end_date].
    Dos descuentos activos de la misma casa no pueden solaparse.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: new_id("discount"))
    house_id: str = Field(..., description="FK a House")
    discount_type: DiscountType = Field(..., description="'percentage' o 'fixed'")
    discount_value: float = Field(..., description="Porcentaje (0-100] o monto fijo")
    start_date: date
    end_date: date
    is_active: bool = True
    created_by: str = Field(..., description="ID del admin que lo creó")
    created_at: str = Field(default_factory=utcnow_iso)

    def covers(self, day: date) -> bool:
        """True si `day` cae dentro del período (inclusive)."""
        return self.start_date <= day <= self.end_date

    def overlaps(self, start: date, end: date) -> bool:
        """True si el período [start, end] se cruza con este descuento."""
        return (
            (self.start_date <= start <= self.end_date)
            or (self.start_date <= end <= self.end_date)
            or (start <= self.start_date and end >= self.end_date)
        )

    def apply(self, base_price: float) -> float:
        """Precio resultante sin redondear."""
        if self.discount_type == "percentage":
            return base_price * (1 - self.discount_value / 100)
        return max(0.0, base_price - self.discount_value)

    def to_db_dict(self) -> dict:
        """Convierte a diccionario JSON para el store."""
        return self.model_dump(mode="json")
