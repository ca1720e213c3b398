"""
Modelo de Reserva

Una reserva de una casa por un rango de fechas.
Nunca se borra: cancelar es un cambio de estado.
"""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from safr.models.common import new_id, utcnow_iso

BookingStatus = Literal["pending", "confirmed", "cancelled"]


class Booking(BaseModel):
    """
    Reserva de una casa.

    El rango es semiabierto: [check_in, check_out).
    La noche del check_out no queda ocupada.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: new_id("booking"))
    house_id: str = Field(..., description="FK a House")
    user_id: str = Field(..., description="FK a User")

    # Fechas
    check_in: date
    check_out: date
    guests: int = Field(..., ge=1)

    # Precio
    total_price: float = Field(..., ge=0)
    original_price: Optional[float] = Field(
        None, ge=0, description="Precio sin descuento (solo si hubo descuento)"
    )
    discount_applied: Optional[float] = Field(
        None, ge=0, description="Monto descontado (solo si hubo descuento)"
    )

    # Estado
    status: BookingStatus = "pending"
    created_at: str = Field(default_factory=utcnow_iso)

    # Cancelación
    cancelled_at: Optional[str] = None
    cancelled_by: Optional[str] = None
    cancellation_reason: Optional[str] = None

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def to_db_dict(self) -> dict:
        """Convierte a diccionario JSON para el store."""
        return self.model_dump(mode="json")
