"""Modelo de Notificación."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from safr.models.common import new_id, utcnow_iso

NotificationType = Literal[
    "booking_cancelled",
    "booking_confirmed",
    "discount_applied",
    "general",
]


class Notification(BaseModel):
    """Aviso para un usuario o admin."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: new_id("notification"))
    user_id: str = Field(..., description="Destinatario")
    type: NotificationType = "general"
    title: str
    message: str
    is_read: bool = False
    created_at: str = Field(default_factory=utcnow_iso)
    related_id: Optional[str] = Field(
        None, description="ID relacionado: reserva, casa, etc."
    )

    def to_db_dict(self) -> dict:
        return self.model_dump(mode="json")
