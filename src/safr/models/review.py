"""Modelo de Reseña."""

from pydantic import BaseModel, ConfigDict, Field

from safr.models.common import new_id, utcnow_iso


class Review(BaseModel):
    """Reseña de un usuario sobre una casa (una por par casa/usuario)."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: new_id("review"))
    house_id: str = Field(..., description="FK a House")
    user_id: str = Field(..., description="FK a User")
    user_name: str = Field(..., description="Nombre visible del autor")
    rating: int = Field(..., ge=1, le=5, description="Estrellas de 1 a 5")
    title: str = ""
    comment: str = ""
    created_at: str = Field(default_factory=utcnow_iso)
    updated_at: str = Field(default_factory=utcnow_iso)

    def to_db_dict(self) -> dict:
        return self.model_dump(mode="json")


class RatingStats(BaseModel):
    """Estadísticas de rating de una casa."""

    average_rating: float = 0.0
    total_reviews: int = 0
    rating_distribution: dict[int, int] = Field(
        default_factory=lambda: {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}
    )
