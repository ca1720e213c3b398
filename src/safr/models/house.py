"""
Modelo de Casa (listing)

Una casa de verano publicada para alquiler por noche.
Solo el panel de administración la crea o modifica.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from safr.models.common import new_id, utcnow_iso


class MapLocation(BaseModel):
    """Coordenadas para el mapa."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class House(BaseModel):
    """
    Casa publicada.

    `rating` y `reviews` se recalculan desde las reseñas
    cada vez que una reseña se agrega, edita o borra.
    """

    model_config = ConfigDict(from_attributes=True)

    # Identificación
    id: str = Field(default_factory=lambda: new_id("house"))
    title: str = Field(..., min_length=1, description="Título del anuncio")

    # Ubicación
    area: str = Field(..., description="Zona, ej: Zawita")
    city: str = Field(..., description="Ciudad, ej: Duhok")
    map_location: Optional[MapLocation] = Field(None, description="{'lat', 'lng'}")

    # Precio por noche
    price: float = Field(..., ge=0, description="Precio por noche")
    currency: str = Field(default="USD", description="Moneda del precio")

    # Reputación
    rating: float = Field(default=0.0, ge=0, le=5)
    reviews: int = Field(default=0, ge=0, description="Cantidad de reseñas")

    # Capacidad
    bedrooms: int = Field(default=1, ge=0)
    bathrooms: int = Field(default=1, ge=0)
    guests: int = Field(default=1, ge=1, description="Capacidad máxima de huéspedes")
    parking: bool = False
    available: bool = True

    # Contenido
    images: list[str] = Field(default_factory=list, description="URLs de imágenes")
    description: str = ""
    amenities: list[str] = Field(default_factory=list)

    # Contacto
    phone: Optional[str] = None
    whatsapp: Optional[str] = None

    # Metadatos
    created_at: str = Field(default_factory=utcnow_iso)
    updated_at: str = Field(default_factory=utcnow_iso)

    def to_db_dict(self) -> dict:
        """Convierte a diccionario JSON para el store."""
        data = self.model_dump(mode="json")
        # Las amenities son un conjunto: sin duplicados, orden estable
        data["amenities"] = list(dict.fromkeys(self.amenities))
        return data


class HouseFilters(BaseModel):
    """
    Filtros de búsqueda del listado.
    Los valores "All Areas" / "All Cities" equivalen a no filtrar.
    """

    area: Optional[str] = None
    city: Optional[str] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    available: Optional[bool] = Field(None, description="True: solo disponibles")
    min_guests: Optional[int] = Field(None, ge=1)
    price_sort: Optional[Literal["low-to-high", "high-to-low"]] = None
