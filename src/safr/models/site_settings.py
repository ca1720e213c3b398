"""
Modelo de Configuración del sitio

Textos del header, hero y footer en los tres idiomas del sitio,
más datos de contacto. Se guarda como un único objeto.
"""

from typing import Optional

from pydantic import BaseModel, Field

from safr.models.common import utcnow_iso


class LocalizedText(BaseModel):
    """Texto en inglés, árabe y kurdo."""

    en: str = ""
    ar: str = ""
    ku: str = ""

    def get(self, language: str) -> str:
        """Texto en `language`, o en inglés si falta."""
        return getattr(self, language, "") or self.en


class SocialMedia(BaseModel):
    facebook: Optional[str] = ""
    instagram: Optional[str] = ""
    twitter: Optional[str] = ""


class SiteSettings(BaseModel):
    """Contenido editable del sitio."""

    id: str = "site-settings-1"

    # Header
    site_title: LocalizedText = Field(default_factory=LocalizedText)
    header_description: LocalizedText = Field(default_factory=LocalizedText)
    logo_url: str = Field("", description="Vacío usa el logo por defecto")

    # Hero
    hero_title: LocalizedText = Field(default_factory=LocalizedText)
    hero_subtitle: LocalizedText = Field(default_factory=LocalizedText)
    hero_video_url: str = ""

    # Footer y contacto
    footer_description: LocalizedText = Field(default_factory=LocalizedText)
    contact_phone: str = ""
    contact_whatsapp: str = ""
    contact_email: str = ""
    social_media: SocialMedia = Field(default_factory=SocialMedia)

    # Metadatos
    updated_at: str = Field(default_factory=utcnow_iso)
    updated_by: str = "system"

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para el store (nested models como dict)."""
        return self.model_dump(mode="json")
