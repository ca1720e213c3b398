"""
Servicio de configuración del sitio.

Textos del header/hero/footer por idioma y datos de contacto,
con valores por defecto cuando el store todavía no tiene nada.
"""

from typing import Any, Optional

import structlog
from pydantic import ValidationError

from safr.config import SUPPORTED_LANGUAGES
from safr.database import KeyValueStore, SiteSettingsRepository, get_store
from safr.database import seed
from safr.models import SiteSettings
from safr.models.common import utcnow_iso
from safr.services.result import FailureKind, OperationResult, handles_store_errors

logger = structlog.get_logger()

READONLY_FIELDS = {"id", "updated_at", "updated_by"}


class SiteSettingsService:
    """Lectura y edición del contenido del sitio."""

    def __init__(self, store: Optional[KeyValueStore] = None):
        self.settings_repo = SiteSettingsRepository(store or get_store())

    def get_settings(self) -> Optional[SiteSettings]:
        return self.settings_repo.get()

    def initialize_defaults(self) -> SiteSettings:
        """Guarda el contenido por defecto si el store está vacío."""
        current = self.settings_repo.get()
        if current:
            return current
        logger.info("Inicializando configuración del sitio por defecto")
        return self.settings_repo.save(seed.default_site_settings())

    @handles_store_errors("Failed to update settings")
    def update_settings(self, updates: dict[str, Any], updated_by: str) -> OperationResult:
        """Aplica cambios parciales y registra quién los hizo."""
        current = self.settings_repo.get()
        if not current:
            return OperationResult.fail(FailureKind.NOT_FOUND, "Settings not found")

        updates = {k: v for k, v in updates.items() if k not in READONLY_FIELDS}
        try:
            updated = SiteSettings.model_validate(
                {
                    **current.model_dump(),
                    **updates,
                    "updated_at": utcnow_iso(),
                    "updated_by": updated_by,
                }
            )
        except ValidationError as e:
            logger.warning("Configuración inválida", error=str(e))
            return OperationResult.fail(FailureKind.VALIDATION, "Invalid settings data")

        self.settings_repo.save(updated)
        return OperationResult.ok("Settings updated successfully")

    def _localized(self, field: str, language: str, default: str) -> str:
        if language not in SUPPORTED_LANGUAGES:
            language = "en"
        settings = self.settings_repo.get()
        if not settings:
            return default
        return getattr(settings, field).get(language) or default

    def get_site_title(self, language: str = "en") -> str:
        return self._localized("site_title", language, seed.DEFAULT_SITE_TITLE)

    def get_header_description(self, language: str = "en") -> str:
        return self._localized(
            "header_description", language, seed.DEFAULT_HEADER_DESCRIPTION
        )

    def get_hero_title(self, language: str = "en") -> str:
        return self._localized("hero_title", language, seed.DEFAULT_HERO_TITLE)

    def get_hero_subtitle(self, language: str = "en") -> str:
        return self._localized("hero_subtitle", language, seed.DEFAULT_HERO_SUBTITLE)

    def get_footer_description(self, language: str = "en") -> str:
        return self._localized(
            "footer_description", language, seed.DEFAULT_FOOTER_DESCRIPTION
        )

    def get_contact_info(self) -> dict[str, str]:
        settings = self.settings_repo.get()
        return {
            "phone": (settings and settings.contact_phone) or seed.DEFAULT_CONTACT_PHONE,
            "whatsapp": (settings and settings.contact_whatsapp)
            or seed.DEFAULT_CONTACT_PHONE,
            "email": (settings and settings.contact_email) or seed.DEFAULT_CONTACT_EMAIL,
        }

    def get_hero_video_url(self) -> str:
        settings = self.settings_repo.get()
        return (settings and settings.hero_video_url) or seed.DEFAULT_HERO_VIDEO_URL

    def get_logo_url(self) -> str:
        settings = self.settings_repo.get()
        return settings.logo_url if settings else ""
