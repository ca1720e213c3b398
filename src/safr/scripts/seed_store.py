"""
Script para inicializar el store con datos por defecto.

Crea casas, contenido del sitio y el admin inicial si no existen.
Con --with-samples agrega reseñas y reservas de muestra.

Uso:
    python -m safr.scripts.seed_store
    python -m safr.scripts.seed_store --with-samples
"""

import argparse
import logging
import sys

import structlog

from safr.config import get_settings
from safr.database import (
    BookingRepository,
    HouseRepository,
    KeyValueStore,
    ReviewRepository,
    get_store,
)
from safr.database import seed
from safr.services import AdminAuthService, ReviewService, SiteSettingsService

# Configurar logging
settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(message)s",
    force=True,
)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


def seed_store(store: KeyValueStore, with_samples: bool = False) -> dict:
    """
    Carga los datos por defecto en los buckets vacíos.

    Returns:
        Estadísticas de lo creado
    """
    stats = {"houses": 0, "reviews": 0, "bookings": 0, "admin": False, "site_settings": False}

    house_repo = HouseRepository(store)
    if house_repo.is_empty():
        houses = seed.default_houses()
        house_repo.replace_all(houses)
        stats["houses"] = len(houses)

    settings_service = SiteSettingsService(store)
    if settings_service.get_settings() is None:
        settings_service.initialize_defaults()
        stats["site_settings"] = True

    stats["admin"] = AdminAuthService(store).ensure_default_admin() is not None

    if with_samples:
        review_repo = ReviewRepository(store)
        if review_repo.is_empty():
            reviews = seed.sample_reviews()
            review_repo.replace_all(reviews)
            stats["reviews"] = len(reviews)
            # Rating de las casas a partir de las reseñas cargadas
            review_service = ReviewService(store)
            for house_id in {r.house_id for r in reviews}:
                review_service.sync_house_rating(house_id)

        booking_repo = BookingRepository(store)
        if booking_repo.is_empty():
            bookings = seed.sample_bookings()
            booking_repo.replace_all(bookings)
            stats["bookings"] = len(bookings)

    return stats


def main():
    """Entry point del seed."""
    parser = argparse.ArgumentParser(
        description="Inicializa el store con casas, contenido del sitio y admin"
    )
    parser.add_argument(
        "--with-samples",
        action="store_true",
        help="Agrega reseñas y reservas de muestra",
    )
    args = parser.parse_args()

    logger.info("Iniciando seed", backend=settings.storage_backend)

    try:
        stats = seed_store(get_store(), with_samples=args.with_samples)
        logger.info("Seed finalizado", **stats)
    except KeyboardInterrupt:
        logger.info("Seed interrumpido por usuario")
        sys.exit(130)
    except Exception as e:
        logger.error("Error fatal en seed", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
