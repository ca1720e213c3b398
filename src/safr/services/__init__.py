"""
Servicios del dominio.

Objetos sin estado global que operan sobre un store explícito:
casas, reservas, descuentos, reseñas, notificaciones, auth y
contenido del sitio.
"""

from safr.services.result import FailureKind, OperationResult
from safr.services.events import EventEmitter
from safr.services.notifications import NotificationService
from safr.services.discounts import DiscountService
from safr.services.bookings import BookingQuote, BookingService
from safr.services.houses import HouseService
from safr.services.reviews import ReviewService
from safr.services.auth import AdminAuthService, AdminAuthState, AuthService, AuthState
from safr.services.site_settings import SiteSettingsService

__all__ = [
    "FailureKind",
    "OperationResult",
    "EventEmitter",
    "NotificationService",
    "DiscountService",
    "BookingService",
    "BookingQuote",
    "HouseService",
    "ReviewService",
    "AuthService",
    "AuthState",
    "AdminAuthService",
    "AdminAuthState",
    "SiteSettingsService",
]
