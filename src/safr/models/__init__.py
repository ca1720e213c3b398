"""
Modelos de datos del sistema.

Registros planos que se guardan como colecciones JSON
en el store key-value, un bucket por entidad.
"""

from safr.models.house import House, HouseFilters, MapLocation
from safr.models.booking import Booking, BookingStatus
from safr.models.discount import Discount, DiscountType
from safr.models.review import Review, RatingStats
from safr.models.notification import Notification, NotificationType
from safr.models.user import User, StoredUser, AdminUser, StoredAdmin, AdminRole
from safr.models.site_settings import SiteSettings, LocalizedText, SocialMedia

__all__ = [
    # Listings
    "House",
    "MapLocation",
    "HouseFilters",
    # Reservas y precios
    "Booking",
    "BookingStatus",
    "Discount",
    "DiscountType",
    # Reseñas
    "Review",
    "RatingStats",
    # Notificaciones
    "Notification",
    "NotificationType",
    # Usuarios
    "User",
    "StoredUser",
    "AdminUser",
    "StoredAdmin",
    "AdminRole",
    # Sitio
    "SiteSettings",
    "LocalizedText",
    "SocialMedia",
]
