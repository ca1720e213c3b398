"""
Repositorios sobre el store key-value.

Cada repositorio maneja un bucket/entidad específica. Las escrituras
leen la colección completa, la modifican y la vuelven a guardar:
no hay índices en memoria ni integridad referencial.
"""

from typing import Generic, Optional, TypeVar

import structlog
from pydantic import BaseModel

from safr.database.store import KeyValueStore, get_store
from safr.models import (
    AdminUser,
    Booking,
    Discount,
    House,
    Notification,
    Review,
    SiteSettings,
    StoredAdmin,
    StoredUser,
    User,
)
from safr.models.common import utcnow_iso

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseRepository:
    """Clase base para repositorios."""

    def __init__(self, store: Optional[KeyValueStore] = None):
        self._store = store or get_store()

    @property
    def store(self) -> KeyValueStore:
        return self._store


class CollectionRepository(BaseRepository, Generic[ModelT]):
    """Repositorio de un bucket que guarda una lista de registros con `id`."""

    BUCKET: str = ""
    MODEL: type[BaseModel] = BaseModel

    def _load(self) -> list[dict]:
        return self.store.get_list(self.BUCKET)

    def _save(self, rows: list[dict]) -> None:
        self.store.set(self.BUCKET, rows)

    def get_all(self) -> list[ModelT]:
        """Todos los registros, en orden de almacenamiento."""
        return [self.MODEL.model_validate(row) for row in self._load()]

    def get_by_id(self, item_id: str) -> Optional[ModelT]:
        """Obtiene un registro por su ID."""
        for row in self._load():
            if row.get("id") == item_id:
                return self.MODEL.model_validate(row)
        return None

    def create(self, item: ModelT) -> ModelT:
        """Agrega un registro al final de la colección."""
        rows = self._load()
        rows.append(item.to_db_dict())
        self._save(rows)
        logger.info("Registro creado", bucket=self.BUCKET, id=item.id)
        return item

    def update(self, item: ModelT) -> bool:
        """Reemplaza el registro con el mismo ID. False si no existe."""
        rows = self._load()
        for index, row in enumerate(rows):
            if row.get("id") == item.id:
                rows[index] = item.to_db_dict()
                self._save(rows)
                return True
        return False

    def delete(self, item_id: str) -> bool:
        """Borra un registro. False si no existía."""
        rows = self._load()
        remaining = [row for row in rows if row.get("id") != item_id]
        if len(remaining) == len(rows):
            return False
        self._save(remaining)
        logger.info("Registro borrado", bucket=self.BUCKET, id=item_id)
        return True

    def replace_all(self, items: list[ModelT]) -> None:
        """Sobrescribe la colección completa."""
        self._save([item.to_db_dict() for item in items])

    def is_empty(self) -> bool:
        return not self._load()


class HouseRepository(CollectionRepository[House]):
    """Repositorio para casas."""

    BUCKET = "houses"
    MODEL = House

    def update_rating(self, house_id: str, rating: float, reviews: int) -> bool:
        """Actualiza rating y cantidad de reseñas de una casa."""
        house = self.get_by_id(house_id)
        if not house:
            return False
        house.rating = rating
        house.reviews = reviews
        house.updated_at = utcnow_iso()
        return self.update(house)


class BookingRepository(CollectionRepository[Booking]):
    """Repositorio para reservas."""

    BUCKET = "bookings"
    MODEL = Booking

    def get_by_house(
        self, house_id: str, include_cancelled: bool = False
    ) -> list[Booking]:
        """Reservas de una casa (por defecto sin las canceladas)."""
        return [
            b
            for b in self.get_all()
            if b.house_id == house_id
            and (include_cancelled or b.status != "cancelled")
        ]

    def get_by_user(self, user_id: str) -> list[Booking]:
        """Todas las reservas de un usuario, incluidas las canceladas."""
        return [b for b in self.get_all() if b.user_id == user_id]


class DiscountRepository(CollectionRepository[Discount]):
    """Repositorio para descuentos."""

    BUCKET = "discounts"
    MODEL = Discount

    def get_by_house(self, house_id: str, active_only: bool = True) -> list[Discount]:
        return [
            d
            for d in self.get_all()
            if d.house_id == house_id and (d.is_active or not active_only)
        ]


class ReviewRepository(CollectionRepository[Review]):
    """Repositorio para reseñas."""

    BUCKET = "reviews"
    MODEL = Review

    def get_by_house(self, house_id: str) -> list[Review]:
        return [r for r in self.get_all() if r.house_id == house_id]

    def get_by_user(self, user_id: str) -> list[Review]:
        return [r for r in self.get_all() if r.user_id == user_id]

    def get_by_house_and_user(self, house_id: str, user_id: str) -> Optional[Review]:
        """La reseña de un usuario sobre una casa, si existe."""
        for review in self.get_all():
            if review.house_id == house_id and review.user_id == user_id:
                return review
        return None


class NotificationRepository(CollectionRepository[Notification]):
    """Repositorio para notificaciones."""

    BUCKET = "notifications"
    MODEL = Notification

    def get_by_user(self, user_id: str) -> list[Notification]:
        return [n for n in self.get_all() if n.user_id == user_id]

    def mark_all_read(self, user_id: str) -> int:
        """Marca como leídas todas las notificaciones de un usuario."""
        notifications = self.get_all()
        changed = 0
        for notification in notifications:
            if notification.user_id == user_id and not notification.is_read:
                notification.is_read = True
                changed += 1
        self.replace_all(notifications)
        return changed


class UserRepository(CollectionRepository[StoredUser]):
    """Repositorio para usuarios y su sesión actual."""

    BUCKET = "users"
    SESSION_KEY = "user"
    MODEL = StoredUser

    def get_by_email(self, email: str) -> Optional[StoredUser]:
        """Obtiene un usuario por email (sin distinguir mayúsculas)."""
        email = email.strip().lower()
        for user in self.get_all():
            if user.email.lower() == email:
                return user
        return None

    def update_favorites(self, user_id: str, favorites: list[str]) -> bool:
        """Actualiza la lista de favoritos del usuario."""
        user = self.get_by_id(user_id)
        if not user:
            return False
        user.favorites = favorites
        logger.info("Favoritos actualizados", user_id=user_id, total=len(favorites))
        return self.update(user)

    def get_session(self) -> Optional[User]:
        """Usuario con sesión abierta, si hay."""
        data = self.store.get(self.SESSION_KEY)
        return User.model_validate(data) if data else None

    def save_session(self, user: User) -> None:
        self.store.set(self.SESSION_KEY, user.to_db_dict())

    def clear_session(self) -> None:
        self.store.delete(self.SESSION_KEY)


class AdminRepository(CollectionRepository[StoredAdmin]):
    """Repositorio para administradores y su sesión actual."""

    BUCKET = "admins"
    SESSION_KEY = "admin"
    MODEL = StoredAdmin

    def get_by_username(self, username: str) -> Optional[StoredAdmin]:
        for admin in self.get_all():
            if admin.username == username:
                return admin
        return None

    def get_session(self) -> Optional[AdminUser]:
        data = self.store.get(self.SESSION_KEY)
        return AdminUser.model_validate(data) if data else None

    def save_session(self, admin: AdminUser) -> None:
        self.store.set(self.SESSION_KEY, admin.to_db_dict())

    def clear_session(self) -> None:
        self.store.delete(self.SESSION_KEY)


class SiteSettingsRepository(BaseRepository):
    """Repositorio para la configuración del sitio (un único objeto)."""

    BUCKET = "site_settings"

    def get(self) -> Optional[SiteSettings]:
        data = self.store.get(self.BUCKET)
        return SiteSettings.model_validate(data) if data else None

    def save(self, settings: SiteSettings) -> SiteSettings:
        self.store.set(self.BUCKET, settings.to_db_dict())
        logger.info("Configuración del sitio guardada", updated_by=settings.updated_by)
        return settings
