"""
Servicio de notificaciones.

Guarda avisos para usuarios y admins y publica la colección
completa a los suscriptores después de cada cambio.
"""

from typing import Callable, Optional

import structlog

from safr.database import KeyValueStore, NotificationRepository, get_store
from safr.models import Notification, NotificationType
from safr.services.events import EventEmitter
from safr.services.result import FailureKind, OperationResult, handles_store_errors

logger = structlog.get_logger()


class NotificationService:
    """Alta, lectura y borrado de notificaciones."""

    def __init__(self, store: Optional[KeyValueStore] = None):
        store = store or get_store()
        self.notification_repo = NotificationRepository(store)
        self.events: EventEmitter[list[Notification]] = EventEmitter("notifications")

    def subscribe(
        self, listener: Callable[[list[Notification]], None]
    ) -> Callable[[], None]:
        """Registra un listener; recibe todas las notificaciones tras cada cambio."""
        return self.events.subscribe(listener)

    def _notify_listeners(self) -> None:
        self.events.emit(self.notification_repo.get_all())

    def get_all_notifications(self) -> list[Notification]:
        return self.notification_repo.get_all()

    def get_user_notifications(self, user_id: str) -> list[Notification]:
        """Notificaciones de un usuario, más nuevas primero."""
        notifications = self.notification_repo.get_by_user(user_id)
        return sorted(notifications, key=lambda n: n.created_at, reverse=True)

    def get_unread_count(self, user_id: str) -> int:
        return sum(1 for n in self.notification_repo.get_by_user(user_id) if not n.is_read)

    @handles_store_errors("Failed to send notification")
    def add_notification(
        self,
        user_id: str,
        title: str,
        message: str,
        type: NotificationType = "general",
        related_id: Optional[str] = None,
    ) -> OperationResult:
        """Crea una notificación no leída para `user_id`."""
        notification = Notification(
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            related_id=related_id,
        )
        self.notification_repo.create(notification)
        logger.info(
            "Notificación creada",
            user_id=user_id,
            type=type,
            related_id=related_id,
        )

        self._notify_listeners()
        return OperationResult.ok(
            "Notification sent successfully", notification_id=notification.id
        )

    @handles_store_errors("Failed to mark notification as read")
    def mark_as_read(self, notification_id: str) -> OperationResult:
        notification = self.notification_repo.get_by_id(notification_id)
        if not notification:
            return OperationResult.fail(FailureKind.NOT_FOUND, "Notification not found")

        notification.is_read = True
        self.notification_repo.update(notification)

        self._notify_listeners()
        return OperationResult.ok("Notification marked as read")

    @handles_store_errors("Failed to mark notifications as read")
    def mark_all_as_read(self, user_id: str) -> OperationResult:
        updated = self.notification_repo.mark_all_read(user_id)

        self._notify_listeners()
        return OperationResult.ok("All notifications marked as read", updated=updated)

    @handles_store_errors("Failed to delete notification")
    def delete_notification(self, notification_id: str) -> OperationResult:
        if not self.notification_repo.delete(notification_id):
            return OperationResult.fail(FailureKind.NOT_FOUND, "Notification not found")

        self._notify_listeners()
        return OperationResult.ok("Notification deleted successfully")
