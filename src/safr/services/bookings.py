"""
Servicio de reservas.

Implementa:
- Chequeo de disponibilidad: rangos semiabiertos [check_in, check_out)
- Máquina de estados: pending -> confirmed -> cancelled (y pending -> cancelled)
- Política de cancelación por el usuario: más de N días antes del check-in

No hay locks: dos sesiones concurrentes pueden pasar el chequeo de
disponibilidad a la vez y crear reservas solapadas.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

import structlog

from safr.config import get_settings
from safr.database import BookingRepository, HouseRepository, KeyValueStore, get_store
from safr.models import Booking, BookingStatus, Discount, House
from safr.models.common import to_date, utcnow_iso
from safr.services.discounts import DiscountService
from safr.services.notifications import NotificationService
from safr.services.result import FailureKind, OperationResult, handles_store_errors

logger = structlog.get_logger()

DateLike = Union[date, datetime, str]

# Transiciones válidas de estado
ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"cancelled"},
    "cancelled": set(),
}


@dataclass
class BookingQuote:
    """Desglose de precio para un rango de fechas."""

    nights: int
    nightly_price: float  # Precio por noche con descuento
    original_price: float  # nights * precio base
    total_price: float
    discount: Optional[Discount] = None

    @property
    def discount_applied(self) -> float:
        return self.original_price - self.total_price


def ranges_overlap(
    start: date, end: date, existing_start: date, existing_end: date
) -> bool:
    """
    Intersección de rangos semiabiertos [start, end) y [existing_start, existing_end).

    Un rango que empieza justo el día del check-out del otro no se solapa.
    """
    return (
        (existing_start <= start < existing_end)
        or (existing_start < end <= existing_end)
        or (start <= existing_start and end >= existing_end)
    )


def days_until(check_in: date, as_of: datetime) -> int:
    """Días (redondeando hacia arriba) desde `as_of` hasta el check-in."""
    check_in_at = datetime.combine(check_in, time.min, tzinfo=as_of.tzinfo)
    return math.ceil((check_in_at - as_of).total_seconds() / 86400)


class BookingService:
    """
    Servicio de reservas.

    Responsabilidades:
    - Crear reservas validando fechas, capacidad y disponibilidad
    - Confirmar y cancelar según la máquina de estados
    - Notificar al usuario (acciones del admin) o al admin (acciones del usuario)
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        notifications: Optional[NotificationService] = None,
        discounts: Optional[DiscountService] = None,
    ):
        store = store or get_store()
        self.settings = get_settings()
        self.booking_repo = BookingRepository(store)
        self.house_repo = HouseRepository(store)
        self.notifications = notifications or NotificationService(store)
        self.discounts = discounts or DiscountService(store)

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        return self.booking_repo.get_by_id(booking_id)

    def get_all_bookings(self) -> list[Booking]:
        return self.booking_repo.get_all()

    def get_user_bookings(self, user_id: str) -> list[Booking]:
        return self.booking_repo.get_by_user(user_id)

    def get_house_bookings(self, house_id: str) -> list[Booking]:
        """Reservas no canceladas de una casa."""
        return self.booking_repo.get_by_house(house_id)

    def is_date_available(
        self, house_id: str, check_in: DateLike, check_out: DateLike
    ) -> bool:
        """
        True si [check_in, check_out) no se cruza con ninguna reserva
        no cancelada de la casa.
        """
        start, end = to_date(check_in), to_date(check_out)
        for booking in self.booking_repo.get_by_house(house_id):
            if ranges_overlap(start, end, booking.check_in, booking.check_out):
                return False
        return True

    def get_booked_dates(self, house_id: str) -> list[date]:
        """Noches ocupadas de una casa (para el calendario de disponibilidad)."""
        nights: set[date] = set()
        for booking in self.booking_repo.get_by_house(house_id):
            day = booking.check_in
            while day < booking.check_out:
                nights.add(day)
                day += timedelta(days=1)
        return sorted(nights)

    def quote_booking(
        self,
        house: House,
        check_in: DateLike,
        check_out: DateLike,
        as_of: Optional[DateLike] = None,
    ) -> BookingQuote:
        """Precio total de la estadía con el descuento vigente en `as_of`."""
        nights = (to_date(check_out) - to_date(check_in)).days
        nightly, discount = self.discounts.calculate_discounted_price(
            house.price, house.id, as_of
        )
        return BookingQuote(
            nights=nights,
            nightly_price=nightly,
            original_price=nights * house.price,
            total_price=nights * nightly,
            discount=discount,
        )

    def can_user_cancel(self, booking: Booking, as_of: Optional[datetime] = None) -> bool:
        """El usuario puede cancelar si faltan más de N días para el check-in."""
        if booking.status == "cancelled":
            return False
        as_of = as_of or datetime.now()
        window = self.settings.user_cancellation_window_days
        return days_until(booking.check_in, as_of) > window

    # ------------------------------------------------------------------
    # Mutaciones
    # ------------------------------------------------------------------

    @handles_store_errors("Failed to create booking")
    def create_booking(
        self,
        house_id: str,
        user_id: str,
        check_in: DateLike,
        check_out: DateLike,
        guests: int,
        as_of: Optional[DateLike] = None,
    ) -> OperationResult:
        """
        Crea una reserva en estado pending.

        Se rechaza (sin crear nada) si las fechas no están en orden,
        si la casa no existe, si se excede la capacidad o si el rango
        no está disponible.
        """
        try:
            start, end = to_date(check_in), to_date(check_out)
        except ValueError:
            return OperationResult.fail(FailureKind.VALIDATION, "Invalid booking dates")

        if end <= start:
            return OperationResult.fail(
                FailureKind.VALIDATION, "Check-out date must be after check-in date"
            )

        house = self.house_repo.get_by_id(house_id)
        if not house:
            return OperationResult.fail(FailureKind.NOT_FOUND, "House not found")

        if guests < 1:
            return OperationResult.fail(FailureKind.VALIDATION, "At least 1 guest is required")
        if guests > house.guests:
            return OperationResult.fail(
                FailureKind.VALIDATION, f"Maximum {house.guests} guests allowed"
            )

        if not self.is_date_available(house_id, start, end):
            logger.info(
                "Fechas no disponibles",
                house_id=house_id,
                check_in=start.isoformat(),
                check_out=end.isoformat(),
            )
            return OperationResult.fail(
                FailureKind.CONFLICT, "Selected dates are not available"
            )

        quote = self.quote_booking(house, start, end, as_of)
        booking = Booking(
            house_id=house_id,
            user_id=user_id,
            check_in=start,
            check_out=end,
            guests=guests,
            total_price=quote.total_price,
            original_price=quote.original_price if quote.discount else None,
            discount_applied=quote.discount_applied if quote.discount else None,
        )
        self.booking_repo.create(booking)
        logger.info(
            "Reserva creada",
            booking_id=booking.id,
            house_id=house_id,
            user_id=user_id,
            nights=quote.nights,
            total=quote.total_price,
        )
        return OperationResult.ok(
            "Booking created successfully", booking_id=booking.id, booking=booking
        )

    def _mark_cancelled(
        self, booking: Booking, cancelled_by: str, reason: Optional[str]
    ) -> Booking:
        booking.status = "cancelled"
        booking.cancelled_at = utcnow_iso()
        booking.cancelled_by = cancelled_by
        booking.cancellation_reason = reason
        self.booking_repo.update(booking)
        return booking

    def _notify(self, **kwargs) -> None:
        result = self.notifications.add_notification(**kwargs)
        if not result.success:
            logger.warning(
                "No se pudo enviar la notificación",
                user_id=kwargs.get("user_id"),
                related_id=kwargs.get("related_id"),
            )

    @handles_store_errors("Failed to cancel booking")
    def cancel_booking(
        self, booking_id: str, cancelled_by: str, reason: Optional[str] = None
    ) -> OperationResult:
        """
        Cancelación por el admin: sin ventana de días.
        Notifica al usuario dueño de la reserva.
        """
        booking = self.booking_repo.get_by_id(booking_id)
        if not booking:
            return OperationResult.fail(FailureKind.NOT_FOUND, "Booking not found")
        if booking.status == "cancelled":
            return OperationResult.fail(FailureKind.CONFLICT, "Booking is already cancelled")

        self._mark_cancelled(booking, cancelled_by, reason)
        logger.info("Reserva cancelada por admin", booking_id=booking_id, admin=cancelled_by)

        reason_text = f"Reason: {reason}" if reason else ""
        self._notify(
            user_id=booking.user_id,
            type="booking_cancelled",
            title="Booking Cancelled",
            message=(
                f"Your booking for {booking.check_in} to {booking.check_out} "
                f"has been cancelled by the administrator. {reason_text}"
            ).strip(),
            related_id=booking_id,
        )
        return OperationResult.ok("Booking cancelled successfully", booking=booking)

    @handles_store_errors("Failed to cancel booking")
    def cancel_booking_by_user(
        self,
        booking_id: str,
        user_id: str,
        reason: Optional[str] = None,
        as_of: Optional[datetime] = None,
    ) -> OperationResult:
        """
        Cancelación por el propio usuario.
        Solo sus reservas y solo fuera de la ventana de días; notifica al admin.
        """
        booking = self.booking_repo.get_by_id(booking_id)
        if not booking:
            return OperationResult.fail(FailureKind.NOT_FOUND, "Booking not found")
        if booking.user_id != user_id:
            return OperationResult.fail(
                FailureKind.AUTHORIZATION, "You can only cancel your own bookings"
            )
        if booking.status == "cancelled":
            return OperationResult.fail(FailureKind.CONFLICT, "Booking is already cancelled")
        if not self.can_user_cancel(booking, as_of):
            window = self.settings.user_cancellation_window_days
            return OperationResult.fail(
                FailureKind.VALIDATION,
                f"You can only cancel bookings that are more than {window} days "
                "away from the check-in date",
            )

        self._mark_cancelled(booking, user_id, reason or "Cancelled by user")
        logger.info("Reserva cancelada por usuario", booking_id=booking_id, user_id=user_id)

        reason_text = f"Reason: {reason}" if reason else ""
        self._notify(
            user_id=self.settings.admin_notification_user_id,
            type="booking_cancelled",
            title="User Cancelled Booking",
            message=(
                f"A user has cancelled their booking for {booking.check_in} "
                f"to {booking.check_out}. {reason_text}"
            ).strip(),
            related_id=booking_id,
        )
        return OperationResult.ok("Booking cancelled successfully", booking=booking)

    @handles_store_errors("Failed to update booking status")
    def update_booking_status(
        self,
        booking_id: str,
        status: BookingStatus,
        changed_by: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> OperationResult:
        """
        Cambio de estado desde el panel de admin.

        Confirmar notifica al usuario; cancelar usa el flujo de
        cancelación del admin.
        """
        booking = self.booking_repo.get_by_id(booking_id)
        if not booking:
            return OperationResult.fail(FailureKind.NOT_FOUND, "Booking not found")

        if status not in ALLOWED_TRANSITIONS:
            return OperationResult.fail(FailureKind.VALIDATION, f"Unknown status: {status}")

        if status not in ALLOWED_TRANSITIONS[booking.status]:
            if booking.status == "cancelled":
                message = "Booking is already cancelled"
            else:
                message = f"Cannot change booking from {booking.status} to {status}"
            return OperationResult.fail(FailureKind.CONFLICT, message)

        if status == "cancelled":
            return self.cancel_booking(
                booking_id,
                cancelled_by=changed_by or self.settings.default_admin_id,
                reason=reason,
            )

        booking.status = status
        self.booking_repo.update(booking)
        logger.info("Estado de reserva actualizado", booking_id=booking_id, status=status)

        self._notify(
            user_id=booking.user_id,
            type="booking_confirmed",
            title="Booking Confirmed",
            message=(
                f"Your booking for {booking.check_in} to {booking.check_out} "
                "has been confirmed!"
            ),
            related_id=booking_id,
        )
        return OperationResult.ok("Booking status updated successfully", booking=booking)
