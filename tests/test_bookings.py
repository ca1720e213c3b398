from datetime import date, datetime

import pytest

from safr.config import get_settings
from safr.database import BookingRepository
from safr.models import Booking
from safr.services import BookingService, DiscountService, FailureKind, NotificationService
from safr.services.bookings import days_until, ranges_overlap


@pytest.fixture
def notifications(store):
    return NotificationService(store)


@pytest.fixture
def service(store, notifications):
    return BookingService(store, notifications=notifications)


def _book(service, check_in, check_out, user_id="user-1", guests=2, house_id="house-1"):
    return service.create_booking(house_id, user_id, check_in, check_out, guests)


# ----------------------------------------------------------------------
# Disponibilidad
# ----------------------------------------------------------------------


def test_ranges_overlap_half_open():
    existing = (date(2030, 7, 10), date(2030, 7, 15))
    assert ranges_overlap(date(2030, 7, 10), date(2030, 7, 15), *existing)
    assert ranges_overlap(date(2030, 7, 12), date(2030, 7, 14), *existing)
    assert ranges_overlap(date(2030, 7, 8), date(2030, 7, 20), *existing)
    assert ranges_overlap(date(2030, 7, 14), date(2030, 7, 16), *existing)
    assert not ranges_overlap(date(2030, 7, 15), date(2030, 7, 18), *existing)
    assert not ranges_overlap(date(2030, 7, 5), date(2030, 7, 10), *existing)


def test_exact_overlap_is_rejected(service):
    assert _book(service, "2030-07-10", "2030-07-15").success

    result = _book(service, "2030-07-10", "2030-07-15", user_id="user-2")

    assert not result.success
    assert result.error == FailureKind.CONFLICT
    assert result.message == "Selected dates are not available"
    assert len(service.get_house_bookings("house-1")) == 1


def test_back_to_back_bookings_are_allowed(service):
    assert _book(service, "2030-07-10", "2030-07-15").success

    assert _book(service, "2030-07-15", "2030-07-18", user_id="user-2").success
    assert _book(service, "2030-07-05", "2030-07-10", user_id="user-3").success
    assert len(service.get_house_bookings("house-1")) == 3


def test_other_house_is_not_affected(service):
    assert _book(service, "2030-07-10", "2030-07-15").success
    assert service.is_date_available("house-2", "2030-07-10", "2030-07-15")


def test_cancelled_booking_frees_dates(service):
    booking_id = _book(service, "2030-07-10", "2030-07-15").data["booking_id"]
    assert not service.is_date_available("house-1", "2030-07-12", "2030-07-13")

    assert service.cancel_booking(booking_id, cancelled_by="admin-1").success

    assert service.is_date_available("house-1", "2030-07-12", "2030-07-13")
    assert service.get_house_bookings("house-1") == []


def test_get_booked_dates_lists_occupied_nights(service):
    _book(service, "2030-07-10", "2030-07-13")
    _book(service, "2030-07-13", "2030-07-14", user_id="user-2")

    assert service.get_booked_dates("house-1") == [
        date(2030, 7, 10),
        date(2030, 7, 11),
        date(2030, 7, 12),
        date(2030, 7, 13),
    ]


# ----------------------------------------------------------------------
# Creación
# ----------------------------------------------------------------------


def test_create_booking_starts_pending_with_total(service):
    result = _book(service, "2030-07-10", "2030-07-13", guests=4)

    assert result.success
    booking = service.get_booking(result.data["booking_id"])
    assert booking.status == "pending"
    assert booking.nights == 3
    assert booking.total_price == 540
    assert booking.original_price is None
    assert booking.discount_applied is None


@pytest.mark.parametrize(
    "check_in, check_out",
    [("2030-07-10", "2030-07-10"), ("2030-07-12", "2030-07-10")],
)
def test_check_out_must_be_after_check_in(service, check_in, check_out):
    result = _book(service, check_in, check_out)

    assert result.error == FailureKind.VALIDATION
    assert result.message == "Check-out date must be after check-in date"
    assert service.get_all_bookings() == []


def test_invalid_dates_are_rejected(service):
    result = _book(service, "not-a-date", "2030-07-10")
    assert result.error == FailureKind.VALIDATION


def test_guests_above_capacity(service):
    result = _book(service, "2030-07-10", "2030-07-12", guests=11)

    assert result.error == FailureKind.VALIDATION
    assert result.message == "Maximum 10 guests allowed"


def test_guests_at_capacity_is_accepted(service):
    assert _book(service, "2030-07-10", "2030-07-12", guests=10).success


def test_zero_guests_is_rejected(service):
    assert _book(service, "2030-07-10", "2030-07-12", guests=0).error == FailureKind.VALIDATION


def test_unknown_house(service):
    result = _book(service, "2030-07-10", "2030-07-12", house_id="house-404")
    assert result.error == FailureKind.NOT_FOUND


def test_booking_with_active_discount(store, service):
    DiscountService(store).add_discount(
        "house-1", "percentage", 20, "2030-07-01", "2030-07-31", created_by="admin-1"
    )

    result = service.create_booking(
        "house-1", "user-1", "2030-07-10", "2030-07-13", 2, as_of="2030-07-05"
    )

    booking = result.data["booking"]
    assert booking.total_price == 432
    assert booking.original_price == 540
    assert booking.discount_applied == 108


def test_quote_booking(store, service):
    DiscountService(store).add_discount(
        "house-2", "fixed", 20, "2030-07-01", "2030-07-31", created_by="admin-1"
    )
    house = service.house_repo.get_by_id("house-2")

    quote = service.quote_booking(house, "2030-07-01", "2030-07-05", as_of="2030-07-01")

    assert quote.nights == 4
    assert quote.nightly_price == 100
    assert quote.total_price == 400
    assert quote.discount_applied == 80


# ----------------------------------------------------------------------
# Política de cancelación
# ----------------------------------------------------------------------


def test_days_until_rounds_up():
    assert days_until(date(2030, 1, 20), datetime(2030, 1, 12)) == 8
    assert days_until(date(2030, 1, 20), datetime(2030, 1, 12, 18, 0)) == 8
    assert days_until(date(2030, 1, 20), datetime(2030, 1, 13)) == 7


def _stored_booking(store, status="pending", user_id="user-1"):
    booking = Booking(
        house_id="house-1",
        user_id=user_id,
        check_in=date(2030, 1, 20),
        check_out=date(2030, 1, 25),
        guests=2,
        total_price=900,
        status=status,
    )
    BookingRepository(store).create(booking)
    return booking


def test_can_user_cancel_window(store, service):
    booking = _stored_booking(store)

    assert service.can_user_cancel(booking, as_of=datetime(2030, 1, 12))
    assert not service.can_user_cancel(booking, as_of=datetime(2030, 1, 13))
    assert not service.can_user_cancel(booking, as_of=datetime(2030, 1, 19))


def test_can_user_cancel_false_once_cancelled(store, service):
    booking = _stored_booking(store, status="cancelled")
    assert not service.can_user_cancel(booking, as_of=datetime(2029, 12, 1))


def test_cancellation_window_is_configurable(store, monkeypatch):
    monkeypatch.setenv("USER_CANCELLATION_WINDOW_DAYS", "3")
    get_settings.cache_clear()
    service = BookingService(store)
    booking = _stored_booking(store)

    assert service.can_user_cancel(booking, as_of=datetime(2030, 1, 16))
    assert not service.can_user_cancel(booking, as_of=datetime(2030, 1, 17))


def test_user_cancel_notifies_admin(store, service, notifications):
    booking = _stored_booking(store)

    result = service.cancel_booking_by_user(
        booking.id, "user-1", as_of=datetime(2030, 1, 1)
    )

    assert result.success
    stored = service.get_booking(booking.id)
    assert stored.status == "cancelled"
    assert stored.cancelled_by == "user-1"
    assert stored.cancellation_reason == "Cancelled by user"
    assert stored.cancelled_at

    admin_notifications = notifications.get_user_notifications("admin-1")
    assert len(admin_notifications) == 1
    assert admin_notifications[0].title == "User Cancelled Booking"
    assert admin_notifications[0].related_id == booking.id
    assert notifications.get_user_notifications("user-1") == []


def test_user_cannot_cancel_inside_window(store, service):
    booking = _stored_booking(store)

    result = service.cancel_booking_by_user(
        booking.id, "user-1", as_of=datetime(2030, 1, 15)
    )

    assert result.error == FailureKind.VALIDATION
    assert "more than 7 days" in result.message
    assert service.get_booking(booking.id).status == "pending"


def test_user_cannot_cancel_someone_elses_booking(store, service):
    booking = _stored_booking(store)

    result = service.cancel_booking_by_user(
        booking.id, "user-2", as_of=datetime(2030, 1, 1)
    )

    assert result.error == FailureKind.AUTHORIZATION
    assert result.message == "You can only cancel your own bookings"


def test_admin_cancel_notifies_user(store, service, notifications):
    booking = _stored_booking(store, status="confirmed")

    result = service.cancel_booking(booking.id, "admin-1", reason="Maintenance")

    assert result.success
    user_notifications = notifications.get_user_notifications("user-1")
    assert len(user_notifications) == 1
    assert user_notifications[0].type == "booking_cancelled"
    assert user_notifications[0].title == "Booking Cancelled"
    assert "Reason: Maintenance" in user_notifications[0].message


def test_admin_cancel_ignores_window(store, service):
    booking = _stored_booking(store)
    assert service.cancel_booking(booking.id, "admin-1").success


def test_cancel_twice_is_a_conflict(store, service):
    booking = _stored_booking(store)
    service.cancel_booking(booking.id, "admin-1")

    assert service.cancel_booking(booking.id, "admin-1").error == FailureKind.CONFLICT
    result = service.cancel_booking_by_user(booking.id, "user-1", as_of=datetime(2030, 1, 1))
    assert result.error == FailureKind.CONFLICT


def test_cancel_unknown_booking(service):
    assert service.cancel_booking("booking-404", "admin-1").error == FailureKind.NOT_FOUND


# ----------------------------------------------------------------------
# Máquina de estados
# ----------------------------------------------------------------------


def test_pending_to_confirmed_notifies_user(store, service, notifications):
    booking = _stored_booking(store)

    result = service.update_booking_status(booking.id, "confirmed")

    assert result.success
    assert service.get_booking(booking.id).status == "confirmed"
    [notification] = notifications.get_user_notifications("user-1")
    assert notification.type == "booking_confirmed"
    assert notification.title == "Booking Confirmed"


def test_pending_to_cancelled(store, service):
    booking = _stored_booking(store)

    assert service.update_booking_status(booking.id, "cancelled", changed_by="admin-2").success

    stored = service.get_booking(booking.id)
    assert stored.status == "cancelled"
    assert stored.cancelled_by == "admin-2"


def test_confirmed_to_cancelled(store, service):
    booking = _stored_booking(store, status="confirmed")
    assert service.update_booking_status(booking.id, "cancelled").success
    assert service.get_booking(booking.id).cancelled_by == "admin-1"


@pytest.mark.parametrize(
    "current, target",
    [
        ("cancelled", "confirmed"),
        ("cancelled", "pending"),
        ("confirmed", "pending"),
        ("confirmed", "confirmed"),
    ],
)
def test_invalid_transitions(store, service, current, target):
    booking = _stored_booking(store, status=current)

    result = service.update_booking_status(booking.id, target)

    assert result.error == FailureKind.CONFLICT
    assert service.get_booking(booking.id).status == current


def test_unknown_status(store, service):
    booking = _stored_booking(store)
    assert service.update_booking_status(booking.id, "archived").error == FailureKind.VALIDATION


def test_user_bookings_include_cancelled(store, service):
    booking = _stored_booking(store)
    service.cancel_booking(booking.id, "admin-1")

    assert [b.id for b in service.get_user_bookings("user-1")] == [booking.id]


def test_availability_against_confirmed_booking(store, service):
    BookingRepository(store).create(
        Booking(
            house_id="house-1",
            user_id="user-1",
            check_in=date(2024, 7, 15),
            check_out=date(2024, 7, 20),
            guests=4,
            total_price=900,
            status="confirmed",
        )
    )

    assert not service.is_date_available("house-1", "2024-07-15", "2024-07-20")
    assert service.is_date_available("house-1", "2024-07-20", "2024-07-25")


def test_failing_notification_listener_does_not_break_cancel(store, service, notifications):
    booking = _stored_booking(store, status="confirmed")

    def broken(_notifications):
        raise RuntimeError("listener down")

    notifications.subscribe(broken)

    result = service.cancel_booking(booking.id, "admin-1")

    assert result.success
    assert service.get_booking(booking.id).status == "cancelled"
    assert len(notifications.get_user_notifications("user-1")) == 1
