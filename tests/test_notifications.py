import pytest

from safr.services import FailureKind, NotificationService


@pytest.fixture
def service(empty_store):
    return NotificationService(empty_store)


def test_add_notification_is_unread(service):
    result = service.add_notification("user-1", "Hello", "Welcome to Safr")

    assert result.success
    [notification] = service.get_user_notifications("user-1")
    assert notification.id == result.data["notification_id"]
    assert notification.type == "general"
    assert not notification.is_read
    assert service.get_unread_count("user-1") == 1
    assert service.get_unread_count("user-2") == 0


def test_mark_as_read(service):
    notification_id = service.add_notification("user-1", "A", "a").data["notification_id"]
    service.add_notification("user-1", "B", "b")

    assert service.mark_as_read(notification_id).success
    assert service.get_unread_count("user-1") == 1


def test_mark_all_as_read_only_touches_one_user(service):
    service.add_notification("user-1", "A", "a")
    service.add_notification("user-1", "B", "b")
    service.add_notification("user-2", "C", "c")

    result = service.mark_all_as_read("user-1")

    assert result.data["updated"] == 2
    assert service.get_unread_count("user-1") == 0
    assert service.get_unread_count("user-2") == 1


def test_delete_notification(service):
    notification_id = service.add_notification("user-1", "A", "a").data["notification_id"]

    assert service.delete_notification(notification_id).success
    assert service.get_user_notifications("user-1") == []
    assert service.delete_notification(notification_id).error == FailureKind.NOT_FOUND


def test_mark_unknown_notification(service):
    assert service.mark_as_read("notification-404").error == FailureKind.NOT_FOUND


def test_subscribers_receive_collection_after_each_change(service):
    snapshots = []
    unsubscribe = service.subscribe(lambda notifications: snapshots.append(len(notifications)))

    notification_id = service.add_notification("user-1", "A", "a").data["notification_id"]
    service.add_notification("user-2", "B", "b")
    service.delete_notification(notification_id)
    unsubscribe()
    service.add_notification("user-1", "C", "c")

    assert snapshots == [1, 2, 1]
