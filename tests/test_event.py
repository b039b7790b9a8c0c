import pytest
from datetime import datetime
from pydantic import ValidationError
from app.errors import (
    ErrorCode,
    EventNotFoundError,
    PermissionDeniedError,
    UnauthenticatedError,
)
from app.schemas.event import AttendanceStatus, EventOut, EventUpdate
from app.services.seed import SAMPLE_EVENTS, seed_sample_events


def test_create_event_success(event_service, admin_user, jazz_night_data):
    """Test basic event creation by an admin"""
    result = event_service.create_event(jazz_night_data, admin_user)

    assert isinstance(result, EventOut)
    assert result.title == "Jazz Night"
    assert result.city == "Kazan"
    assert result.category == "Concert"
    assert result.date == datetime(2024, 8, 10, 20, 0)
    assert result.likes == 0
    assert result.attendingCount == 0
    assert result.createdBy == admin_user.id
    assert result.id is not None
    assert len(result.id) > 0


def test_create_event_from_dict(event_service, admin_user):
    result = event_service.create_event(
        {
            "title": "Chess Open",
            "date": "2024-09-01T10:00:00",
            "city": "Moscow",
            "category": "Sports",
            "price": 15.5,
        },
        admin_user,
    )

    assert result.price == 15.5
    assert result.description == ""
    assert event_service.get_event(result.id).title == "Chess Open"


def test_created_ids_are_unique(event_service, admin_user, jazz_night_data):
    ids = {event_service.create_event(jazz_night_data, admin_user).id for _ in range(20)}
    assert len(ids) == 20


def test_create_event_by_non_admin_is_denied(
    event_service, admin_user, user1, jazz_night_data
):
    """Test that a regular user cannot create events and nothing changes"""
    existing = event_service.create_event(jazz_night_data, admin_user)

    with pytest.raises(PermissionDeniedError) as exc_info:
        event_service.create_event(jazz_night_data, user1)

    assert exc_info.value.code == ErrorCode.PERMISSION_DENIED
    events = event_service.list_events()
    assert [e.id for e in events] == [existing.id]


def test_create_event_without_user_is_unauthenticated(event_service, jazz_night_data):
    with pytest.raises(UnauthenticatedError):
        event_service.create_event(jazz_night_data, None)

    assert event_service.list_events() == []


def test_create_event_rejects_invalid_data(event_service, admin_user):
    with pytest.raises(ValidationError):
        event_service.create_event({"title": "", "city": "Kazan"}, admin_user)

    assert event_service.list_events() == []


def test_returned_event_is_a_copy(event_service, admin_user, jazz_night):
    jazz_night.likes = 99
    jazz_night.title = "Changed"

    stored = event_service.get_event(jazz_night.id)
    assert stored.likes == 0
    assert stored.title == "Jazz Night"


def test_get_event_not_found(event_service):
    with pytest.raises(EventNotFoundError) as exc_info:
        event_service.get_event("missing-id")

    assert exc_info.value.event_id == "missing-id"
    assert "not found" in str(exc_info.value)


def test_update_event_applies_only_given_fields(event_service, admin_user, jazz_night):
    result = event_service.update_event(
        jazz_night.id, EventUpdate(title="Jazz Night II", city="Moscow"), admin_user
    )

    assert result.title == "Jazz Night II"
    assert result.city == "Moscow"
    assert result.category == "Concert"
    assert result.description == "An evening of live jazz"
    assert result.date == jazz_night.date
    assert event_service.get_event(jazz_night.id).title == "Jazz Night II"


def test_update_event_never_overwrites_protected_fields(
    event_service, admin_user, user1, jazz_night
):
    event_service.toggle_like(jazz_night.id, user1)

    result = event_service.update_event(
        jazz_night.id,
        {
            "id": "hijacked",
            "likes": 500,
            "attendingCount": 42,
            "createdBy": "someone-else",
            "category": "Jazz",
        },
        admin_user,
    )

    assert result.id == jazz_night.id
    assert result.likes == 1
    assert result.attendingCount == 0
    assert result.createdBy == admin_user.id
    assert result.category == "Jazz"


def test_update_event_not_found_creates_nothing(event_service, admin_user, jazz_night):
    with pytest.raises(EventNotFoundError):
        event_service.update_event("missing-id", {"title": "Ghost"}, admin_user)

    assert [e.id for e in event_service.list_events()] == [jazz_night.id]


def test_update_event_by_non_admin_is_denied(event_service, user1, jazz_night):
    with pytest.raises(PermissionDeniedError):
        event_service.update_event(jazz_night.id, {"title": "Mine now"}, user1)

    assert event_service.get_event(jazz_night.id).title == "Jazz Night"


def test_update_event_invalid_merge_leaves_event_untouched(
    event_service, admin_user, jazz_night
):
    with pytest.raises(ValidationError):
        event_service.update_event(jazz_night.id, {"title": None}, admin_user)

    assert event_service.get_event(jazz_night.id).title == "Jazz Night"


def test_delete_event(event_service, admin_user, jazz_night):
    result = event_service.delete_event(jazz_night.id, admin_user)

    assert result == {"success": True}
    assert event_service.list_events() == []
    with pytest.raises(EventNotFoundError):
        event_service.get_event(jazz_night.id)


def test_delete_event_by_non_admin_is_denied(event_service, user1, jazz_night):
    with pytest.raises(PermissionDeniedError):
        event_service.delete_event(jazz_night.id, user1)

    assert event_service.get_event(jazz_night.id).id == jazz_night.id


def test_delete_event_not_found(event_service, admin_user):
    with pytest.raises(EventNotFoundError):
        event_service.delete_event("missing-id", admin_user)


def test_delete_event_cascades_interactions(
    event_service, admin_user, user1, user2, jazz_night
):
    """Test that deleting an event removes every interaction record for it"""
    event_service.toggle_like(jazz_night.id, user1)
    event_service.set_attendance(jazz_night.id, "attending", user2)

    event_service.delete_event(jazz_night.id, admin_user)

    assert event_service.get_interaction(jazz_night.id, user1.id) is None
    assert event_service.get_interaction(jazz_night.id, user2.id) is None

    with pytest.raises(EventNotFoundError):
        event_service.set_attendance(jazz_night.id, "notAttending", user1)
    with pytest.raises(EventNotFoundError):
        event_service.toggle_like(jazz_night.id, user2)

    # The failed calls above must not recreate records
    assert event_service.get_interaction(jazz_night.id, user1.id) is None


def test_delete_keeps_other_events_interactions(
    event_service, admin_user, user1, jazz_night, jazz_night_data
):
    other = event_service.create_event(jazz_night_data, admin_user)
    event_service.toggle_like(jazz_night.id, user1)
    event_service.toggle_like(other.id, user1)

    event_service.delete_event(jazz_night.id, admin_user)

    assert event_service.get_interaction(other.id, user1.id).liked is True
    assert event_service.get_event(other.id, user1).likes == 1


def test_jazz_night_scenario(event_service, admin_user, user1, jazz_night_data):
    """Create, like, attend, then change mind"""
    event = event_service.create_event(jazz_night_data, admin_user)
    assert event.likes == 0
    assert event.attendingCount == 0
    assert event.id

    liked = event_service.toggle_like(event.id, user1)
    assert liked.likes == 1
    assert liked.userLiked is True

    attending = event_service.set_attendance(event.id, "attending", user1)
    assert attending.attendingCount == 1
    assert attending.userStatus == AttendanceStatus.attending

    not_attending = event_service.set_attendance(event.id, "notAttending", user1)
    assert not_attending.attendingCount == 0
    assert not_attending.userStatus == "notAttending"
    assert not_attending.likes == 1
    assert not_attending.userLiked is True


def test_seed_sample_events(event_service):
    created = seed_sample_events(event_service)

    assert len(created) == len(SAMPLE_EVENTS)
    assert all(e.likes == 0 and e.attendingCount == 0 for e in created)
    assert [e.title for e in event_service.list_events()] == [
        e.title for e in SAMPLE_EVENTS
    ]
