"""Tests for the User aggregate and its change events."""

from datetime import datetime, timezone

from userdir.domain.user import User, UserEvent, UserEventType


class TestUserCreate:
    def test_create_trims_name_and_email(self):
        user = User.create("  Ivan Petrov ", " ivan@example.com ", 30)

        assert user.name == "Ivan Petrov"
        assert user.email == "ivan@example.com"
        assert user.age == 30

    def test_new_user_has_no_id(self):
        user = User.create("Ivan Petrov", "ivan@example.com")

        assert user.id is None
        assert not user.is_persisted
        assert user.age is None

    def test_created_at_is_timezone_aware(self):
        user = User.create("Ivan Petrov", "ivan@example.com")

        assert user.created_at.tzinfo is not None


class TestUserChangeDetails:
    def test_keeps_id_and_created_at(self):
        created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        user = User.reconstitute(
            id=7,
            name="Ivan Petrov",
            email="ivan@example.com",
            age=30,
            created_at=created_at,
        )

        user.change_details(" Ivan P. ", "ivan.p@example.com ", None)

        assert user.id == 7
        assert user.created_at == created_at
        assert user.name == "Ivan P."
        assert user.email == "ivan.p@example.com"
        assert user.age is None


class TestUserEquality:
    def test_equal_by_id(self):
        created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        a = User.reconstitute(1, "Ivan", "ivan@example.com", None, created_at)
        b = User.reconstitute(1, "Other", "other@example.com", 5, created_at)

        assert a == b
        assert hash(a) == hash(b)

    def test_unsaved_users_compare_by_identity(self):
        a = User.create("Ivan", "ivan@example.com")
        b = User.create("Ivan", "ivan@example.com")

        assert a == a
        assert a != b


class TestUserEvent:
    def test_payload_uses_wire_names(self):
        event = UserEvent(UserEventType.USER_CREATED, 3, "ivan@example.com", "Ivan")

        assert event.to_payload() == {
            "eventType": "USER_CREATED",
            "userId": 3,
            "email": "ivan@example.com",
            "name": "Ivan",
        }

    def test_deleted_event_type(self):
        event = UserEvent(UserEventType.USER_DELETED, 3, "ivan@example.com", "Ivan")

        assert event.to_payload()["eventType"] == "USER_DELETED"
