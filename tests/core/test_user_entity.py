# tests/core/test_user_entity.py
import uuid
from datetime import datetime, timezone

import pytest

from user_directory.core.domain.exceptions import ValidationError
from user_directory.core.domain.user import User


class TestUserCreate:

    def test_create_normalizes_input(self):
        """
        Scenario: Email with mixed case and padding, name with padding.
        Expected: Email lower-cased and stripped, name trimmed, fresh active user.
        """
        user = User.create("  Ann.Smith@Example.COM ", "  Ann Smith  ")

        assert user.email == "ann.smith@example.com"
        assert user.name == "Ann Smith"
        assert user.is_active is True
        assert user.updated_at is None
        assert user.deleted_at is None
        assert user.created_at.tzinfo is not None
        assert str(uuid.UUID(user.id)) == user.id

    def test_create_assigns_distinct_ids(self):
        first = User.create("a@x.com", "Ann")
        second = User.create("b@x.com", "Bob")
        assert first.id != second.id

    @pytest.mark.parametrize("email,name", [("", "Ann"), ("a@x.com", ""), ("   ", "Ann"), ("a@x.com", "   ")])
    def test_create_requires_email_and_name(self, email, name):
        with pytest.raises(ValidationError) as excinfo:
            User.create(email, name)
        assert excinfo.value.message == "Email and name are required"

    @pytest.mark.parametrize("email", ["not-an-email", "a@", "@x.com", "a b@x.com", "a@x"])
    def test_create_rejects_bad_email(self, email):
        with pytest.raises(ValidationError) as excinfo:
            User.create(email, "Ann")
        assert excinfo.value.field == "email"

    def test_create_rejects_short_name(self):
        with pytest.raises(ValidationError) as excinfo:
            User.create("a@x.com", " A ")
        assert excinfo.value.field == "name"
        assert excinfo.value.details == {"field": "name"}


class TestUserTransitions:

    @pytest.fixture
    def user(self):
        return User.create("a@x.com", "Ann")

    def test_update_name_stamps_updated_at(self, user):
        user.update_name("  Annie ")
        assert user.name == "Annie"
        assert user.updated_at is not None

    def test_invalid_name_leaves_user_unchanged(self, user):
        with pytest.raises(ValidationError):
            user.update_name("A")
        assert user.name == "Ann"
        assert user.updated_at is None

    def test_update_email_normalizes(self, user):
        user.update_email("B@X.COM")
        assert user.email == "b@x.com"
        assert user.updated_at is not None

    def test_invalid_email_leaves_user_unchanged(self, user):
        with pytest.raises(ValidationError):
            user.update_email("nope")
        assert user.email == "a@x.com"

    def test_deactivate_only_flips_flag(self, user):
        user.deactivate()

        assert user.is_active is False
        assert user.updated_at is None
        assert user.deleted_at is None

    def test_activate_only_flips_flag(self, user):
        user.is_active = False

        user.activate()

        assert user.is_active is True
        assert user.updated_at is None

    def test_mark_deleted(self, user):
        """
        Scenario: Soft delete at a fixed instant.
        Expected: Inactive, deleted_at and updated_at both carry that instant.
        """
        at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        user.mark_deleted(at)

        assert user.is_deleted
        assert user.is_active is False
        assert user.deleted_at == at
        assert user.updated_at == at
