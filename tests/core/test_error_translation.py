# tests/core/test_error_translation.py
"""
Storage failures as seen by the directory service, using a mocked repository.
"""

import pytest

from user_directory.core.domain.exceptions import (
    EmailAlreadyExistsError,
    InternalError,
    UserNotFoundError,
    ValidationError,
)
from user_directory.core.domain.user import User
from user_directory.core.ports.user_repository import (
    StorageError,
    StorageUnavailableError,
    UniqueViolationError,
    UserPredicate,
)
from user_directory.core.use_cases.user_directory import UserDirectoryService, UserPatch
from user_directory.shared.resilience import ReadRetryPolicy


def _retrying(attempts):
    return ReadRetryPolicy(attempts=attempts, max_wait=0, retry_on=(StorageUnavailableError,))


class TestCreateTranslation:

    def test_unique_violation_on_insert_becomes_already_exists(self, mock_service, mock_repo):
        """
        Scenario: The pre-check passes but a concurrent writer takes the email first.
        Expected: The store's unique violation surfaces as EmailAlreadyExistsError.
        """
        mock_repo.insert.side_effect = UniqueViolationError("UNIQUE constraint failed", "uq_users_email_alive")

        with pytest.raises(EmailAlreadyExistsError) as excinfo:
            mock_service.create("a@x.com", "Ann")
        assert excinfo.value.email == "a@x.com"

    def test_unexpected_storage_failure_becomes_internal(self, mock_service, mock_repo):
        mock_repo.insert.side_effect = StorageError("disk I/O error")

        with pytest.raises(InternalError) as excinfo:
            mock_service.create("a@x.com", "Ann")

        assert "disk I/O error" not in excinfo.value.message
        assert isinstance(excinfo.value.__cause__, StorageError)

    def test_validation_failure_skips_storage(self, mock_service, mock_repo):
        with pytest.raises(ValidationError):
            mock_service.create("bad", "Ann")
        mock_repo.find_one.assert_not_called()
        mock_repo.insert.assert_not_called()

    def test_existing_email_rejected_before_insert(self, mock_service, mock_repo):
        mock_repo.find_one.return_value = User.create("a@x.com", "Ann")

        with pytest.raises(EmailAlreadyExistsError):
            mock_service.create("A@x.com", "Bob")

        mock_repo.find_one.assert_called_once_with(UserPredicate.by_email("a@x.com"))
        mock_repo.insert.assert_not_called()


class TestReadTranslation:

    def test_reads_retry_transient_unavailability(self, mock_repo):
        """
        Scenario: The store is unavailable once, then answers.
        Expected: The idempotent read is retried and succeeds.
        """
        user = User.create("a@x.com", "Ann")
        mock_repo.find_one.side_effect = [StorageUnavailableError("down"), user]
        service = UserDirectoryService(mock_repo, read_retry=_retrying(2))

        assert service.get_by_id(user.id) is user
        assert mock_repo.find_one.call_count == 2

    def test_exhausted_retries_become_internal(self, mock_repo):
        mock_repo.find_page.side_effect = StorageUnavailableError("down")
        service = UserDirectoryService(mock_repo, read_retry=_retrying(2))

        with pytest.raises(InternalError):
            service.list()
        assert mock_repo.find_page.call_count == 2

    def test_list_total_comes_from_count(self, mock_service, mock_repo):
        mock_repo.find_page.return_value = [User.create("a@x.com", "Ann")]
        mock_repo.count.return_value = 42

        page = mock_service.list(limit=1, offset=3)

        assert page.total == 42
        assert len(page.users) == 1
        mock_repo.find_page.assert_called_once_with(UserPredicate.listable(), 1, 3)
        mock_repo.count.assert_called_once_with(UserPredicate.listable())


class TestWriteTranslation:

    def test_writes_are_not_retried(self, mock_repo):
        mock_repo.insert.side_effect = StorageUnavailableError("down")
        service = UserDirectoryService(mock_repo, read_retry=_retrying(3))

        with pytest.raises(InternalError):
            service.create("a@x.com", "Ann")
        assert mock_repo.insert.call_count == 1

    def test_update_lost_to_concurrent_delete(self, mock_service, mock_repo):
        """
        Scenario: The row vanishes between the existence check and the write.
        Expected: NotFound, not a silent success.
        """
        mock_repo.find_one.return_value = User.create("a@x.com", "Ann")
        mock_repo.update_fields.return_value = None

        with pytest.raises(UserNotFoundError):
            mock_service.update("u-1", UserPatch(name="Annie"))

    def test_delete_writes_soft_delete_fields(self, mock_service, mock_repo):
        user = User.create("a@x.com", "Ann")
        mock_repo.find_one.return_value = user
        mock_repo.update_fields.return_value = user

        mock_service.delete(user.id)

        user_id, changes, predicate = mock_repo.update_fields.call_args.args
        assert user_id == user.id
        assert changes["is_active"] is False
        assert changes["deleted_at"] is not None
        assert changes["updated_at"] == changes["deleted_at"]
        assert predicate == UserPredicate.by_id(user.id)

    def test_unique_violation_without_email_change_is_internal(self, mock_service, mock_repo):
        mock_repo.find_one.return_value = User.create("a@x.com", "Ann")
        mock_repo.update_fields.side_effect = UniqueViolationError("UNIQUE constraint failed")

        with pytest.raises(InternalError):
            mock_service.update("u-1", UserPatch(name="Annie"))

    def test_unique_violation_on_email_change_becomes_already_exists(self, mock_service, mock_repo):
        """
        Scenario: The new address is free at check time but taken before the write lands.
        Expected: The store's unique violation surfaces as EmailAlreadyExistsError.
        """
        user = User.create("a@x.com", "Ann")
        mock_repo.find_one.side_effect = [user, None]
        mock_repo.update_fields.side_effect = UniqueViolationError("UNIQUE constraint failed", "uq_users_email_alive")

        with pytest.raises(EmailAlreadyExistsError) as excinfo:
            mock_service.update(user.id, UserPatch(email="B@x.com"))

        assert excinfo.value.email == "b@x.com"
        _, changes, _ = mock_repo.update_fields.call_args.args
        assert changes["email"] == "b@x.com"


class TestRetryPolicy:

    def test_only_listed_exceptions_are_retried(self):
        calls = []

        def flaky():
            calls.append(1)
            raise StorageUnavailableError("down")

        with pytest.raises(StorageUnavailableError):
            ReadRetryPolicy(attempts=3, max_wait=0).call(flaky)
        assert len(calls) == 1

        calls.clear()
        with pytest.raises(StorageUnavailableError):
            _retrying(3).call(flaky)
        assert len(calls) == 3

    def test_service_default_retries_unavailable_store(self, mock_repo):
        user = User.create("a@x.com", "Ann")
        mock_repo.find_one.side_effect = [StorageUnavailableError("down"), user]

        service = UserDirectoryService(mock_repo)

        assert service.get_by_id(user.id) is user
