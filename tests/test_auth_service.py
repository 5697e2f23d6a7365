"""Tests for login and registration."""

import logging
from dataclasses import asdict

import pytest

from skillshare.exceptions import DuplicateEmailError, InvalidCredentialError, NotFoundError
from skillshare.models import User
from skillshare.repositories import UserRepository
from skillshare.services import AuthenticationService


@pytest.fixture
def auth(test_session, token_service, password_hasher) -> AuthenticationService:
    return AuthenticationService(UserRepository(test_session), token_service, password_hasher)


class TestRegister:
    def test_register_creates_identity_and_token(self, auth, test_session, token_service):
        result = auth.register("alice@example.com", "pw123", "Alice", "Smith", address="1 Main St")

        stored = test_session.get(User, result.user.id)
        assert stored is not None
        assert stored.email == "alice@example.com"
        assert stored.following == []
        assert stored.followers == []
        assert stored.created_at is not None
        assert stored.updated_at is not None
        assert token_service.subject_of(result.token) == stored.id

    def test_password_is_stored_hashed(self, auth, test_session):
        result = auth.register("alice@example.com", "pw123")

        stored = test_session.get(User, result.user.id)
        assert stored.password_hash != "pw123"
        assert "pw123" not in stored.password_hash

    def test_profile_view_never_exposes_password_hash(self, auth):
        result = auth.register("alice@example.com", "pw123", "Alice")

        assert "password_hash" not in asdict(result.user)
        assert result.user.first_name == "Alice"
        assert result.user.followers_count == 0

    def test_duplicate_email_rejected(self, auth, test_session):
        auth.register("alice@example.com", "pw123")

        with pytest.raises(DuplicateEmailError):
            auth.register("alice@example.com", "other")

        assert test_session.query(User).count() == 1

    def test_email_comparison_is_case_sensitive(self, auth, test_session):
        auth.register("alice@example.com", "pw123")
        auth.register("Alice@example.com", "pw123")

        assert test_session.query(User).count() == 2

    def test_unique_index_race_maps_to_duplicate(self, auth, monkeypatch):
        auth.register("alice@example.com", "pw123")
        # Existence check misses, as it would for a concurrent registration
        monkeypatch.setattr(auth.users, "exists_by_email", lambda email: False)

        with pytest.raises(DuplicateEmailError):
            auth.register("alice@example.com", "pw456")


class TestLogin:
    def test_login_with_correct_password(self, auth, token_service):
        registered = auth.register("alice@example.com", "pw123", "Alice")

        result = auth.login("alice@example.com", "pw123")

        assert result.user.id == registered.user.id
        assert token_service.subject_of(result.token) == registered.user.id

    def test_unknown_email_is_not_found(self, auth):
        with pytest.raises(NotFoundError):
            auth.login("nobody@example.com", "pw123")

    def test_wrong_password_is_invalid_credential(self, auth):
        auth.register("alice@example.com", "pw123")

        with pytest.raises(InvalidCredentialError):
            auth.login("alice@example.com", "wrong")

    def test_login_does_not_match_other_case(self, auth):
        auth.register("alice@example.com", "pw123")

        with pytest.raises(NotFoundError):
            auth.login("ALICE@example.com", "pw123")

    def test_login_performs_no_writes(self, auth, test_session):
        registered = auth.register("alice@example.com", "pw123")
        test_session.flush()
        before = test_session.get(User, registered.user.id).version_id

        auth.login("alice@example.com", "pw123")

        assert not test_session.dirty
        assert test_session.get(User, registered.user.id).version_id == before


class TestLogging:
    def test_email_addresses_stay_out_of_logs(self, auth, caplog):
        caplog.set_level(logging.DEBUG)

        auth.register("secret.person@example.com", "pw123")
        auth.login("secret.person@example.com", "pw123")
        with pytest.raises(InvalidCredentialError):
            auth.login("secret.person@example.com", "wrong")
        with pytest.raises(NotFoundError):
            auth.login("nobody.here@example.com", "pw123")

        messages = [record.getMessage() for record in caplog.records]
        assert any("login_attempt" in m for m in messages)
        assert not any("secret.person" in m or "nobody.here" in m for m in messages)
