"""
Tests for the identity store and account workflows against a temp database.
"""

from unittest.mock import patch

import pytest

from songlink.core.config import DEFAULT_TIMESTAMP, AuthConfig, SettingsConfig
from songlink.core.security import verify_password
from songlink.domain import accounts
from songlink.domain.exceptions import (
    AccountNotFoundError,
    AuthenticationError,
    ConflictError,
    ValidationError,
)

AUTH = AuthConfig(jwt_secret="test-secret", bcrypt_rounds=4)


@pytest.fixture
def alice(conn):
    return accounts.register(conn, "alice@example.com", "hunter2", "alice", AUTH)


class TestStore:
    def test_create_and_fetch(self, conn):
        account = accounts.create_account(conn, "a@example.com", "hash", "alice")

        assert account.id is not None
        assert account.default_timestamp == 45
        assert account.preferred_service is None
        assert accounts.get_account_by_id(conn, account.id) == account
        assert accounts.get_account_by_email(conn, "a@example.com") == account
        assert accounts.get_account_by_username(conn, "alice") == account

    def test_default_timestamp_has_one_source(self, conn):
        account = accounts.create_account(conn, "a@example.com", "hash", "alice")
        assert account.default_timestamp == DEFAULT_TIMESTAMP
        assert SettingsConfig().default_timestamp == DEFAULT_TIMESTAMP

        # The column carries no default of its own
        column = next(
            row for row in conn.execute("PRAGMA table_info(users)")
            if row["name"] == "default_timestamp"
        )
        assert column["dflt_value"] is None

    def test_missing_lookups_return_none(self, conn):
        assert accounts.get_account_by_id(conn, 42) is None
        assert accounts.get_account_by_email(conn, "nobody@example.com") is None
        assert accounts.get_account_by_username(conn, "nobody") is None
        assert accounts.username_exists(conn, "nobody") is False

    def test_username_lookup_is_exact(self, conn):
        accounts.create_account(conn, "a@example.com", "hash", "Alice")
        assert accounts.username_exists(conn, "Alice")
        assert not accounts.username_exists(conn, "alice")

    @pytest.mark.parametrize(
        "email,username",
        [("a@example.com", "other"), ("other@example.com", "alice")],
    )
    def test_duplicates_conflict(self, conn, email, username):
        accounts.create_account(conn, "a@example.com", "hash", "alice")
        with pytest.raises(ConflictError, match="Email or username already exists"):
            accounts.create_account(conn, email, "hash", username)

        # The failed insert leaves the connection usable
        accounts.create_account(conn, "b@example.com", "hash", "bob")
        assert accounts.username_exists(conn, "bob")

    @pytest.mark.parametrize("username", ["alice", "A1", "0123"])
    def test_valid_usernames(self, username):
        accounts.validate_username(username)

    @pytest.mark.parametrize("username", ["", "a b", "a-b", "a_b", "ü", "alice\n"])
    def test_invalid_usernames(self, username):
        with pytest.raises(ValidationError, match="Username must be alphanumeric"):
            accounts.validate_username(username)


class TestRegister:
    def test_password_is_hashed(self, conn, alice):
        assert alice.password_hash != "hunter2"
        assert verify_password("hunter2", alice.password_hash)

    def test_default_timestamp_is_configurable(self, conn):
        account = accounts.register(
            conn, "b@example.com", "pw", "bob", AUTH, default_timestamp=30
        )
        assert account.default_timestamp == 30

    @pytest.mark.parametrize(
        "email,password,username",
        [("", "pw", "bob"), ("b@example.com", "", "bob"), ("b@example.com", "pw", "")],
    )
    def test_missing_fields(self, conn, email, password, username):
        with pytest.raises(ValidationError, match="Missing required fields"):
            accounts.register(conn, email, password, username, AUTH)

    def test_invalid_username_not_stored(self, conn):
        with pytest.raises(ValidationError):
            accounts.register(conn, "b@example.com", "pw", "bad name", AUTH)
        assert accounts.get_account_by_email(conn, "b@example.com") is None


class TestAuthenticate:
    def test_correct_credentials(self, conn, alice):
        assert accounts.authenticate(conn, "alice@example.com", "hunter2", AUTH) == alice

    def test_wrong_password_and_unknown_email_look_the_same(self, conn, alice):
        with pytest.raises(AuthenticationError) as wrong_password:
            accounts.authenticate(conn, "alice@example.com", "nope", AUTH)
        with pytest.raises(AuthenticationError) as unknown_email:
            accounts.authenticate(conn, "ghost@example.com", "nope", AUTH)

        assert str(wrong_password.value) == str(unknown_email.value) == "Invalid credentials"

    def test_unknown_email_checks_hash_with_configured_cost(self, conn):
        auth = AuthConfig(jwt_secret="test-secret", bcrypt_rounds=5)
        with patch(
            "songlink.domain.accounts.service.verify_password", return_value=False
        ) as verify:
            with pytest.raises(AuthenticationError):
                accounts.authenticate(conn, "ghost@example.com", "nope", auth)

        compared_hash = verify.call_args.args[1]
        assert compared_hash.split("$")[2] == "05"


class TestSettings:
    def test_update_within_bounds(self, conn, alice):
        accounts.update_settings(conn, alice, 90, SettingsConfig())
        assert accounts.get_account_by_id(conn, alice.id).default_timestamp == 90

    def test_none_leaves_value(self, conn, alice):
        accounts.update_settings(conn, alice, None, SettingsConfig())
        assert accounts.get_account_by_id(conn, alice.id).default_timestamp == 45

    @pytest.mark.parametrize("value", [-1, 601])
    def test_out_of_bounds(self, conn, alice, value):
        with pytest.raises(ValidationError):
            accounts.update_settings(conn, alice, value, SettingsConfig(max_default_timestamp=600))
        assert accounts.get_account_by_id(conn, alice.id).default_timestamp == 45


class TestSpectator:
    def test_get_spectator(self, conn, alice):
        assert accounts.get_spectator(conn, "alice") == alice

    def test_get_unknown_spectator(self, conn):
        with pytest.raises(AccountNotFoundError, match="User not found"):
            accounts.get_spectator(conn, "nobody")

    def test_set_preferred_service(self, conn, alice):
        updated = accounts.set_preferred_service(conn, "alice", "apple")
        assert updated.preferred_service == "apple"
        assert accounts.get_account_by_id(conn, alice.id).preferred_service == "apple"

    def test_set_unknown_service(self, conn, alice):
        with pytest.raises(ValidationError, match="Unknown service"):
            accounts.set_preferred_service(conn, "alice", "napster")

    def test_spectator_url(self, alice):
        assert alice.spectator_url("http://localhost:3001") == "http://localhost:3001/alice"
        assert alice.spectator_url("http://localhost:3001/") == "http://localhost:3001/alice"
