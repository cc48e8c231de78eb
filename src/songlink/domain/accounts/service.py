"""
Account workflows: registration, login and settings.

These compose the identity store with password hashing. Login failures
raise one generic AuthenticationError so callers cannot tell an unknown
email from a wrong password.
"""

import secrets
import sqlite3
from functools import lru_cache
from typing import Optional

from loguru import logger

from songlink.core.config import DEFAULT_TIMESTAMP, AuthConfig, SettingsConfig
from songlink.core.security import hash_password, verify_password

from ..catalog.models import Provider
from ..exceptions import (
    AccountNotFoundError,
    AuthenticationError,
    ValidationError,
)
from . import store
from .models import Account


# Compared against when the email is unknown so both login failures cost
# one bcrypt check.
@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> str:
    return hash_password(secrets.token_urlsafe(16), rounds=rounds)


def register(
    conn: sqlite3.Connection,
    email: str,
    password: str,
    username: str,
    auth_config: AuthConfig,
    default_timestamp: int = DEFAULT_TIMESTAMP,
) -> Account:
    """Create an account.

    Raises:
        ValidationError: Missing fields or non-alphanumeric username
        ConflictError: Email or username already taken
    """
    if not email or not password or not username:
        raise ValidationError("Missing required fields")
    store.validate_username(username)

    password_hash = hash_password(password, rounds=auth_config.bcrypt_rounds)
    return store.create_account(
        conn, email, password_hash, username, default_timestamp
    )


def authenticate(
    conn: sqlite3.Connection, email: str, password: str, auth_config: AuthConfig
) -> Account:
    """Verify login credentials.

    Raises:
        AuthenticationError: Unknown email or wrong password (indistinguishable)
    """
    account = store.get_account_by_email(conn, email)
    if account is None:
        verify_password(password, _dummy_hash(auth_config.bcrypt_rounds))
        logger.debug("Login failed: unknown email")
        raise AuthenticationError()

    if not verify_password(password, account.password_hash):
        logger.debug(f"Login failed: wrong password for {account.username}")
        raise AuthenticationError()

    return account


def update_settings(
    conn: sqlite3.Connection,
    account: Account,
    default_timestamp: Optional[int],
    settings: SettingsConfig,
) -> None:
    """Apply a settings update. None means "leave unchanged".

    Raises:
        ValidationError: Offset outside [0, settings.max_default_timestamp]
    """
    if default_timestamp is None:
        return
    if not 0 <= default_timestamp <= settings.max_default_timestamp:
        raise ValidationError(
            f"defaultTimestamp must be between 0 and {settings.max_default_timestamp}"
        )
    store.update_default_timestamp(conn, account.id, default_timestamp)
    logger.info(f"Default timestamp for {account.username} set to {default_timestamp}s")


def get_spectator(conn: sqlite3.Connection, username: str) -> Account:
    """Look up the account behind a spectator page.

    Raises:
        AccountNotFoundError: No account with that username
    """
    account = store.get_account_by_username(conn, username)
    if account is None:
        raise AccountNotFoundError(username)
    return account


def set_preferred_service(
    conn: sqlite3.Connection, username: str, service: str
) -> Account:
    """Persist the catalog service chosen on the spectator page.

    Raises:
        AccountNotFoundError: No account with that username
        ValidationError: Service is not a known provider
    """
    account = get_spectator(conn, username)
    provider = Provider.parse(service)
    if provider is Provider.UNKNOWN:
        raise ValidationError(f"Unknown service: {service}")

    store.update_preferred_service(conn, account.id, provider.value)
    logger.info(f"Service selected for {username}: {provider.value}")
    return account._replace(preferred_service=provider.value)
