"""
Identity store: account queries over the users table.

Pure functions taking an open sqlite3 connection. Uniqueness of email and
username is enforced by the table's UNIQUE constraints, not in Python.
"""

import re
import sqlite3
from typing import Optional

from loguru import logger

from songlink.core.config import DEFAULT_TIMESTAMP

from ..exceptions import ConflictError, ValidationError
from .models import Account

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9]+$")

_SELECT = (
    "SELECT id, email, password, username, default_timestamp, "
    "preferred_service, created_at FROM users"
)


def validate_username(username: str) -> None:
    """Raise ValidationError unless the username is non-empty and alphanumeric."""
    if not USERNAME_PATTERN.fullmatch(username or ""):
        raise ValidationError("Username must be alphanumeric")


def create_account(
    conn: sqlite3.Connection,
    email: str,
    password_hash: str,
    username: str,
    default_timestamp: int = DEFAULT_TIMESTAMP,
) -> Account:
    """Insert a new account.

    Raises:
        ConflictError: If the email or username already exists
    """
    try:
        cursor = conn.execute(
            "INSERT INTO users (email, password, username, default_timestamp) "
            "VALUES (?, ?, ?, ?)",
            (email, password_hash, username, default_timestamp),
        )
        conn.commit()
    except sqlite3.IntegrityError as e:
        conn.rollback()
        logger.info(f"Registration conflict for {username!r}: {e}")
        raise ConflictError("Email or username already exists") from e

    account = get_account_by_id(conn, cursor.lastrowid)
    logger.info(f"Account created: {username} (id={account.id})")
    return account


def get_account_by_id(conn: sqlite3.Connection, account_id: int) -> Optional[Account]:
    row = conn.execute(f"{_SELECT} WHERE id = ?", (account_id,)).fetchone()
    return Account.from_row(row) if row else None


def get_account_by_email(conn: sqlite3.Connection, email: str) -> Optional[Account]:
    row = conn.execute(f"{_SELECT} WHERE email = ?", (email,)).fetchone()
    return Account.from_row(row) if row else None


def get_account_by_username(
    conn: sqlite3.Connection, username: str
) -> Optional[Account]:
    row = conn.execute(f"{_SELECT} WHERE username = ?", (username,)).fetchone()
    return Account.from_row(row) if row else None


def username_exists(conn: sqlite3.Connection, username: str) -> bool:
    row = conn.execute("SELECT 1 FROM users WHERE username = ?", (username,)).fetchone()
    return row is not None


def update_default_timestamp(
    conn: sqlite3.Connection, account_id: int, seconds: int
) -> None:
    """Overwrite the stored playback offset for an account."""
    conn.execute(
        "UPDATE users SET default_timestamp = ? WHERE id = ?", (seconds, account_id)
    )
    conn.commit()


def update_preferred_service(
    conn: sqlite3.Connection, account_id: int, service: str
) -> None:
    """Store the catalog service the spectator page selected."""
    conn.execute(
        "UPDATE users SET preferred_service = ? WHERE id = ?", (service, account_id)
    )
    conn.commit()
