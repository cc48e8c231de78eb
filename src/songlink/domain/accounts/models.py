"""
Account domain models.
"""

import sqlite3
from typing import NamedTuple, Optional

from songlink.core.config import DEFAULT_TIMESTAMP


class Account(NamedTuple):
    """A registered user.

    email and username are each globally unique. Only default_timestamp and
    preferred_service change after registration.
    """
    id: int
    email: str
    username: str
    password_hash: str
    default_timestamp: int = DEFAULT_TIMESTAMP  # Playback offset (seconds) for play commands
    preferred_service: Optional[str] = None  # Set by the spectator page
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Account":
        """Build an Account from a users table row."""
        return cls(
            id=row["id"],
            email=row["email"],
            username=row["username"],
            password_hash=row["password"],
            default_timestamp=row["default_timestamp"],
            preferred_service=row["preferred_service"],
            created_at=row["created_at"],
        )

    def spectator_url(self, base_url: str) -> str:
        """URL of the spectator page that plays commands for this account."""
        return f"{base_url.rstrip('/')}/{self.username}"
