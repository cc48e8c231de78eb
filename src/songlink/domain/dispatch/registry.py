"""
Connection registry: username -> live spectator channel.

One entry per username; a new registration replaces the old one without
closing it. Each registration gets an instance token, and unregister only
removes the entry when the token still matches. A late close event from a
replaced channel therefore cannot evict the newer connection.
"""

import itertools
from threading import Lock
from typing import Any, Callable, NamedTuple, Optional

from loguru import logger
from starlette.websockets import WebSocketState

from ..exceptions import AccountNotFoundError


class _Entry(NamedTuple):
    channel: Any
    token: int


def is_channel_open(channel: Any) -> bool:
    """True while both ends of a Starlette WebSocket are connected."""
    return (
        getattr(channel, "client_state", None) == WebSocketState.CONNECTED
        and getattr(channel, "application_state", None) == WebSocketState.CONNECTED
    )


class ConnectionRegistry:
    """Process-wide map of spectator channels, keyed by username.

    Reads and writes happen under one lock, so no caller ever observes a
    half-applied registration.
    """

    def __init__(self, account_exists: Callable[[str], bool]):
        self._account_exists = account_exists
        self._entries: dict[str, _Entry] = {}
        self._lock = Lock()
        self._tokens = itertools.count(1)

    def register(self, username: str, channel: Any) -> int:
        """Store channel as the live connection for username.

        Returns:
            Instance token to pass to unregister()

        Raises:
            AccountNotFoundError: username is not a registered account; the
                caller must close the channel
        """
        if not username or not self._account_exists(username):
            logger.warning(f"Refusing channel for unknown username: {username!r}")
            raise AccountNotFoundError(username)

        with self._lock:
            token = next(self._tokens)
            replaced = self._entries.get(username)
            self._entries[username] = _Entry(channel, token)

        if replaced:
            logger.info(f"Channel for {username} replaced (instance {replaced.token} -> {token})")
        else:
            logger.info(f"Channel registered for {username} (instance {token})")
        return token

    def unregister(self, username: str, token: int) -> bool:
        """Remove the entry for username if it is still instance token.

        Returns:
            True if an entry was removed
        """
        with self._lock:
            entry = self._entries.get(username)
            if entry is None or entry.token != token:
                removed = False
            else:
                del self._entries[username]
                removed = True

        if removed:
            logger.info(f"Channel closed for {username} (instance {token})")
        else:
            logger.debug(f"Stale close ignored for {username} (instance {token})")
        return removed

    def get(self, username: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(username)
        return entry.channel if entry else None

    def is_connected(self, username: str) -> bool:
        channel = self.get(username)
        return channel is not None and is_channel_open(channel)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
