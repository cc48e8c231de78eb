"""
Dispatch controller: resolve a song and push a play command to the
caller's own spectator channel.

Steps run strictly in order and any failure is terminal:
channel lookup -> track resolution -> push. Nothing is retried, queued or
rolled back; the only state touched before the push is a registry read.
"""

from typing import Any, Optional

from loguru import logger

from ..accounts.models import Account
from ..catalog.models import Provider, TrackDescriptor
from ..catalog.resolver import CatalogResolver
from ..exceptions import (
    SpectatorNotConnectedError,
    TrackNotFoundError,
    ValidationError,
)
from .models import PlayCommand
from .registry import ConnectionRegistry, is_channel_open


class DispatchController:
    """Sends "play" commands from an authenticated sender to their spectator."""

    def __init__(self, registry: ConnectionRegistry, resolver: CatalogResolver):
        self.registry = registry
        self.resolver = resolver

    def _find_channel(self, username: str) -> Any:
        channel = self.registry.get(username)
        if channel is None or not is_channel_open(channel):
            raise SpectatorNotConnectedError(username)
        return channel

    async def dispatch(
        self, account: Account, song_query: str, service: Optional[str] = None
    ) -> TrackDescriptor:
        """Resolve song_query and push it to account's spectator channel.

        service falls back to the spectator's stored preference when omitted.

        Returns:
            The resolved track

        Raises:
            SpectatorNotConnectedError: No open channel for account.username
                (checked first; the resolver is not called)
            ValidationError: Empty query or no service given or stored
            ProviderUnconfiguredError: Provider lacks credentials
            TrackNotFoundError: Provider found nothing or failed
        """
        username = account.username
        channel = self._find_channel(username)

        if not song_query or not song_query.strip():
            raise ValidationError("Missing song query")
        service = service or account.preferred_service
        if not service:
            raise ValidationError("No service selected")

        provider = Provider.parse(service)
        track = await self.resolver.resolve(provider, song_query)
        if track is None:
            logger.info(f"Song not found for {username}: {song_query!r} on {service}")
            raise TrackNotFoundError(service, song_query)

        command = PlayCommand.for_track(provider.value, track, account.default_timestamp)
        try:
            await channel.send_json(command.to_message())
        except Exception as e:
            # Channel closed between lookup and push; the close handler
            # unregisters it.
            logger.warning(f"Push to {username} failed: {e!r}")
            raise SpectatorNotConnectedError(username) from e

        logger.info(f'Sent "{track.name}" by {track.artist} to {username}')
        return track
