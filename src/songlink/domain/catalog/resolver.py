"""
Catalog resolver: turns a free-text query into one track from one provider.

Outcomes are deliberately coarse:
- a TrackDescriptor when the provider returned a top result
- None for "not found", which also covers unknown providers and every
  transport failure (timeouts, HTTP errors, malformed payloads)
- ProviderUnconfiguredError when the provider has no credentials, raised
  before any network call so misconfiguration is visible to operators
"""

import asyncio
from typing import Optional, Union

from loguru import logger

from songlink.core.config import CatalogConfig

from ..exceptions import ProviderUnconfiguredError
from .models import Provider, TrackDescriptor
from .providers import get_provider

_UNCONFIGURED_MESSAGES = {
    Provider.SPOTIFY: "Spotify credentials not configured",
    Provider.APPLE: "Apple Music token not configured",
    Provider.YOUTUBE: "YouTube API key not configured",
}


class CatalogResolver:
    """Resolves song queries against the configured catalog providers."""

    def __init__(self, config: CatalogConfig):
        self.config = config

    def is_configured(self, provider: Provider) -> bool:
        module = get_provider(provider)
        return module is not None and module.is_configured(self.config)

    def configured_providers(self) -> list[str]:
        return [p.value for p in Provider if self.is_configured(p)]

    async def resolve(
        self, provider: Union[Provider, str], query: str
    ) -> Optional[TrackDescriptor]:
        """Search one provider for its top result.

        Raises:
            ProviderUnconfiguredError: Provider lacks required credentials
        """
        if not isinstance(provider, Provider):
            provider = Provider.parse(provider)

        module = get_provider(provider)
        if module is None:
            logger.info(f"Unknown provider requested for {query!r}; treating as not found")
            return None

        if not module.is_configured(self.config):
            raise ProviderUnconfiguredError(
                provider.value, _UNCONFIGURED_MESSAGES[provider]
            )

        # requests is blocking; keep the event loop free for other clients
        track = await asyncio.to_thread(module.search, query, self.config)

        if track:
            logger.debug(f"{provider.value}: {query!r} -> {track.name} by {track.artist}")
        return track
