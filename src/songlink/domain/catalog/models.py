"""
Catalog domain models.

Contains the provider tag and the normalized track descriptor every
provider search produces.
"""

from enum import Enum
from typing import NamedTuple


class Provider(str, Enum):
    """Music catalog a song query is resolved against."""

    SPOTIFY = "spotify"
    APPLE = "apple"
    YOUTUBE = "youtube"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, name: str) -> "Provider":
        """Exact-match a service name; anything unrecognized is UNKNOWN."""
        for provider in cls:
            if provider is not cls.UNKNOWN and provider.value == name:
                return provider
        return cls.UNKNOWN


class TrackDescriptor(NamedTuple):
    """Top search result from one provider. Never persisted."""
    id: str  # Provider-native id (Spotify track id, Apple song id, YouTube video id)
    name: str
    artist: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "artist": self.artist}
