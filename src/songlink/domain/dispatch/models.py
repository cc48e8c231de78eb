"""
Dispatch domain models.
"""

from typing import NamedTuple

from ..catalog.models import TrackDescriptor


class PlayCommand(NamedTuple):
    """Message pushed to a spectator channel. Server -> client only."""
    service: str
    track_id: str
    timestamp: int  # Playback start offset in seconds
    name: str
    artist: str

    @classmethod
    def for_track(cls, service: str, track: TrackDescriptor, timestamp: int) -> "PlayCommand":
        return cls(
            service=service,
            track_id=track.id,
            timestamp=timestamp,
            name=track.name,
            artist=track.artist,
        )

    def to_message(self) -> dict:
        """Wire shape sent over the channel."""
        return {
            "type": "play",
            "service": self.service,
            "trackId": self.track_id,
            "timestamp": self.timestamp,
            "name": self.name,
            "artist": self.artist,
        }
