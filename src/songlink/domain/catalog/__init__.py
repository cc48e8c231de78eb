"""
Music catalog resolution (Spotify, Apple Music, YouTube).
"""

from .models import Provider, TrackDescriptor
from .resolver import CatalogResolver

__all__ = ["CatalogResolver", "Provider", "TrackDescriptor"]
