"""
Catalog provider registry.

Each provider is a module of plain functions with the same contract:

    def is_configured(config: CatalogConfig) -> bool
    def search(query: str, config: CatalogConfig) -> Optional[TrackDescriptor]

search() never raises for transport or payload problems; it logs and
returns None.
"""

from types import ModuleType
from typing import Dict, Optional

from ..models import Provider
from . import apple, spotify, youtube

PROVIDERS: Dict[Provider, ModuleType] = {
    Provider.SPOTIFY: spotify,
    Provider.APPLE: apple,
    Provider.YOUTUBE: youtube,
}


def get_provider(provider: Provider) -> Optional[ModuleType]:
    """Get the provider module, or None for Provider.UNKNOWN."""
    return PROVIDERS.get(provider)