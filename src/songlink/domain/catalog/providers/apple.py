"""
Apple Music catalog search.

Authenticates with a pre-issued developer token (bearer).
"""

from typing import Optional

import requests
from loguru import logger

from songlink.core.config import CatalogConfig

from ..models import TrackDescriptor

API_BASE = "https://api.music.apple.com/v1"


def is_configured(config: CatalogConfig) -> bool:
    return bool(config.apple_music_token)


def search(query: str, config: CatalogConfig) -> Optional[TrackDescriptor]:
    """Return the top Apple Music song for a query, or None."""
    storefront = config.apple_storefront or "us"

    try:
        response = requests.get(
            f"{API_BASE}/catalog/{storefront}/search",
            params={"term": query, "types": "songs", "limit": 1},
            headers={"Authorization": f"Bearer {config.apple_music_token}"},
            timeout=config.request_timeout,
        )
        response.raise_for_status()
        # "songs" is omitted entirely when nothing matched
        songs = response.json()["results"].get("songs", {}).get("data", [])

        if not songs:
            logger.info(f"Apple Music: no results for {query!r}")
            return None

        song = songs[0]
        return TrackDescriptor(
            id=song["id"],
            name=song["attributes"]["name"],
            artist=song["attributes"]["artistName"],
        )

    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.warning(f"Apple Music search HTTP error {status} for {query!r}")
        return None
    except requests.RequestException as e:
        logger.warning(f"Apple Music search transport error for {query!r}: {e}")
        return None
    except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
        logger.warning(
            f"Apple Music search returned malformed payload for {query!r}: {e!r}"
        )
        return None
