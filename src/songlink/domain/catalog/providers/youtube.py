"""
YouTube Data API search, restricted to the Music video category.

The "artist" of a result is the uploading channel's title.
"""

from typing import Optional

import requests
from loguru import logger

from songlink.core.config import CatalogConfig

from ..models import TrackDescriptor

SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
MUSIC_CATEGORY_ID = "10"


def is_configured(config: CatalogConfig) -> bool:
    return bool(config.youtube_api_key)


def search(query: str, config: CatalogConfig) -> Optional[TrackDescriptor]:
    """Return the top YouTube music video for a query, or None."""
    try:
        response = requests.get(
            SEARCH_URL,
            params={
                "q": query,
                "part": "snippet",
                "type": "video",
                "videoCategoryId": MUSIC_CATEGORY_ID,
                "maxResults": 1,
                "key": config.youtube_api_key,
            },
            timeout=config.request_timeout,
        )
        response.raise_for_status()
        items = response.json()["items"]

        if not items:
            logger.info(f"YouTube: no results for {query!r}")
            return None

        video = items[0]
        return TrackDescriptor(
            id=video["id"]["videoId"],
            name=video["snippet"]["title"],
            artist=video["snippet"]["channelTitle"],
        )

    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.warning(f"YouTube search HTTP error {status} for {query!r}")
        return None
    except requests.RequestException as e:
        # Don't log e: the request URL carries the API key
        logger.warning(f"YouTube search transport error for {query!r}: {type(e).__name__}")
        return None
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logger.warning(f"YouTube search returned malformed payload for {query!r}: {e!r}")
        return None
