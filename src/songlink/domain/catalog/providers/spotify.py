"""
Spotify catalog search.

Uses the client-credentials flow: every search first exchanges the app's
client id/secret for a short-lived bearer token. Tokens are not cached
between searches.
"""

import base64
from typing import Optional

import requests
from loguru import logger

from songlink.core.config import CatalogConfig

from ..models import TrackDescriptor

TOKEN_URL = "https://accounts.spotify.com/api/token"
API_BASE = "https://api.spotify.com/v1"


def is_configured(config: CatalogConfig) -> bool:
    """Spotify needs both a client id and a client secret."""
    return bool(config.spotify_client_id and config.spotify_client_secret)


def _request_access_token(config: CatalogConfig) -> str:
    """Exchange client credentials for an app access token.

    Raises:
        requests.RequestException: Transport failure or non-2xx response
        KeyError: Response lacks access_token
    """
    # Spotify requires Basic auth for token exchange
    auth_header = base64.b64encode(
        f"{config.spotify_client_id}:{config.spotify_client_secret}".encode("utf-8")
    ).decode("utf-8")

    response = requests.post(
        TOKEN_URL,
        data={"grant_type": "client_credentials"},
        headers={"Authorization": f"Basic {auth_header}"},
        timeout=config.request_timeout,
    )
    response.raise_for_status()
    return response.json()["access_token"]


def search(query: str, config: CatalogConfig) -> Optional[TrackDescriptor]:
    """Return the top Spotify track for a query, or None.

    Any transport or payload failure is logged and reported as None.
    """
    try:
        token = _request_access_token(config)

        response = requests.get(
            f"{API_BASE}/search",
            params={"q": query, "type": "track", "limit": 1},
            headers={"Authorization": f"Bearer {token}"},
            timeout=config.request_timeout,
        )
        response.raise_for_status()
        items = response.json()["tracks"]["items"]

        if not items:
            logger.info(f"Spotify: no results for {query!r}")
            return None

        track = items[0]
        return TrackDescriptor(
            id=track["id"],
            name=track["name"],
            artist=track["artists"][0]["name"],
        )

    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.warning(f"Spotify search HTTP error {status} for {query!r}")
        return None
    except requests.RequestException as e:
        logger.warning(f"Spotify search transport error for {query!r}: {e}")
        return None
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logger.warning(f"Spotify search returned malformed payload for {query!r}: {e!r}")
        return None
