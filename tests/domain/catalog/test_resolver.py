"""
Tests for CatalogResolver dispatching to provider modules.
"""

from unittest.mock import patch

import pytest

from songlink.core.config import CatalogConfig
from songlink.domain.catalog import CatalogResolver, Provider, TrackDescriptor
from songlink.domain.exceptions import ProviderUnconfiguredError

TRACK = TrackDescriptor(id="abc", name="Yesterday", artist="The Beatles")


@pytest.fixture
def full_config():
    return CatalogConfig(
        spotify_client_id="id",
        spotify_client_secret="secret",
        apple_music_token="apple-token",
        youtube_api_key="yt-key",
    )


@pytest.mark.parametrize(
    "provider,message",
    [
        (Provider.SPOTIFY, "Spotify credentials not configured"),
        (Provider.APPLE, "Apple Music token not configured"),
        (Provider.YOUTUBE, "YouTube API key not configured"),
    ],
)
@pytest.mark.anyio
async def test_unconfigured_provider_raises_without_network(provider, message):
    resolver = CatalogResolver(CatalogConfig())

    with patch("songlink.domain.catalog.providers.spotify.requests") as spotify_requests, \
         patch("songlink.domain.catalog.providers.apple.requests") as apple_requests, \
         patch("songlink.domain.catalog.providers.youtube.requests") as youtube_requests:
        with pytest.raises(ProviderUnconfiguredError, match=message):
            await resolver.resolve(provider, "Yesterday")

    assert not spotify_requests.mock_calls
    assert not apple_requests.mock_calls
    assert not youtube_requests.mock_calls


@pytest.mark.anyio
async def test_spotify_needs_both_id_and_secret():
    resolver = CatalogResolver(CatalogConfig(spotify_client_id="id"))
    with pytest.raises(ProviderUnconfiguredError):
        await resolver.resolve(Provider.SPOTIFY, "Yesterday")


@pytest.mark.anyio
async def test_unknown_provider_returns_none(full_config):
    resolver = CatalogResolver(full_config)
    with patch("songlink.domain.catalog.providers.spotify.search") as search:
        assert await resolver.resolve(Provider.UNKNOWN, "Yesterday") is None
        assert await resolver.resolve("napster", "Yesterday") is None
    search.assert_not_called()


@pytest.mark.anyio
async def test_resolve_delegates_to_provider_module(full_config):
    resolver = CatalogResolver(full_config)
    with patch(
        "songlink.domain.catalog.providers.youtube.search", return_value=TRACK
    ) as search:
        result = await resolver.resolve("youtube", "Yesterday")

    assert result == TRACK
    search.assert_called_once_with("Yesterday", full_config)


@pytest.mark.anyio
async def test_resolve_passes_through_not_found(full_config):
    resolver = CatalogResolver(full_config)
    with patch("songlink.domain.catalog.providers.apple.search", return_value=None):
        assert await resolver.resolve(Provider.APPLE, "zzzz") is None


def test_configured_providers():
    resolver = CatalogResolver(CatalogConfig(youtube_api_key="yt-key"))
    assert resolver.configured_providers() == ["youtube"]
    assert resolver.is_configured(Provider.YOUTUBE)
    assert not resolver.is_configured(Provider.SPOTIFY)
    assert not resolver.is_configured(Provider.UNKNOWN)


@pytest.mark.parametrize(
    "name,expected",
    [
        ("spotify", Provider.SPOTIFY),
        ("apple", Provider.APPLE),
        ("youtube", Provider.YOUTUBE),
        ("Spotify", Provider.UNKNOWN),
        ("unknown", Provider.UNKNOWN),
        ("", Provider.UNKNOWN),
    ],
)
def test_provider_parse(name, expected):
    assert Provider.parse(name) is expected
