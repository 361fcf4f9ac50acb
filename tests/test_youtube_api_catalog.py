"""Unit tests for YouTubeDataApiCatalog against a mocked HTTP transport."""

import httpx
import pytest

from conftest import TRACK_X, TRACK_Y
from discord_listening_party.config.settings import CatalogSettings
from discord_listening_party.domain.party.value_objects import PlaylistId, TrackId
from discord_listening_party.infrastructure.catalog.youtube_api_catalog import (
    YouTubeDataApiCatalog,
)


def _settings(**overrides):
    return CatalogSettings(backend="youtube_api", youtube_api_key="test-key", **overrides)


def _catalog(handler, **overrides):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return YouTubeDataApiCatalog(_settings(**overrides), client=client), client


def test_requires_api_key():
    with pytest.raises(ValueError, match="CATALOG__YOUTUBE_API_KEY"):
        YouTubeDataApiCatalog(CatalogSettings())


class TestLookupTitle:
    async def test_returns_snippet_title(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"items": [{"snippet": {"title": "Never Gonna"}}]})

        catalog, client = _catalog(handler)
        title = await catalog.lookup_title(TrackId(TRACK_X))
        await client.aclose()

        assert title == "Never Gonna"
        request = seen[0]
        assert request.url.path == "/youtube/v3/videos"
        assert request.url.params["id"] == TRACK_X
        assert request.url.params["part"] == "snippet"
        assert request.url.params["key"] == "test-key"

    async def test_unknown_video_returns_none(self):
        catalog, client = _catalog(lambda request: httpx.Response(200, json={"items": []}))

        assert await catalog.lookup_title(TrackId(TRACK_X)) is None
        await client.aclose()

    async def test_http_error_returns_none(self):
        catalog, client = _catalog(lambda request: httpx.Response(403, json={"error": "quota"}))

        assert await catalog.lookup_title(TrackId(TRACK_X)) is None
        await client.aclose()

    async def test_transport_error_returns_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        catalog, client = _catalog(handler)

        assert await catalog.lookup_title(TrackId(TRACK_X)) is None
        await client.aclose()


class TestResolvePlaylist:
    async def test_maps_items_in_order(self):
        seen: list[httpx.Request] = []
        payload = {
            "items": [
                {
                    "snippet": {
                        "title": "First",
                        "resourceId": {"videoId": TRACK_X},
                        "thumbnails": {
                            "default": {"url": "https://img/x-small.jpg"},
                            "high": {"url": "https://img/x-high.jpg"},
                        },
                    }
                },
                {"snippet": {"title": "No resource"}},
                {"snippet": {"title": "Second", "resourceId": {"videoId": TRACK_Y}}},
            ]
        }

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=payload)

        catalog, client = _catalog(handler, playlist_max_items=25)
        tracks = await catalog.resolve_playlist(PlaylistId("PLabc"))
        await client.aclose()

        assert [(str(t.id), t.title, t.thumbnail) for t in tracks] == [
            (TRACK_X, "First", "https://img/x-high.jpg"),
            (TRACK_Y, "Second", None),
        ]
        params = seen[0].url.params
        assert seen[0].url.path == "/youtube/v3/playlistItems"
        assert params["playlistId"] == "PLabc"
        assert params["maxResults"] == "25"

    async def test_inaccessible_playlist_returns_empty(self):
        catalog, client = _catalog(lambda request: httpx.Response(404))

        assert await catalog.resolve_playlist(PlaylistId("PLprivate")) == []
        await client.aclose()

    async def test_malformed_body_returns_empty(self):
        catalog, client = _catalog(lambda request: httpx.Response(200, text="not json"))

        assert await catalog.resolve_playlist(PlaylistId("PLabc")) == []
        await client.aclose()


class TestClose:
    async def test_injected_client_left_open(self):
        catalog, client = _catalog(lambda request: httpx.Response(200, json={}))

        await catalog.close()

        assert client.is_closed is False
        await client.aclose()

    async def test_owned_client_closed(self):
        catalog = YouTubeDataApiCatalog(_settings())
        client = catalog._get_client()

        await catalog.close()

        assert client.is_closed is True
