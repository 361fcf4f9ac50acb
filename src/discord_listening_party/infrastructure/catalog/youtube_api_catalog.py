"""TrackCatalog implementation backed by the YouTube Data API v3."""

from __future__ import annotations

import logging
from typing import Any, Final

import httpx
from pydantic import BaseModel, ConfigDict, Field

from discord_listening_party.application.interfaces.catalog import TrackCatalog
from discord_listening_party.config.settings import CatalogSettings
from discord_listening_party.domain.party.entities import QueuedTrack
from discord_listening_party.domain.party.value_objects import PlaylistId, TrackId
from discord_listening_party.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

API_BASE_URL: Final[str] = "https://www.googleapis.com/youtube/v3"


# ── Response models ────────────────────────────────────────────────────


class _Thumbnail(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    url: str


class _Thumbnails(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    high: _Thumbnail | None = None
    default: _Thumbnail | None = None

    @property
    def preferred_url(self) -> str | None:
        for thumb in (self.high, self.default):
            if thumb is not None:
                return thumb.url
        return None


class _ResourceId(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    video_id: str | None = Field(default=None, alias="videoId")


class _Snippet(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    title: str | None = None
    thumbnails: _Thumbnails = Field(default_factory=_Thumbnails)
    resource_id: _ResourceId | None = Field(default=None, alias="resourceId")


class _Item(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    snippet: _Snippet | None = None


class _ListResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    items: list[_Item] = Field(default_factory=list)


class YouTubeDataApiCatalog(TrackCatalog):
    """Looks up titles via ``videos`` and playlists via ``playlistItems``.

    Any HTTP or decoding failure degrades to "unknown": ``None`` for a title,
    ``[]`` for a playlist.
    """

    def __init__(
        self,
        settings: CatalogSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or CatalogSettings()
        api_key = self._settings.youtube_api_key.get_secret_value()
        if not api_key:
            raise ValueError(ErrorMessages.YOUTUBE_API_KEY_REQUIRED)
        self._api_key = api_key
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.request_timeout_s)
        return self._client

    async def _get(self, endpoint: str, **params: Any) -> _ListResponse:
        response = await self._get_client().get(
            f"{API_BASE_URL}/{endpoint}",
            params={**params, "key": self._api_key},
        )
        response.raise_for_status()
        return _ListResponse.model_validate(response.json())

    async def lookup_title(self, track_id: TrackId) -> str | None:
        try:
            data = await self._get("videos", part="snippet", id=track_id.value)
        except Exception as exc:
            logger.warning(LogTemplates.CATALOG_TITLE_LOOKUP_FAILED, track_id, exc)
            return None

        for item in data.items:
            if item.snippet is not None and item.snippet.title:
                return item.snippet.title
        return None

    async def resolve_playlist(self, playlist_id: PlaylistId) -> list[QueuedTrack]:
        try:
            data = await self._get(
                "playlistItems",
                part="snippet",
                playlistId=playlist_id.value,
                maxResults=self._settings.playlist_max_items,
            )
        except Exception as exc:
            logger.warning(LogTemplates.CATALOG_PLAYLIST_FAILED, playlist_id, exc)
            return []

        tracks: list[QueuedTrack] = []
        for item in data.items:
            snippet = item.snippet
            if snippet is None or snippet.resource_id is None:
                continue
            video_id = snippet.resource_id.video_id
            if not video_id or not snippet.title:
                continue
            tracks.append(
                QueuedTrack(
                    id=TrackId(video_id),
                    title=snippet.title,
                    thumbnail=snippet.thumbnails.preferred_url,
                )
            )

        logger.info(LogTemplates.CATALOG_PLAYLIST_LOADED, len(tracks), playlist_id)
        return tracks

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
