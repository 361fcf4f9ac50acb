"""TrackCatalog implementation using yt-dlp metadata extraction."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Final, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator
from yt_dlp import YoutubeDL

from discord_listening_party.application.interfaces.catalog import TrackCatalog
from discord_listening_party.config.settings import CatalogSettings
from discord_listening_party.domain.party.entities import QueuedTrack
from discord_listening_party.domain.party.value_objects import PlaylistId, TrackId
from discord_listening_party.domain.shared.messages import LogTemplates
from discord_listening_party.domain.shared.types import (
    HttpUrlStr,
    NonEmptyStr,
    NonNegativeFloat,
    PositiveInt,
)

logger = logging.getLogger(__name__)

CACHE_MAX_SIZE: Final[int] = 500
DEFAULT_RETRIES: Final[int] = 3
PLAYLIST_URL_TEMPLATE: Final[str] = "https://www.youtube.com/playlist?list={playlist_id}"
UNAVAILABLE_TITLES: Final[frozenset[str]] = frozenset({"[Private video]", "[Deleted video]"})


# ── Pydantic models for yt-dlp data ────────────────────────────────────


class YtDlpThumbnail(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    url: HttpUrlStr | None = None

    @field_validator("url", mode="before")
    @classmethod
    def _coerce_url(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.startswith(("http://", "https://")):
            return None
        return v


class YtDlpEntryInfo(BaseModel):
    """Trimmed yt-dlp extraction result for one video or playlist entry.

    Extra fields from yt-dlp are silently ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: NonEmptyStr | None = None
    title: NonEmptyStr | None = None
    thumbnail: HttpUrlStr | None = None
    thumbnails: list[YtDlpThumbnail] = Field(default_factory=list)

    @field_validator("id", "title", "thumbnail", mode="before")
    @classmethod
    def _coerce_empty_to_none(cls, v: Any) -> str | None:
        """Convert empty / whitespace-only / non-string values to None."""
        if not isinstance(v, str) or not v.strip():
            return None
        return v

    @field_validator("thumbnails", mode="before")
    @classmethod
    def _coerce_thumbnails(cls, v: Any) -> list[Any]:
        return v if isinstance(v, list) else []

    @property
    def best_thumbnail(self) -> str | None:
        if self.thumbnail:
            return self.thumbnail
        # yt-dlp orders thumbnails from worst to best
        for thumb in reversed(self.thumbnails):
            if thumb.url:
                return thumb.url
        return None

    @property
    def is_available(self) -> bool:
        return bool(self.id and self.title and self.title not in UNAVAILABLE_TITLES)


class CacheEntry(BaseModel):
    """Cached title lookup with its timestamp."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    cached_at: NonNegativeFloat


class YtDlpOpts(BaseModel):
    """Typed yt-dlp configuration options passed to YoutubeDL."""

    model_config = ConfigDict(frozen=True)

    quiet: bool = True
    no_warnings: bool = True
    noprogress: bool = True
    noplaylist: bool = True
    skip_download: bool = True
    retries: PositiveInt = DEFAULT_RETRIES
    socket_timeout: float = 10.0
    extract_flat: NonEmptyStr | bool = False
    playlistend: PositiveInt | None = None


class YtDlpCatalog(TrackCatalog):
    def __init__(self, settings: CatalogSettings | None = None) -> None:
        self._settings = settings or CatalogSettings()
        self._base_opts = YtDlpOpts(socket_timeout=self._settings.request_timeout_s)
        self._title_cache: dict[str, CacheEntry] = {}

    def _get_opts(self, **overrides: Any) -> YtDlpOpts:
        if overrides:
            return self._base_opts.model_copy(update=overrides)
        return self._base_opts

    def _get_playlist_opts(self) -> YtDlpOpts:
        return self._get_opts(
            noplaylist=False,
            extract_flat="in_playlist",
            playlistend=self._settings.playlist_max_items,
        )

    def _extract(self, url: str, opts: YtDlpOpts) -> dict[str, Any] | None:
        with YoutubeDL(params=cast(Any, opts.model_dump(exclude_none=True))) as ydl:
            data = ydl.extract_info(url, download=False)
        return dict(data) if isinstance(data, dict) else None

    def _cached_title(self, key: str, now: float) -> CacheEntry | None:
        cached = self._title_cache.get(key)
        if cached is None:
            return None
        if now - cached.cached_at < self._settings.cache_ttl_seconds:
            logger.debug(LogTemplates.CATALOG_CACHE_HIT, key)
            return cached
        self._title_cache.pop(key, None)
        return None

    def _store_title(self, key: str, title: str | None, now: float) -> None:
        self._title_cache[key] = CacheEntry(title=title, cached_at=now)
        if len(self._title_cache) > CACHE_MAX_SIZE:
            ttl = self._settings.cache_ttl_seconds
            expired = [k for k, e in self._title_cache.items() if now - e.cached_at >= ttl]
            for k in expired:
                self._title_cache.pop(k, None)

    def _lookup_title_sync(self, track_id: TrackId) -> str | None:
        now = time.time()
        cached = self._cached_title(track_id.value, now)
        if cached is not None:
            return cached.title

        data = self._extract(track_id.watch_url, self._get_opts())
        title = YtDlpEntryInfo.model_validate(data).title if data else None
        self._store_title(track_id.value, title, now)
        return title

    def _resolve_playlist_sync(self, playlist_id: PlaylistId) -> list[QueuedTrack]:
        url = PLAYLIST_URL_TEMPLATE.format(playlist_id=playlist_id.value)
        data = self._extract(url, self._get_playlist_opts())
        if data is None:
            return []

        entries = data.get("entries") or []
        tracks: list[QueuedTrack] = []
        for raw in entries:
            if not isinstance(raw, dict):
                continue
            entry = YtDlpEntryInfo.model_validate(raw)
            if not entry.is_available:
                continue
            tracks.append(
                QueuedTrack(
                    id=TrackId(cast(str, entry.id)),
                    title=cast(str, entry.title),
                    thumbnail=entry.best_thumbnail,
                )
            )
        return tracks[: self._settings.playlist_max_items]

    async def lookup_title(self, track_id: TrackId) -> str | None:
        try:
            return await asyncio.to_thread(self._lookup_title_sync, track_id)
        except Exception as exc:
            logger.warning(LogTemplates.CATALOG_TITLE_LOOKUP_FAILED, track_id, exc)
            return None

    async def resolve_playlist(self, playlist_id: PlaylistId) -> list[QueuedTrack]:
        try:
            tracks = await asyncio.to_thread(self._resolve_playlist_sync, playlist_id)
        except Exception as exc:
            logger.warning(LogTemplates.CATALOG_PLAYLIST_FAILED, playlist_id, exc)
            return []
        logger.info(LogTemplates.CATALOG_PLAYLIST_LOADED, len(tracks), playlist_id)
        return tracks
