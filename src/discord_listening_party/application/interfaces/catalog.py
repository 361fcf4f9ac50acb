"""Port interface for looking up track and playlist metadata."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.party.entities import QueuedTrack
    from ...domain.party.value_objects import PlaylistId, TrackId


class TrackCatalog(ABC):
    """Interface for resolving video and playlist identifiers to metadata.

    Implementations never raise for an unknown or private source: a missing
    title is reported as None and an unreadable playlist as an empty list.
    """

    @abstractmethod
    async def lookup_title(self, track_id: TrackId) -> str | None:
        """Return the video title, or None if it could not be fetched."""
        ...

    @abstractmethod
    async def resolve_playlist(self, playlist_id: PlaylistId) -> list[QueuedTrack]:
        """Return the playlist's tracks in order, or [] if empty or inaccessible."""
        ...

    async def close(self) -> None:
        """Release network resources held by the catalog, if any."""
        return None
