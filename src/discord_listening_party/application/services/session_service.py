"""Application service for opening and closing listening sessions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from discord_listening_party.domain.party.entities import QueuedTrack, SummaryLine
from discord_listening_party.domain.party.services import PartyDomainService
from discord_listening_party.domain.party.value_objects import PlaylistId
from discord_listening_party.domain.shared.exceptions import (
    PartyRejectedError,
    RejectionReason,
)
from discord_listening_party.domain.shared.messages import LogTemplates
from discord_listening_party.domain.shared.types import NonNegativeInt, PositiveInt

if TYPE_CHECKING:
    from ...domain.party.repository import PartyStateRepository
    from ..interfaces.catalog import TrackCatalog

logger = logging.getLogger(__name__)


class SessionStarted(BaseModel):
    model_config = ConfigDict(frozen=True)

    generation: PositiveInt
    queue_size: NonNegativeInt
    from_playlist: bool = False


class SessionEnded(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: list[SummaryLine]


class SessionLifecycleService:
    """Starts and ends sessions, seeding or clearing every dependent record."""

    def __init__(
        self,
        *,
        state_repository: PartyStateRepository,
        catalog: TrackCatalog,
    ) -> None:
        self._state = state_repository
        self._catalog = catalog

    async def start_session(self, playlist_ref: str | None = None) -> SessionStarted:
        """Open a session, optionally seeding the queue from a playlist.

        Raises:
            PartyRejectedError: ALREADY_ACTIVE, INVALID_REFERENCE or
                EMPTY_OR_INACCESSIBLE. Nothing is written in any of these cases.
        """
        if await self._state.is_session_active():
            raise PartyRejectedError(RejectionReason.ALREADY_ACTIVE)

        queue: list[QueuedTrack] = []
        if playlist_ref:
            queue = await self._load_playlist(playlist_ref)

        # Generation first, so in-flight requests from the previous session
        # can detect that they are stale.
        generation = await self._state.bump_generation()
        await self._state.set_session_active(True)
        await self._state.clear_current_song()
        await self._state.clear_voted_users()
        await self._state.clear_eligible_voters()
        await self._state.clear_history()
        await self._state.save_participants([])
        await self._state.save_queue(queue)

        logger.info(LogTemplates.SESSION_STARTED, generation, len(queue))
        return SessionStarted(
            generation=generation,
            queue_size=len(queue),
            from_playlist=bool(playlist_ref),
        )

    async def _load_playlist(self, playlist_ref: str) -> list[QueuedTrack]:
        playlist_id = PlaylistId.from_url(playlist_ref)
        if playlist_id is None:
            raise PartyRejectedError(RejectionReason.INVALID_REFERENCE)

        try:
            tracks = await self._catalog.resolve_playlist(playlist_id)
        except Exception as exc:
            logger.warning(LogTemplates.CATALOG_PLAYLIST_FAILED, playlist_id, exc)
            tracks = []

        if not tracks:
            raise PartyRejectedError(RejectionReason.EMPTY_OR_INACCESSIBLE)
        return tracks

    async def end_session(self) -> SessionEnded:
        """Close the session and return the ranked recap.

        Raises:
            PartyRejectedError: NOT_ACTIVE, or VOTE_IN_PROGRESS while a song
                is still open for voting.
        """
        active = await self._state.is_session_active()
        current_song = await self._state.get_current_song()
        history = await self._state.get_history()

        PartyDomainService.require_idle_session(active, current_song)
        summary = PartyDomainService.summarize(history)

        await self._state.set_session_active(False)
        await self._state.clear_queue()
        await self._state.clear_participants()
        await self._state.clear_history()

        logger.info(LogTemplates.SESSION_ENDED, len(summary))
        return SessionEnded(summary=summary)
