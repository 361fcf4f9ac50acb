"""Application service for the queue and the single track open for voting."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from discord_listening_party.domain.party.entities import (
    CurrentSong,
    CurrentSongView,
    UserIds,
    VoteTally,
)
from discord_listening_party.domain.party.services import PartyDomainService
from discord_listening_party.domain.party.value_objects import TrackId
from discord_listening_party.domain.shared.exceptions import (
    PartyRejectedError,
    RejectionReason,
)
from discord_listening_party.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...domain.party.repository import PartyStateRepository
    from ..interfaces.catalog import TrackCatalog

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER_TITLE = "Unknown Song"


class PlaybackApplicationService:
    """Moves tracks in and out of voting.

    Exactly one track is open at a time: opening requires ``CURRENT_SONG`` to
    be absent, and closing removes it together with the eligibility snapshot
    and the ballots.
    """

    def __init__(
        self,
        *,
        state_repository: PartyStateRepository,
        catalog: TrackCatalog,
        placeholder_title: str = DEFAULT_PLACEHOLDER_TITLE,
    ) -> None:
        self._state = state_repository
        self._catalog = catalog
        self._placeholder_title = placeholder_title

    async def start_vote_on_url(self, url: str) -> CurrentSongView:
        """Open voting on an arbitrary video.

        Raises:
            PartyRejectedError: NOT_ACTIVE, VOTE_IN_PROGRESS or UNRESOLVABLE_URL.
        """
        active = await self._state.is_session_active()
        current_song = await self._state.get_current_song()
        participants = await self._state.get_participants()

        PartyDomainService.require_idle_session(active, current_song)
        track_id = TrackId.from_url(url)
        if track_id is None:
            raise PartyRejectedError(RejectionReason.UNRESOLVABLE_URL)

        title = await self._lookup_title(track_id)
        song = CurrentSong(id=track_id, title=title)
        await self._open_vote(song, participants)
        return CurrentSongView.of(song, eligible_count=len(participants))

    async def advance_queue(self) -> CurrentSongView:
        """Pop the head of the queue and open voting on it.

        Raises:
            PartyRejectedError: NOT_ACTIVE, VOTE_IN_PROGRESS or QUEUE_EMPTY.
        """
        active = await self._state.is_session_active()
        current_song = await self._state.get_current_song()
        queue = await self._state.get_queue()
        participants = await self._state.get_participants()

        PartyDomainService.require_idle_session(active, current_song)
        if not queue:
            raise PartyRejectedError(RejectionReason.QUEUE_EMPTY)

        head, remaining = queue[0], queue[1:]
        await self._state.save_queue(remaining)

        song = CurrentSong.from_queued(head)
        await self._open_vote(song, participants)
        logger.info(LogTemplates.QUEUE_ADVANCED, song.title, song.id, len(remaining))
        return CurrentSongView.of(
            song,
            eligible_count=len(participants),
            remaining_in_queue=len(remaining),
        )

    async def end_vote(self) -> VoteTally:
        """Close voting on the current track and fold the result into history.

        Raises:
            PartyRejectedError: NO_CURRENT_SONG.
        """
        current_song = await self._state.get_current_song()
        voted_users = await self._state.get_voted_users()
        eligible_voters = await self._state.get_eligible_voters()
        history = await self._state.get_history()

        if current_song is None:
            raise PartyRejectedError(RejectionReason.NO_CURRENT_SONG)

        tally = PartyDomainService.tally(current_song, voted_users, eligible_voters)

        await self._state.save_history(PartyDomainService.merge_history(history, tally))
        await self._state.clear_current_song()
        await self._state.clear_voted_users()
        await self._state.clear_eligible_voters()

        logger.info(
            LogTemplates.VOTE_CLOSED,
            tally.title,
            tally.track_id,
            tally.total_points,
            tally.voter_count,
            tally.participant_count,
        )
        return tally

    async def _open_vote(self, song: CurrentSong, participants: UserIds) -> None:
        # CURRENT_SONG goes last: it is the record that lets ballots in.
        await self._state.save_eligible_voters(list(participants))
        await self._state.save_voted_users({})
        await self._state.save_current_song(song)
        logger.info(LogTemplates.VOTE_OPENED, song.title, song.id, len(participants))

    async def _lookup_title(self, track_id: TrackId) -> str:
        try:
            title = await self._catalog.lookup_title(track_id)
        except Exception as exc:
            logger.warning(LogTemplates.CATALOG_TITLE_LOOKUP_FAILED, track_id, exc)
            title = None
        return title or self._placeholder_title
