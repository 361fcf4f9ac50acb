"""Application service for casting, replacing and retracting votes."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ConfigDict

from discord_listening_party.application.services.keyed_locks import KeyedLocks
from discord_listening_party.domain.party.services import PartyDomainService
from discord_listening_party.domain.party.value_objects import VoteOutcome
from discord_listening_party.domain.shared.exceptions import (
    PartyRejectedError,
    RejectionReason,
)
from discord_listening_party.domain.shared.messages import LogTemplates
from discord_listening_party.domain.shared.types import DiscordSnowflake, ScoreInt

if TYPE_CHECKING:
    from ...domain.party.repository import PartyStateRepository

logger = logging.getLogger(__name__)

DEFAULT_VOTE_SCORES: Final[tuple[int, ...]] = (1, 2)


class VoteResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: DiscordSnowflake
    track_id: str
    score: ScoreInt
    outcome: VoteOutcome


class VotingService:
    """Records button presses against the track currently open for voting.

    With ``serialize_votes`` enabled, presses on the same track within the same
    session generation run one at a time so concurrent voters cannot overwrite
    each other's ballots. The store itself offers no such guarantee.
    """

    def __init__(
        self,
        *,
        state_repository: PartyStateRepository,
        allowed_scores: Iterable[int] = DEFAULT_VOTE_SCORES,
        serialize_votes: bool = True,
    ) -> None:
        self._state = state_repository
        self._allowed_scores = frozenset(allowed_scores)
        self._locks: KeyedLocks | None = KeyedLocks() if serialize_votes else None

    async def cast_or_toggle_vote(self, user_id: int, track_id: str, score: int) -> VoteResult:
        """Cast a vote, replace a different one, or retract an identical one.

        Raises:
            PartyRejectedError: INVALID_SCORE, SESSION_CLOSED, VOTE_CLOSED,
                NOT_A_PARTICIPANT or NOT_ELIGIBLE.
            StaleSessionError: a new session started while this press was
                being handled.
        """
        if score not in self._allowed_scores:
            raise PartyRejectedError(RejectionReason.INVALID_SCORE)

        generation = await self._state.get_generation()
        if self._locks is None:
            return await self._apply(generation, user_id, track_id, score)
        async with self._locks.hold((generation, track_id)):
            return await self._apply(generation, user_id, track_id, score)

    async def _apply(
        self, generation: int, user_id: int, track_id: str, score: int
    ) -> VoteResult:
        active = await self._state.is_session_active()
        current_song = await self._state.get_current_song()
        participants = await self._state.get_participants()
        eligible_voters = await self._state.get_eligible_voters()
        voted_users = await self._state.get_voted_users()

        if not active:
            raise PartyRejectedError(RejectionReason.SESSION_CLOSED)
        if current_song is None or not current_song.is_track(track_id):
            raise PartyRejectedError(RejectionReason.VOTE_CLOSED)
        if user_id not in participants:
            raise PartyRejectedError(RejectionReason.NOT_A_PARTICIPANT)
        if user_id not in eligible_voters:
            raise PartyRejectedError(RejectionReason.NOT_ELIGIBLE)

        updated, outcome = PartyDomainService.toggle_vote(voted_users, user_id, score)

        await self._state.ensure_generation(generation)
        await self._state.save_voted_users(updated)

        if outcome.is_retraction:
            logger.debug(LogTemplates.VOTE_RETRACTED, user_id, track_id)
        else:
            logger.debug(LogTemplates.VOTE_CAST, user_id, score, track_id)
        return VoteResult(user_id=user_id, track_id=track_id, score=score, outcome=outcome)
