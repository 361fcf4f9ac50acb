"""Application service for the session roster."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from discord_listening_party.domain.party.entities import UserIds
from discord_listening_party.domain.shared.exceptions import (
    PartyRejectedError,
    RejectionReason,
)
from discord_listening_party.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...domain.party.repository import PartyStateRepository

logger = logging.getLogger(__name__)


class RosterService:
    """Joins, departures and removals.

    A departing user is also pruned from the open vote, so their ballot no
    longer counts and they no longer enlarge the divisor.
    """

    def __init__(self, *, state_repository: PartyStateRepository) -> None:
        self._state = state_repository

    async def join(self, user_id: int) -> int:
        """Add a user to the roster and return the new roster size.

        Joining mid-vote does not grant a vote on the current track.
        """
        active = await self._state.is_session_active()
        participants = await self._state.get_participants()

        if not active:
            raise PartyRejectedError(RejectionReason.NOT_ACTIVE)
        if user_id in participants:
            raise PartyRejectedError(RejectionReason.ALREADY_JOINED)

        participants = [*participants, user_id]
        await self._state.save_participants(participants)

        logger.info(LogTemplates.PARTICIPANT_JOINED, user_id, len(participants))
        return len(participants)

    async def leave(self, user_id: int) -> None:
        await self._remove(user_id, missing=RejectionReason.NOT_JOINED)
        logger.info(LogTemplates.PARTICIPANT_LEFT, user_id)

    async def kick(self, moderator_id: int, target_id: int, *, is_authorized: bool) -> None:
        """Remove another user from the session.

        Authorization is checked before any state is read.
        """
        if not is_authorized:
            raise PartyRejectedError(RejectionReason.FORBIDDEN)
        await self._remove(target_id, missing=RejectionReason.TARGET_NOT_JOINED)
        logger.info(LogTemplates.PARTICIPANT_KICKED, target_id, moderator_id)

    async def list_participants(self) -> UserIds:
        active = await self._state.is_session_active()
        participants = await self._state.get_participants()
        if not active:
            raise PartyRejectedError(RejectionReason.NOT_ACTIVE)
        return participants

    async def _remove(self, user_id: int, *, missing: RejectionReason) -> None:
        active = await self._state.is_session_active()
        participants = await self._state.get_participants()
        eligible_voters = await self._state.get_eligible_voters()
        voted_users = await self._state.get_voted_users()

        if not active:
            raise PartyRejectedError(RejectionReason.NOT_ACTIVE)
        if user_id not in participants:
            raise PartyRejectedError(missing)

        await self._state.save_participants([uid for uid in participants if uid != user_id])
        if user_id in eligible_voters:
            await self._state.save_eligible_voters(
                [uid for uid in eligible_voters if uid != user_id]
            )
        if user_id in voted_users:
            await self._state.save_voted_users(
                {uid: score for uid, score in voted_users.items() if uid != user_id}
            )
