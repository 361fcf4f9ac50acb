"""
Command Dispatcher

Routes every ``PartyCommand`` to exactly one component operation and turns
the outcome into a ``ResponseIntent``. Rejections and corrupt state become
ephemeral replies here; anything else propagates to the transport.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, assert_never

from discord_listening_party.application.commands.party_commands import (
    CastVoteCommand,
    EnterCommand,
    ExitCommand,
    KickCommand,
    ListParticipantsCommand,
    PartyCommand,
    SessionEndCommand,
    SessionStartCommand,
    VoteEndCommand,
    VoteNextCommand,
    VoteStartCommand,
)
from discord_listening_party.application.commands.responses import ResponseIntent, VoteOption
from discord_listening_party.domain.shared.exceptions import (
    CorruptStateError,
    PartyRejectedError,
    RejectionReason,
    StaleSessionError,
)
from discord_listening_party.domain.shared.messages import LogTemplates, PartyMessages

if TYPE_CHECKING:
    from ...config.settings import VotingSettings
    from ...domain.party.entities import CurrentSongView, SummaryLine, VoteTally
    from ..services.playback_service import PlaybackApplicationService
    from ..services.roster_service import RosterService
    from ..services.session_service import SessionLifecycleService
    from ..services.voting_service import VotingService

logger = logging.getLogger(__name__)

REJECTION_MESSAGES: dict[RejectionReason, str] = {
    RejectionReason.ALREADY_ACTIVE: PartyMessages.REJECT_ALREADY_ACTIVE,
    RejectionReason.NOT_ACTIVE: PartyMessages.REJECT_NOT_ACTIVE,
    RejectionReason.VOTE_IN_PROGRESS: PartyMessages.REJECT_VOTE_IN_PROGRESS,
    RejectionReason.NO_CURRENT_SONG: PartyMessages.REJECT_NO_CURRENT_SONG,
    RejectionReason.QUEUE_EMPTY: PartyMessages.REJECT_QUEUE_EMPTY,
    RejectionReason.SESSION_CLOSED: PartyMessages.REJECT_SESSION_CLOSED,
    RejectionReason.VOTE_CLOSED: PartyMessages.REJECT_VOTE_CLOSED,
    RejectionReason.NOT_A_PARTICIPANT: PartyMessages.REJECT_NOT_A_PARTICIPANT,
    RejectionReason.NOT_ELIGIBLE: PartyMessages.REJECT_NOT_ELIGIBLE,
    RejectionReason.INVALID_SCORE: PartyMessages.REJECT_INVALID_SCORE,
    RejectionReason.ALREADY_JOINED: PartyMessages.REJECT_ALREADY_JOINED,
    RejectionReason.NOT_JOINED: PartyMessages.REJECT_NOT_JOINED,
    RejectionReason.TARGET_NOT_JOINED: PartyMessages.REJECT_TARGET_NOT_JOINED,
    RejectionReason.FORBIDDEN: PartyMessages.REJECT_FORBIDDEN,
    RejectionReason.INVALID_REFERENCE: PartyMessages.REJECT_INVALID_REFERENCE,
    RejectionReason.UNRESOLVABLE_URL: PartyMessages.REJECT_UNRESOLVABLE_URL,
    RejectionReason.EMPTY_OR_INACCESSIBLE: PartyMessages.REJECT_EMPTY_OR_INACCESSIBLE,
}


class CommandDispatcher:
    def __init__(
        self,
        *,
        session_service: SessionLifecycleService,
        playback_service: PlaybackApplicationService,
        voting_service: VotingService,
        roster_service: RosterService,
        voting_settings: VotingSettings,
    ) -> None:
        self._sessions = session_service
        self._playback = playback_service
        self._voting = voting_service
        self._roster = roster_service
        self._voting_settings = voting_settings

    async def dispatch(self, command: PartyCommand) -> ResponseIntent:
        """Run ``command`` and describe the reply.

        Never raises for rejections or corrupt state; both become ephemeral
        intents.
        """
        logger.debug(LogTemplates.COMMAND_DISPATCHED, command.kind, command.actor.user_id)
        try:
            if command.requires_authorization and not command.actor.is_authorized:
                raise PartyRejectedError(RejectionReason.FORBIDDEN)
            return await self._route(command)
        except PartyRejectedError as exc:
            logger.debug(
                LogTemplates.COMMAND_REJECTED, command.kind, command.actor.user_id, exc.reason.value
            )
            return ResponseIntent.private(REJECTION_MESSAGES[exc.reason])
        except StaleSessionError as exc:
            logger.debug(
                LogTemplates.COMMAND_REJECTED, command.kind, command.actor.user_id, exc.message
            )
            return ResponseIntent.private(PartyMessages.REJECT_SESSION_CLOSED)
        except CorruptStateError as exc:
            logger.error(LogTemplates.CORRUPT_STATE, command.kind, exc.message)
            return ResponseIntent.private(PartyMessages.STATE_CORRUPT)

    async def _route(self, command: PartyCommand) -> ResponseIntent:
        match command:
            case SessionStartCommand(playlist_ref=playlist_ref):
                started = await self._sessions.start_session(
                    playlist_ref.strip() if playlist_ref else None
                )
                if started.from_playlist:
                    return ResponseIntent.announce(
                        PartyMessages.SESSION_STARTED_WITH_PLAYLIST.format(count=started.queue_size)
                    )
                return ResponseIntent.announce(PartyMessages.SESSION_STARTED)

            case SessionEndCommand():
                ended = await self._sessions.end_session()
                return ResponseIntent.announce(
                    PartyMessages.SESSION_ENDED.format(summary=self._format_summary(ended.summary))
                )

            case VoteStartCommand(url=url):
                view = await self._playback.start_vote_on_url(url.strip())
                return self._now_playing(PartyMessages.NOW_PLAYING, view)

            case VoteNextCommand():
                view = await self._playback.advance_queue()
                text = PartyMessages.NOW_PLAYING_NEXT.format(remaining=view.remaining_in_queue or 0)
                return self._now_playing(text, view)

            case VoteEndCommand():
                tally = await self._playback.end_vote()
                return ResponseIntent.announce(self._format_tally(tally))

            case EnterCommand(actor=actor):
                count = await self._roster.join(actor.user_id)
                return ResponseIntent.private(PartyMessages.JOINED.format(count=count))

            case ExitCommand(actor=actor):
                await self._roster.leave(actor.user_id)
                return ResponseIntent.private(PartyMessages.LEFT)

            case KickCommand(actor=actor, target_id=target_id):
                await self._roster.kick(actor.user_id, target_id, is_authorized=actor.is_authorized)
                return ResponseIntent.announce(PartyMessages.KICKED.format(user_id=target_id))

            case ListParticipantsCommand():
                participants = await self._roster.list_participants()
                return ResponseIntent.private(self._format_participants(participants))

            case CastVoteCommand(actor=actor, track_id=track_id, score=score):
                result = await self._voting.cast_or_toggle_vote(actor.user_id, track_id, score)
                if result.outcome.is_retraction:
                    return ResponseIntent.private(PartyMessages.VOTE_RETRACTED)
                label = self._voting_settings.label_for(score)
                return ResponseIntent.private(PartyMessages.VOTE_CAST.format(label=label))

            case _:
                assert_never(command)

    def _now_playing(self, text: str, view: CurrentSongView) -> ResponseIntent:
        options = tuple(
            VoteOption(track_id=str(view.track_id), score=option.score, label=option.label)
            for option in self._voting_settings.options
        )
        return ResponseIntent.now_playing_card(text, view, options)

    @staticmethod
    def _format_tally(tally: VoteTally) -> str:
        text = PartyMessages.VOTE_ENDED.format(
            title=tally.title,
            total=tally.total_points,
            voters=tally.voter_count,
            eligible=tally.participant_count,
            average=tally.average,
        )
        if tally.is_high_approval:
            text = f"{text}\n{PartyMessages.VOTE_ENDED_HIGH_APPROVAL}"
        return text

    @staticmethod
    def _format_summary(summary: list[SummaryLine]) -> str:
        if not summary:
            return PartyMessages.SESSION_SUMMARY_EMPTY
        return "\n".join(
            PartyMessages.SESSION_SUMMARY_LINE.format(
                title=line.title, average=line.average, voters=line.voter_count
            )
            for line in summary
        )

    @staticmethod
    def _format_participants(participants: list[int]) -> str:
        if not participants:
            return PartyMessages.PARTICIPANTS_EMPTY
        lines = "\n".join(
            PartyMessages.PARTICIPANTS_LINE.format(user_id=user_id) for user_id in participants
        )
        return PartyMessages.PARTICIPANTS.format(count=len(participants), lines=lines)
