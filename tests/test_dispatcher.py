"""Tests for CommandDispatcher routing and reply formatting."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import MANAGER, TRACK_X, USER_A, USER_B
from discord_listening_party.application.commands import (
    Actor,
    CastVoteCommand,
    CommandDispatcher,
    EnterCommand,
    ExitCommand,
    KickCommand,
    ListParticipantsCommand,
    SessionEndCommand,
    SessionStartCommand,
    VoteEndCommand,
    VoteNextCommand,
    VoteStartCommand,
)
from discord_listening_party.application.commands.dispatcher import REJECTION_MESSAGES
from discord_listening_party.domain.shared.exceptions import (
    CorruptStateError,
    PartyRejectedError,
    RejectionReason,
    StaleSessionError,
)
from discord_listening_party.domain.shared.messages import PartyMessages

WATCH_URL = f"https://www.youtube.com/watch?v={TRACK_X}"


def test_every_rejection_reason_has_a_message():
    assert set(REJECTION_MESSAGES) == set(RejectionReason)


class TestAuthorization:
    @pytest.mark.parametrize(
        "command_factory",
        [
            lambda a: SessionStartCommand(actor=a),
            lambda a: SessionEndCommand(actor=a),
            lambda a: VoteStartCommand(actor=a, url=WATCH_URL),
            lambda a: VoteNextCommand(actor=a),
            lambda a: VoteEndCommand(actor=a),
            lambda a: KickCommand(actor=a, target_id=USER_B),
            lambda a: ListParticipantsCommand(actor=a),
        ],
    )
    async def test_manager_commands_forbidden_for_others(
        self, dispatcher, actor, kv_store, command_factory
    ):
        intent = await dispatcher.dispatch(command_factory(actor(USER_A)))

        assert intent.ephemeral is True
        assert intent.text == PartyMessages.REJECT_FORBIDDEN
        assert kv_store.writes == []

    async def test_enter_needs_no_authorization(self, dispatcher, manager, actor):
        await dispatcher.dispatch(SessionStartCommand(actor=manager))

        intent = await dispatcher.dispatch(EnterCommand(actor=actor(USER_A)))

        assert intent.ephemeral is True
        assert intent.text == PartyMessages.JOINED.format(count=1)


class TestSessionReplies:
    async def test_session_start_announces(self, dispatcher, manager):
        intent = await dispatcher.dispatch(SessionStartCommand(actor=manager))

        assert intent.ephemeral is False
        assert intent.text == PartyMessages.SESSION_STARTED

    async def test_session_start_with_playlist_reports_count(
        self, dispatcher, manager, catalog, playlist_tracks
    ):
        catalog.resolve_playlist.return_value = playlist_tracks

        intent = await dispatcher.dispatch(
            SessionStartCommand(
                actor=manager, playlist_ref="  https://www.youtube.com/playlist?list=PLx  "
            )
        )

        assert intent.text == PartyMessages.SESSION_STARTED_WITH_PLAYLIST.format(count=3)

    async def test_blank_playlist_ref_starts_without_playlist(self, dispatcher, manager, catalog):
        intent = await dispatcher.dispatch(SessionStartCommand(actor=manager, playlist_ref=""))

        assert intent.text == PartyMessages.SESSION_STARTED
        catalog.resolve_playlist.assert_not_awaited()

    async def test_rejection_becomes_private_message(self, dispatcher, manager):
        await dispatcher.dispatch(SessionStartCommand(actor=manager))

        intent = await dispatcher.dispatch(SessionStartCommand(actor=manager))

        assert intent.ephemeral is True
        assert intent.text == PartyMessages.REJECT_ALREADY_ACTIVE

    async def test_session_end_with_empty_history(self, dispatcher, manager):
        await dispatcher.dispatch(SessionStartCommand(actor=manager))

        intent = await dispatcher.dispatch(SessionEndCommand(actor=manager))

        assert intent.ephemeral is False
        assert intent.text == PartyMessages.SESSION_ENDED.format(
            summary=PartyMessages.SESSION_SUMMARY_EMPTY
        )


class TestPlaybackReplies:
    async def test_vote_start_renders_now_playing_card(self, dispatcher, manager):
        await dispatcher.dispatch(SessionStartCommand(actor=manager))

        intent = await dispatcher.dispatch(VoteStartCommand(actor=manager, url=f" {WATCH_URL} "))

        assert intent.text == PartyMessages.NOW_PLAYING
        assert intent.ephemeral is False
        assert intent.now_playing.title == "Resolved Title"
        assert [(o.track_id, o.score, o.label) for o in intent.options] == [
            (TRACK_X, 1, "👍 Nice"),
            (TRACK_X, 2, "🔁 Play it again!"),
        ]

    async def test_vote_next_reports_remaining(self, dispatcher, manager, catalog, playlist_tracks):
        catalog.resolve_playlist.return_value = playlist_tracks
        await dispatcher.dispatch(
            SessionStartCommand(actor=manager, playlist_ref="https://youtube.com/playlist?list=PLx")
        )

        intent = await dispatcher.dispatch(VoteNextCommand(actor=manager))

        assert intent.text == PartyMessages.NOW_PLAYING_NEXT.format(remaining=2)
        assert intent.now_playing.title == "Song X"

    async def test_vote_end_with_high_approval(self, dispatcher, manager, actor):
        await dispatcher.dispatch(SessionStartCommand(actor=manager))
        await dispatcher.dispatch(EnterCommand(actor=actor(USER_A)))
        await dispatcher.dispatch(VoteStartCommand(actor=manager, url=WATCH_URL))
        await dispatcher.dispatch(CastVoteCommand(actor=actor(USER_A), track_id=TRACK_X, score=2))

        intent = await dispatcher.dispatch(VoteEndCommand(actor=manager))

        assert intent.ephemeral is False
        assert intent.text.endswith(PartyMessages.VOTE_ENDED_HIGH_APPROVAL)
        assert "2 points from 1/1 voters (avg 2.00)" in intent.text

    async def test_vote_end_without_high_approval(self, dispatcher, manager):
        await dispatcher.dispatch(SessionStartCommand(actor=manager))
        await dispatcher.dispatch(VoteStartCommand(actor=manager, url=WATCH_URL))

        intent = await dispatcher.dispatch(VoteEndCommand(actor=manager))

        assert PartyMessages.VOTE_ENDED_HIGH_APPROVAL not in intent.text
        assert "0 points from 0/0 voters (avg 0.00)" in intent.text


class TestVoteReplies:
    async def test_cast_and_retract(self, dispatcher, manager, actor):
        await dispatcher.dispatch(SessionStartCommand(actor=manager))
        await dispatcher.dispatch(EnterCommand(actor=actor(USER_A)))
        await dispatcher.dispatch(VoteStartCommand(actor=manager, url=WATCH_URL))
        press = CastVoteCommand(actor=actor(USER_A), track_id=TRACK_X, score=1)

        cast = await dispatcher.dispatch(press)
        retracted = await dispatcher.dispatch(press)

        assert cast.ephemeral is True
        assert cast.text == PartyMessages.VOTE_CAST.format(label="👍 Nice")
        assert retracted.text == PartyMessages.VOTE_RETRACTED

    async def test_vote_without_session(self, dispatcher, actor):
        intent = await dispatcher.dispatch(
            CastVoteCommand(actor=actor(USER_A), track_id=TRACK_X, score=1)
        )

        assert intent.text == PartyMessages.REJECT_SESSION_CLOSED


class TestRosterReplies:
    async def test_kick_is_announced(self, dispatcher, manager, actor):
        await dispatcher.dispatch(SessionStartCommand(actor=manager))
        await dispatcher.dispatch(EnterCommand(actor=actor(USER_B)))

        intent = await dispatcher.dispatch(KickCommand(actor=manager, target_id=USER_B))

        assert intent.ephemeral is False
        assert intent.text == PartyMessages.KICKED.format(user_id=USER_B)

    async def test_exit_is_private(self, dispatcher, manager, actor):
        await dispatcher.dispatch(SessionStartCommand(actor=manager))
        await dispatcher.dispatch(EnterCommand(actor=actor(USER_A)))

        intent = await dispatcher.dispatch(ExitCommand(actor=actor(USER_A)))

        assert intent.ephemeral is True
        assert intent.text == PartyMessages.LEFT

    async def test_participants_listing(self, dispatcher, manager, actor):
        await dispatcher.dispatch(SessionStartCommand(actor=manager))
        await dispatcher.dispatch(EnterCommand(actor=actor(USER_A)))
        await dispatcher.dispatch(EnterCommand(actor=actor(USER_B)))

        intent = await dispatcher.dispatch(ListParticipantsCommand(actor=manager))

        assert intent.ephemeral is True
        assert intent.text == PartyMessages.PARTICIPANTS.format(
            count=2, lines=f"• <@{USER_A}>\n• <@{USER_B}>"
        )

    async def test_empty_participants_listing(self, dispatcher, manager):
        await dispatcher.dispatch(SessionStartCommand(actor=manager))

        intent = await dispatcher.dispatch(ListParticipantsCommand(actor=manager))

        assert intent.text == PartyMessages.PARTICIPANTS_EMPTY


class TestErrorMapping:
    @pytest.fixture
    def mocked_dispatcher(self, voting_settings):
        services = {
            "session_service": MagicMock(),
            "playback_service": MagicMock(),
            "voting_service": MagicMock(),
            "roster_service": MagicMock(),
        }
        return CommandDispatcher(voting_settings=voting_settings, **services), services

    async def test_corrupt_state_becomes_private_notice(self, mocked_dispatcher, manager):
        dispatcher, services = mocked_dispatcher
        services["roster_service"].list_participants = AsyncMock(
            side_effect=CorruptStateError("SESSION_PARTICIPANTS", "{oops")
        )

        intent = await dispatcher.dispatch(ListParticipantsCommand(actor=manager))

        assert intent.ephemeral is True
        assert intent.text == PartyMessages.STATE_CORRUPT

    async def test_stale_session_reads_as_closed(self, mocked_dispatcher, actor):
        dispatcher, services = mocked_dispatcher
        services["voting_service"].cast_or_toggle_vote = AsyncMock(
            side_effect=StaleSessionError(1, 2)
        )

        intent = await dispatcher.dispatch(
            CastVoteCommand(actor=actor(USER_A), track_id=TRACK_X, score=1)
        )

        assert intent.text == PartyMessages.REJECT_SESSION_CLOSED

    async def test_unexpected_errors_propagate(self, mocked_dispatcher, manager):
        dispatcher, services = mocked_dispatcher
        services["session_service"].end_session = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            await dispatcher.dispatch(SessionEndCommand(actor=manager))

    @pytest.mark.parametrize("reason", list(RejectionReason))
    async def test_each_reason_maps_to_its_message(self, mocked_dispatcher, reason):
        dispatcher, services = mocked_dispatcher
        services["roster_service"].join = AsyncMock(side_effect=PartyRejectedError(reason))

        intent = await dispatcher.dispatch(EnterCommand(actor=Actor(user_id=MANAGER)))

        assert intent.text == REJECTION_MESSAGES[reason]
        assert intent.ephemeral is True
