"""Tests for VotingService."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from conftest import TRACK_X, TRACK_Y, USER_A, USER_B, USER_C
from discord_listening_party.application.services.voting_service import VotingService
from discord_listening_party.domain.party.entities import CurrentSong
from discord_listening_party.domain.party.value_objects import TrackId, VoteOutcome
from discord_listening_party.domain.shared.exceptions import (
    PartyRejectedError,
    RejectionReason,
    StaleSessionError,
)


@pytest.fixture
async def open_vote(state_repository):
    """Active session with A and B eligible on TRACK_X; C joined afterwards."""
    await state_repository.bump_generation()
    await state_repository.set_session_active(True)
    await state_repository.save_participants([USER_A, USER_B, USER_C])
    await state_repository.save_eligible_voters([USER_A, USER_B])
    await state_repository.save_voted_users({})
    await state_repository.save_current_song(CurrentSong(id=TrackId(TRACK_X), title="Song X"))
    return state_repository


async def _reason(coro) -> RejectionReason:
    with pytest.raises(PartyRejectedError) as exc_info:
        await coro
    return exc_info.value.reason


class TestToggle:
    async def test_first_press_casts(self, voting_service, open_vote):
        result = await voting_service.cast_or_toggle_vote(USER_A, TRACK_X, 1)

        assert result.outcome is VoteOutcome.CAST
        assert await open_vote.get_voted_users() == {USER_A: 1}

    async def test_different_score_replaces(self, voting_service, open_vote):
        await voting_service.cast_or_toggle_vote(USER_A, TRACK_X, 1)

        result = await voting_service.cast_or_toggle_vote(USER_A, TRACK_X, 2)

        assert result.outcome is VoteOutcome.REPLACED
        assert await open_vote.get_voted_users() == {USER_A: 2}

    async def test_same_score_retracts(self, voting_service, open_vote):
        await voting_service.cast_or_toggle_vote(USER_A, TRACK_X, 2)

        result = await voting_service.cast_or_toggle_vote(USER_A, TRACK_X, 2)

        assert result.outcome is VoteOutcome.RETRACTED
        assert await open_vote.get_voted_users() == {}

    async def test_votes_of_other_users_are_kept(self, voting_service, open_vote):
        await voting_service.cast_or_toggle_vote(USER_A, TRACK_X, 2)
        await voting_service.cast_or_toggle_vote(USER_B, TRACK_X, 1)

        assert await open_vote.get_voted_users() == {USER_A: 2, USER_B: 1}


class TestGuards:
    async def test_session_closed(self, voting_service, open_vote):
        await open_vote.set_session_active(False)

        reason = await _reason(voting_service.cast_or_toggle_vote(USER_A, TRACK_X, 1))

        assert reason is RejectionReason.SESSION_CLOSED

    async def test_session_closed_checked_before_vote_closed(self, voting_service, open_vote):
        await open_vote.set_session_active(False)
        await open_vote.clear_current_song()

        reason = await _reason(voting_service.cast_or_toggle_vote(USER_A, TRACK_X, 1))

        assert reason is RejectionReason.SESSION_CLOSED

    async def test_no_song_open(self, voting_service, open_vote):
        await open_vote.clear_current_song()

        reason = await _reason(voting_service.cast_or_toggle_vote(USER_A, TRACK_X, 1))

        assert reason is RejectionReason.VOTE_CLOSED

    async def test_button_from_previous_track(self, voting_service, open_vote):
        reason = await _reason(voting_service.cast_or_toggle_vote(USER_A, TRACK_Y, 1))

        assert reason is RejectionReason.VOTE_CLOSED

    async def test_not_a_participant(self, voting_service, open_vote):
        reason = await _reason(voting_service.cast_or_toggle_vote(555, TRACK_X, 1))

        assert reason is RejectionReason.NOT_A_PARTICIPANT

    async def test_joined_after_vote_opened(self, voting_service, open_vote):
        reason = await _reason(voting_service.cast_or_toggle_vote(USER_C, TRACK_X, 1))

        assert reason is RejectionReason.NOT_ELIGIBLE

    @pytest.mark.parametrize("score", [3, 100])
    async def test_score_outside_option_set(self, voting_service, open_vote, kv_store, score):
        kv_store.writes.clear()

        reason = await _reason(voting_service.cast_or_toggle_vote(USER_A, TRACK_X, score))

        assert reason is RejectionReason.INVALID_SCORE
        assert kv_store.writes == []
        assert await open_vote.get_voted_users() == {}

    async def test_configured_scores_accepted(self, state_repository, open_vote):
        service = VotingService(state_repository=state_repository, allowed_scores=(1, 5))

        result = await service.cast_or_toggle_vote(USER_A, TRACK_X, 5)

        assert result.outcome is VoteOutcome.CAST
        assert await _reason(service.cast_or_toggle_vote(USER_B, TRACK_X, 2)) is (
            RejectionReason.INVALID_SCORE
        )

    async def test_rejection_writes_nothing(self, voting_service, open_vote, kv_store):
        kv_store.writes.clear()

        await _reason(voting_service.cast_or_toggle_vote(USER_C, TRACK_X, 1))

        assert kv_store.writes == []


class TestConcurrency:
    async def test_stale_generation_aborts_write(self, voting_service, open_vote, kv_store):
        open_vote.ensure_generation = AsyncMock(side_effect=StaleSessionError(1, 2))
        kv_store.writes.clear()

        with pytest.raises(StaleSessionError):
            await voting_service.cast_or_toggle_vote(USER_A, TRACK_X, 1)

        assert kv_store.writes == []

    async def test_restart_during_vote_is_detected(self, voting_service, open_vote):
        original_get_voted_users = open_vote.get_voted_users

        async def restart_then_read():
            votes = await original_get_voted_users()
            await open_vote.bump_generation()
            return votes

        open_vote.get_voted_users = restart_then_read

        with pytest.raises(StaleSessionError) as exc_info:
            await voting_service.cast_or_toggle_vote(USER_A, TRACK_X, 1)

        assert exc_info.value.expected == 1
        assert exc_info.value.actual == 2

    async def test_serialized_concurrent_votes_are_all_kept(self, voting_service, open_vote):
        await asyncio.gather(
            voting_service.cast_or_toggle_vote(USER_A, TRACK_X, 2),
            voting_service.cast_or_toggle_vote(USER_B, TRACK_X, 1),
        )

        assert await open_vote.get_voted_users() == {USER_A: 2, USER_B: 1}

    async def test_unserialized_votes_still_apply_sequentially(self, state_repository, open_vote):
        service = VotingService(state_repository=state_repository, serialize_votes=False)

        await service.cast_or_toggle_vote(USER_A, TRACK_X, 2)
        await service.cast_or_toggle_vote(USER_B, TRACK_X, 1)

        assert await open_vote.get_voted_users() == {USER_A: 2, USER_B: 1}
