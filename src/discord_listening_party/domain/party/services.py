"""
Listening Party Domain Services

Pure transition rules for the party state machine. Nothing here touches the
store: application services read a snapshot, call these rules, and write the
results back.
"""

from __future__ import annotations

from collections.abc import Sequence

from discord_listening_party.domain.party.entities import (
    CurrentSong,
    History,
    SummaryLine,
    VoteMap,
    VoteTally,
)
from discord_listening_party.domain.party.value_objects import VoteOutcome
from discord_listening_party.domain.shared.exceptions import (
    PartyRejectedError,
    RejectionReason,
)


class PartyDomainService:
    """Domain service for session, tally and voting rules."""

    # An average strictly above this marks the track as a crowd favourite
    HIGH_APPROVAL_AVERAGE = 1.0

    @staticmethod
    def require_idle_session(session_active: bool, current_song: CurrentSong | None) -> None:
        """Guard shared by every transition into ``VOTING`` and by session end.

        Raises:
            PartyRejectedError: NOT_ACTIVE or VOTE_IN_PROGRESS.
        """
        if not session_active:
            raise PartyRejectedError(RejectionReason.NOT_ACTIVE)
        if current_song is not None:
            raise PartyRejectedError(RejectionReason.VOTE_IN_PROGRESS)

    @staticmethod
    def average(total_points: int, participant_count: int) -> float:
        """Points per eligible voter; 0 when nobody was eligible."""
        if participant_count == 0:
            return 0.0
        return total_points / participant_count

    @classmethod
    def tally(
        cls,
        song: CurrentSong,
        voted_users: VoteMap,
        eligible_voters: Sequence[int],
    ) -> VoteTally:
        """Close the vote on ``song`` and compute its result.

        The divisor is the size of the eligibility snapshot rather than the
        number of ballots, so abstentions pull the average down.
        """
        total_points = sum(voted_users.values())
        participant_count = len(eligible_voters)
        average = cls.average(total_points, participant_count)
        return VoteTally(
            track_id=song.id,
            title=song.title,
            total_points=total_points,
            voter_count=len(voted_users),
            participant_count=participant_count,
            average=average,
            is_high_approval=average > cls.HIGH_APPROVAL_AVERAGE,
        )

    @staticmethod
    def merge_history(history: History, tally: VoteTally) -> History:
        """Fold a tally into the session history, summing repeat plays."""
        merged = dict(history)
        key = str(tally.track_id)
        existing = merged.get(key)
        merged[key] = existing.merged(tally) if existing else tally.to_history_entry()
        return merged

    @staticmethod
    def summarize(history: History) -> list[SummaryLine]:
        """Rank tracks by average, highest first; ties keep history order."""
        lines = [
            SummaryLine(
                track_id=track_id,
                title=entry.title,
                average=entry.average,
                voter_count=entry.voter_count,
                participant_count=entry.participant_count,
            )
            for track_id, entry in history.items()
        ]
        return sorted(lines, key=lambda line: line.average, reverse=True)

    @staticmethod
    def toggle_vote(voted_users: VoteMap, user_id: int, score: int) -> tuple[VoteMap, VoteOutcome]:
        """Apply a button press to the vote map.

        Pressing the same score again retracts the vote; a different score
        replaces it.
        """
        updated = dict(voted_users)
        previous = updated.get(user_id)

        if previous == score:
            del updated[user_id]
            return updated, VoteOutcome.RETRACTED

        updated[user_id] = score
        if previous is None:
            return updated, VoteOutcome.CAST
        return updated, VoteOutcome.REPLACED
