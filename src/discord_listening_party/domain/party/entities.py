"""Core domain entities for the listening party bounded context.

Every entity here is persisted as its own record in the flat state store and
serialized with camelCase field names, e.g. a history entry is stored as
``{"title": ..., "totalPoints": 3, "voterCount": 2, "participantCount": 2}``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from discord_listening_party.domain.party.value_objects import TrackId, TrackIdField
from discord_listening_party.domain.shared.types import (
    DiscordSnowflake,
    NonNegativeFloat,
    NonNegativeInt,
    ScoreInt,
    TrackTitleStr,
)

_STORED = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
    extra="ignore",
)

UserIds = list[DiscordSnowflake]
"""Ordered set of user IDs (participants, eligible voters)."""

VoteMap = dict[DiscordSnowflake, ScoreInt]
"""user ID -> score for the track currently open for voting."""


class QueuedTrack(BaseModel):
    """A pending track with metadata already resolved by the catalog."""

    model_config = _STORED

    id: TrackIdField
    title: TrackTitleStr
    thumbnail: str | None = None


class CurrentSong(BaseModel):
    """The track currently open for voting."""

    model_config = _STORED

    id: TrackIdField
    title: TrackTitleStr
    thumbnail: str | None = None

    @classmethod
    def from_queued(cls, track: QueuedTrack) -> CurrentSong:
        return cls(id=track.id, title=track.title, thumbnail=track.thumbnail)

    def is_track(self, track_id: TrackId | str) -> bool:
        return str(self.id) == str(track_id)


class HistoryEntry(BaseModel):
    """Per-track accumulator for the whole session.

    ``participant_count`` sums the eligible-voter count of every vote on the
    track, so ``average`` measures points per potential voter, not per ballot.
    """

    model_config = _STORED

    title: TrackTitleStr
    total_points: NonNegativeInt = 0
    voter_count: NonNegativeInt = 0
    participant_count: NonNegativeInt = 0

    @property
    def average(self) -> float:
        if self.participant_count == 0:
            return 0.0
        return self.total_points / self.participant_count

    def merged(self, tally: VoteTally) -> HistoryEntry:
        """Return a copy with the tally's counters added."""
        return self.model_copy(
            update={
                "total_points": self.total_points + tally.total_points,
                "voter_count": self.voter_count + tally.voter_count,
                "participant_count": self.participant_count + tally.participant_count,
            }
        )


History = dict[str, HistoryEntry]
"""track ID -> accumulated results, in first-voted order."""


class VoteTally(BaseModel):
    """Result of closing the vote on one track."""

    model_config = ConfigDict(frozen=True)

    track_id: TrackIdField
    title: TrackTitleStr
    total_points: NonNegativeInt
    voter_count: NonNegativeInt
    participant_count: NonNegativeInt
    average: NonNegativeFloat
    is_high_approval: bool = False

    def to_history_entry(self) -> HistoryEntry:
        return HistoryEntry(
            title=self.title,
            total_points=self.total_points,
            voter_count=self.voter_count,
            participant_count=self.participant_count,
        )


class SummaryLine(BaseModel):
    """One ranked row of the end-of-session recap."""

    model_config = ConfigDict(frozen=True)

    track_id: str
    title: TrackTitleStr
    average: NonNegativeFloat
    voter_count: NonNegativeInt
    participant_count: NonNegativeInt = 0


class CurrentSongView(BaseModel):
    """Presentation-neutral description of a track that just opened for voting."""

    model_config = ConfigDict(frozen=True)

    track_id: TrackIdField
    title: TrackTitleStr
    url: str
    thumbnail_url: str
    eligible_count: NonNegativeInt = 0
    remaining_in_queue: NonNegativeInt | None = Field(default=None)

    @classmethod
    def of(
        cls,
        song: CurrentSong,
        *,
        eligible_count: int,
        remaining_in_queue: int | None = None,
    ) -> CurrentSongView:
        track_id = song.id
        return cls(
            track_id=track_id,
            title=song.title,
            url=track_id.watch_url,
            thumbnail_url=song.thumbnail or track_id.thumbnail_url,
            eligible_count=eligible_count,
            remaining_in_queue=remaining_in_queue,
        )
