"""
Listening Party Bounded Context

Domain logic for sessions, the shared queue, eligibility snapshots, scored
votes and the per-session history.
"""

from discord_listening_party.domain.party.entities import (
    CurrentSong,
    CurrentSongView,
    HistoryEntry,
    QueuedTrack,
    SummaryLine,
    VoteTally,
)
from discord_listening_party.domain.party.repository import KeyValueStore, PartyStateRepository
from discord_listening_party.domain.party.services import PartyDomainService
from discord_listening_party.domain.party.value_objects import (
    PlaylistId,
    StateKey,
    TrackId,
    VoteOutcome,
)

__all__ = [
    # Entities
    "CurrentSong",
    "CurrentSongView",
    "HistoryEntry",
    "QueuedTrack",
    "SummaryLine",
    "VoteTally",
    # Value Objects
    "PlaylistId",
    "StateKey",
    "TrackId",
    "VoteOutcome",
    # Repository
    "KeyValueStore",
    "PartyStateRepository",
    # Services
    "PartyDomainService",
]
