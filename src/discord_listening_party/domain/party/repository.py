"""
Listening Party Repository Interfaces

Abstract base classes defining the contracts for party state persistence.
"""

from abc import ABC, abstractmethod

from discord_listening_party.domain.party.entities import (
    CurrentSong,
    History,
    QueuedTrack,
    UserIds,
    VoteMap,
)


class KeyValueStore(ABC):
    """Flat string key-value store with per-key atomicity only.

    There are no multi-key transactions and no compare-and-swap; callers
    must follow a read-validate-write discipline.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """Create or overwrite a key."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key. Deleting an absent key is a no-op."""
        ...


class PartyStateRepository(ABC):
    """Typed access to each party record.

    Collection records read as empty when absent. ``CURRENT_SONG`` reads as
    None when absent or emptied. Undecodable values raise
    ``CorruptStateError`` instead of being coerced.
    """

    # Session flag and generation

    @abstractmethod
    async def is_session_active(self) -> bool: ...

    @abstractmethod
    async def set_session_active(self, active: bool) -> None: ...

    @abstractmethod
    async def get_generation(self) -> int:
        """Return the current session generation (0 before the first session)."""
        ...

    @abstractmethod
    async def bump_generation(self) -> int:
        """Advance the session generation and return the new value."""
        ...

    @abstractmethod
    async def ensure_generation(self, expected: int) -> None:
        """Raise ``StaleSessionError`` if the generation is no longer ``expected``."""
        ...

    # Queue

    @abstractmethod
    async def get_queue(self) -> list[QueuedTrack]: ...

    @abstractmethod
    async def save_queue(self, queue: list[QueuedTrack]) -> None: ...

    @abstractmethod
    async def clear_queue(self) -> None: ...

    # Current song

    @abstractmethod
    async def get_current_song(self) -> CurrentSong | None: ...

    @abstractmethod
    async def save_current_song(self, song: CurrentSong) -> None: ...

    @abstractmethod
    async def clear_current_song(self) -> None: ...

    # Roster and eligibility

    @abstractmethod
    async def get_participants(self) -> UserIds: ...

    @abstractmethod
    async def save_participants(self, participants: UserIds) -> None: ...

    @abstractmethod
    async def clear_participants(self) -> None: ...

    @abstractmethod
    async def get_eligible_voters(self) -> UserIds: ...

    @abstractmethod
    async def save_eligible_voters(self, voters: UserIds) -> None: ...

    @abstractmethod
    async def clear_eligible_voters(self) -> None: ...

    # Votes on the current song

    @abstractmethod
    async def get_voted_users(self) -> VoteMap: ...

    @abstractmethod
    async def save_voted_users(self, votes: VoteMap) -> None: ...

    @abstractmethod
    async def clear_voted_users(self) -> None: ...

    # Session history

    @abstractmethod
    async def get_history(self) -> History: ...

    @abstractmethod
    async def save_history(self, history: History) -> None: ...

    @abstractmethod
    async def clear_history(self) -> None: ...
