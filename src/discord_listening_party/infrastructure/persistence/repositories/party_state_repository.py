"""Typed party state on top of the flat key-value store.

Each entity lives under its own key as a JSON document. Decoding goes through
pydantic ``TypeAdapter``s; anything that fails validation surfaces as
``CorruptStateError`` so invariant violations are never silently papered over.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Final, TypeVar

from pydantic import TypeAdapter, ValidationError

from discord_listening_party.domain.party.entities import (
    CurrentSong,
    History,
    QueuedTrack,
    UserIds,
    VoteMap,
)
from discord_listening_party.domain.party.repository import PartyStateRepository
from discord_listening_party.domain.party.value_objects import StateKey
from discord_listening_party.domain.shared.exceptions import (
    CorruptStateError,
    StaleSessionError,
)
from discord_listening_party.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ....domain.party.repository import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRUE: Final[str] = "true"
FALSE: Final[str] = "false"

_QUEUE: Final = TypeAdapter(list[QueuedTrack])
_CURRENT_SONG: Final = TypeAdapter(CurrentSong)
_USER_IDS: Final = TypeAdapter(UserIds)
_VOTES: Final = TypeAdapter(VoteMap)
_HISTORY: Final = TypeAdapter(History)


class KeyValuePartyStateRepository(PartyStateRepository):
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    # ── codec helpers ───────────────────────────────────────────────

    async def _read(self, key: StateKey, adapter: TypeAdapter[T], empty: Callable[[], T]) -> T:
        raw = await self._store.get(key.value)
        if raw is None or raw == "":
            return empty()
        try:
            return adapter.validate_json(raw)
        except ValidationError as exc:
            raise CorruptStateError(key.value, raw, exc.errors()[0]["msg"]) from exc

    async def _write(self, key: StateKey, adapter: TypeAdapter[T], value: T) -> None:
        encoded = adapter.dump_json(value, by_alias=True).decode()
        await self._store.put(key.value, encoded)

    async def _delete(self, key: StateKey) -> None:
        await self._store.delete(key.value)

    # ── session flag and generation ─────────────────────────────────

    async def is_session_active(self) -> bool:
        raw = await self._store.get(StateKey.SESSION_ACTIVE.value)
        if raw is None or raw == FALSE:
            return False
        if raw == TRUE:
            return True
        raise CorruptStateError(StateKey.SESSION_ACTIVE.value, raw, "expected 'true' or 'false'")

    async def set_session_active(self, active: bool) -> None:
        await self._store.put(StateKey.SESSION_ACTIVE.value, TRUE if active else FALSE)

    async def get_generation(self) -> int:
        raw = await self._store.get(StateKey.SESSION_GENERATION.value)
        if raw is None:
            return 0
        try:
            generation = int(raw)
        except ValueError as exc:
            raise CorruptStateError(
                StateKey.SESSION_GENERATION.value, raw, "expected an integer"
            ) from exc
        if generation < 0:
            raise CorruptStateError(StateKey.SESSION_GENERATION.value, raw, "negative generation")
        return generation

    async def bump_generation(self) -> int:
        generation = await self.get_generation() + 1
        await self._store.put(StateKey.SESSION_GENERATION.value, str(generation))
        logger.debug(LogTemplates.SESSION_GENERATION_BUMPED, generation)
        return generation

    async def ensure_generation(self, expected: int) -> None:
        actual = await self.get_generation()
        if actual != expected:
            raise StaleSessionError(expected, actual)

    # ── queue ───────────────────────────────────────────────────────

    async def get_queue(self) -> list[QueuedTrack]:
        return await self._read(StateKey.QUEUE, _QUEUE, list)

    async def save_queue(self, queue: list[QueuedTrack]) -> None:
        await self._write(StateKey.QUEUE, _QUEUE, queue)

    async def clear_queue(self) -> None:
        await self._delete(StateKey.QUEUE)

    # ── current song ────────────────────────────────────────────────

    async def get_current_song(self) -> CurrentSong | None:
        return await self._read(StateKey.CURRENT_SONG, _CURRENT_SONG, lambda: None)  # type: ignore[arg-type]

    async def save_current_song(self, song: CurrentSong) -> None:
        await self._write(StateKey.CURRENT_SONG, _CURRENT_SONG, song)

    async def clear_current_song(self) -> None:
        await self._delete(StateKey.CURRENT_SONG)

    # ── roster and eligibility ──────────────────────────────────────

    async def get_participants(self) -> UserIds:
        return await self._read(StateKey.SESSION_PARTICIPANTS, _USER_IDS, list)

    async def save_participants(self, participants: UserIds) -> None:
        await self._write(StateKey.SESSION_PARTICIPANTS, _USER_IDS, participants)

    async def clear_participants(self) -> None:
        await self._delete(StateKey.SESSION_PARTICIPANTS)

    async def get_eligible_voters(self) -> UserIds:
        return await self._read(StateKey.ELIGIBLE_VOTERS, _USER_IDS, list)

    async def save_eligible_voters(self, voters: UserIds) -> None:
        await self._write(StateKey.ELIGIBLE_VOTERS, _USER_IDS, voters)

    async def clear_eligible_voters(self) -> None:
        await self._delete(StateKey.ELIGIBLE_VOTERS)

    # ── votes ───────────────────────────────────────────────────────

    async def get_voted_users(self) -> VoteMap:
        return await self._read(StateKey.VOTED_USERS, _VOTES, dict)

    async def save_voted_users(self, votes: VoteMap) -> None:
        await self._write(StateKey.VOTED_USERS, _VOTES, votes)

    async def clear_voted_users(self) -> None:
        await self._delete(StateKey.VOTED_USERS)

    # ── history ─────────────────────────────────────────────────────

    async def get_history(self) -> History:
        return await self._read(StateKey.HISTORY, _HISTORY, dict)

    async def save_history(self, history: History) -> None:
        await self._write(StateKey.HISTORY, _HISTORY, history)

    async def clear_history(self) -> None:
        await self._delete(StateKey.HISTORY)
