import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from discord_listening_party.domain.party.repository import KeyValueStore

TRACK_X = "dQw4w9WgXcQ"
TRACK_Y = "9bZkp7q19f0"
TRACK_Z = "kJQP7kiw5Fk"

USER_A = 101
USER_B = 202
USER_C = 303
MANAGER = 999


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store that yields to the event loop on every call, like real I/O."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str | None]] = []

    async def get(self, key: str) -> str | None:
        await asyncio.sleep(0)
        return self.data.get(key)

    async def put(self, key: str, value: str) -> None:
        await asyncio.sleep(0)
        self.data[key] = value
        self.writes.append((key, value))

    async def delete(self, key: str) -> None:
        await asyncio.sleep(0)
        self.data.pop(key, None)
        self.writes.append((key, None))


# ============================================================================
# Store and Repository Fixtures
# ============================================================================


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def state_repository(kv_store):
    from discord_listening_party.infrastructure.persistence.repositories.party_state_repository import (
        KeyValuePartyStateRepository,
    )

    return KeyValuePartyStateRepository(kv_store)


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from discord_listening_party.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def sqlite_kv_store(in_memory_database):
    from discord_listening_party.infrastructure.persistence.kv_store import SQLiteKeyValueStore

    return SQLiteKeyValueStore(in_memory_database)


# ============================================================================
# Catalog Fixtures
# ============================================================================


@pytest.fixture
def catalog():
    """Catalog double: every title resolves, playlists are empty unless configured."""
    fake = MagicMock()
    fake.lookup_title = AsyncMock(return_value="Resolved Title")
    fake.resolve_playlist = AsyncMock(return_value=[])
    fake.close = AsyncMock()
    return fake


@pytest.fixture
def playlist_tracks():
    from discord_listening_party.domain.party.entities import QueuedTrack
    from discord_listening_party.domain.party.value_objects import TrackId

    return [
        QueuedTrack(id=TrackId(TRACK_X), title="Song X", thumbnail="https://img/x.jpg"),
        QueuedTrack(id=TrackId(TRACK_Y), title="Song Y"),
        QueuedTrack(id=TrackId(TRACK_Z), title="Song Z"),
    ]


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def session_service(state_repository, catalog):
    from discord_listening_party.application.services.session_service import (
        SessionLifecycleService,
    )

    return SessionLifecycleService(state_repository=state_repository, catalog=catalog)


@pytest.fixture
def playback_service(state_repository, catalog):
    from discord_listening_party.application.services.playback_service import (
        PlaybackApplicationService,
    )

    return PlaybackApplicationService(state_repository=state_repository, catalog=catalog)


@pytest.fixture
def voting_service(state_repository):
    from discord_listening_party.application.services.voting_service import VotingService

    return VotingService(state_repository=state_repository)


@pytest.fixture
def roster_service(state_repository):
    from discord_listening_party.application.services.roster_service import RosterService

    return RosterService(state_repository=state_repository)


@pytest.fixture
def voting_settings():
    from discord_listening_party.config.settings import VotingSettings

    return VotingSettings()


@pytest.fixture
def dispatcher(session_service, playback_service, voting_service, roster_service, voting_settings):
    from discord_listening_party.application.commands.dispatcher import CommandDispatcher

    return CommandDispatcher(
        session_service=session_service,
        playback_service=playback_service,
        voting_service=voting_service,
        roster_service=roster_service,
        voting_settings=voting_settings,
    )


# ============================================================================
# Helpers
# ============================================================================


@pytest.fixture
def actor():
    from discord_listening_party.application.commands.party_commands import Actor

    def _make(user_id: int = USER_A, *, authorized: bool = False) -> Actor:
        return Actor(user_id=user_id, is_authorized=authorized)

    return _make


@pytest.fixture
def manager(actor):
    return actor(MANAGER, authorized=True)
