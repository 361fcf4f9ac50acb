"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the store, the party services, and the
command dispatcher. Components are created on-demand and cached for reuse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.commands.dispatcher import CommandDispatcher
    from ..application.interfaces.catalog import TrackCatalog
    from ..application.services.playback_service import PlaybackApplicationService
    from ..application.services.roster_service import RosterService
    from ..application.services.session_service import SessionLifecycleService
    from ..application.services.voting_service import VotingService
    from ..domain.party.repository import KeyValueStore, PartyStateRepository
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed.
    """

    settings: Settings
    _bot: Bot | None = None

    # Persistence layer
    _database: Database | None = None
    _kv_store: KeyValueStore | None = None
    _state_repository: PartyStateRepository | None = None

    # Infrastructure adapters
    _catalog: TrackCatalog | None = None

    # Application services
    _session_service: SessionLifecycleService | None = None
    _playback_service: PlaybackApplicationService | None = None
    _voting_service: VotingService | None = None
    _roster_service: RosterService | None = None

    # Command routing
    _dispatcher: CommandDispatcher | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Persistence ===

    @property
    def database(self) -> Database:
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, settings=self.settings.database)
        return self._database

    @property
    def kv_store(self) -> KeyValueStore:
        if self._kv_store is None:
            from ..infrastructure.persistence.kv_store import SQLiteKeyValueStore

            self._kv_store = SQLiteKeyValueStore(self.database)
        return self._kv_store

    @property
    def state_repository(self) -> PartyStateRepository:
        """Get the typed party state repository."""
        if self._state_repository is None:
            from ..infrastructure.persistence.repositories.party_state_repository import (
                KeyValuePartyStateRepository,
            )

            self._state_repository = KeyValuePartyStateRepository(self.kv_store)
        return self._state_repository

    # === Infrastructure Adapters ===

    @property
    def catalog(self) -> TrackCatalog:
        """Get the track catalog selected by ``catalog.backend``."""
        if self._catalog is None:
            backend = self.settings.catalog.backend
            if backend == "youtube_api":
                from ..infrastructure.catalog.youtube_api_catalog import YouTubeDataApiCatalog

                self._catalog = YouTubeDataApiCatalog(self.settings.catalog)
            else:
                from ..infrastructure.catalog.ytdlp_catalog import YtDlpCatalog

                self._catalog = YtDlpCatalog(self.settings.catalog)
            logger.info(LogTemplates.CATALOG_BACKEND_SELECTED, backend)
        return self._catalog

    # === Application Services ===

    @property
    def session_service(self) -> SessionLifecycleService:
        if self._session_service is None:
            from ..application.services.session_service import SessionLifecycleService

            self._session_service = SessionLifecycleService(
                state_repository=self.state_repository,
                catalog=self.catalog,
            )
        return self._session_service

    @property
    def playback_service(self) -> PlaybackApplicationService:
        if self._playback_service is None:
            from ..application.services.playback_service import PlaybackApplicationService

            self._playback_service = PlaybackApplicationService(
                state_repository=self.state_repository,
                catalog=self.catalog,
                placeholder_title=self.settings.catalog.placeholder_title,
            )
        return self._playback_service

    @property
    def voting_service(self) -> VotingService:
        if self._voting_service is None:
            from ..application.services.voting_service import VotingService

            self._voting_service = VotingService(
                state_repository=self.state_repository,
                allowed_scores=self.settings.voting.scores,
                serialize_votes=self.settings.voting.serialize_votes,
            )
        return self._voting_service

    @property
    def roster_service(self) -> RosterService:
        if self._roster_service is None:
            from ..application.services.roster_service import RosterService

            self._roster_service = RosterService(state_repository=self.state_repository)
        return self._roster_service

    # === Command Routing ===

    @property
    def dispatcher(self) -> CommandDispatcher:
        """Get the command dispatcher."""
        if self._dispatcher is None:
            from ..application.commands.dispatcher import CommandDispatcher

            self._dispatcher = CommandDispatcher(
                session_service=self.session_service,
                playback_service=self.playback_service,
                voting_service=self.voting_service,
                roster_service=self.roster_service,
                voting_settings=self.settings.voting,
            )
        return self._dispatcher

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources."""
        await self.database.initialize()

    async def shutdown(self) -> None:
        """Shutdown and cleanup all resources."""
        if self._catalog is not None:
            try:
                await self._catalog.close()
            except Exception as exc:
                logger.warning(LogTemplates.BOT_CONTAINER_SHUTDOWN_ERROR, exc)

        if self._database is not None:
            await self._database.close()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
