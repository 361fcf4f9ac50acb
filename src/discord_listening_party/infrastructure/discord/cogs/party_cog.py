"""Slash-command cog for the listening party."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from discord_listening_party.application.commands.party_commands import (
    Actor,
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
from discord_listening_party.domain.shared.messages import ErrorMessages
from discord_listening_party.infrastructure.discord.guards.manager_guards import (
    build_actor,
    get_member,
)
from discord_listening_party.infrastructure.discord.rendering import send_intent

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


class PartyCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    async def _actor(self, interaction: discord.Interaction) -> Actor | None:
        member = await get_member(interaction)
        if member is None:
            return None
        return build_actor(member, self.container.settings.discord.manager_user_ids)

    async def _dispatch(
        self,
        interaction: discord.Interaction,
        command: PartyCommand,
        *,
        defer: bool = False,
    ) -> None:
        # Catalog lookups can outlive the interaction's initial response window.
        deferred = defer and not interaction.response.is_done()
        if deferred:
            await interaction.response.defer(thinking=True)
        intent = await self.container.dispatcher.dispatch(command)
        if deferred and intent.ephemeral:
            # Followups to a public "thinking" message stay public.
            await interaction.delete_original_response()
        await send_intent(interaction, intent)

    # ── session ─────────────────────────────────────────────────────

    @app_commands.command(name="session-start", description="Start a listening session.")
    @app_commands.describe(playlist="YouTube playlist link to queue up (optional)")
    async def session_start(
        self, interaction: discord.Interaction, playlist: str | None = None
    ) -> None:
        actor = await self._actor(interaction)
        if actor is None:
            return
        command = SessionStartCommand(actor=actor, playlist_ref=playlist)
        await self._dispatch(interaction, command, defer=bool(playlist) and actor.is_authorized)

    @app_commands.command(name="session-end", description="End the session and show the results.")
    async def session_end(self, interaction: discord.Interaction) -> None:
        actor = await self._actor(interaction)
        if actor is None:
            return
        await self._dispatch(interaction, SessionEndCommand(actor=actor))

    # ── playback ────────────────────────────────────────────────────

    @app_commands.command(name="vote-start", description="Play a YouTube video and open voting.")
    @app_commands.describe(url="YouTube video link")
    async def vote_start(self, interaction: discord.Interaction, url: str) -> None:
        actor = await self._actor(interaction)
        if actor is None:
            return
        command = VoteStartCommand(actor=actor, url=url)
        await self._dispatch(interaction, command, defer=actor.is_authorized)

    @app_commands.command(name="vote-next", description="Play the next queued song and open voting.")
    async def vote_next(self, interaction: discord.Interaction) -> None:
        actor = await self._actor(interaction)
        if actor is None:
            return
        await self._dispatch(interaction, VoteNextCommand(actor=actor))

    @app_commands.command(name="vote-end", description="Close voting on the current song.")
    async def vote_end(self, interaction: discord.Interaction) -> None:
        actor = await self._actor(interaction)
        if actor is None:
            return
        await self._dispatch(interaction, VoteEndCommand(actor=actor))

    # ── roster ──────────────────────────────────────────────────────

    @app_commands.command(name="enter", description="Join the listening session.")
    async def enter(self, interaction: discord.Interaction) -> None:
        actor = await self._actor(interaction)
        if actor is None:
            return
        await self._dispatch(interaction, EnterCommand(actor=actor))

    @app_commands.command(name="exit", description="Leave the listening session.")
    async def exit(self, interaction: discord.Interaction) -> None:
        actor = await self._actor(interaction)
        if actor is None:
            return
        await self._dispatch(interaction, ExitCommand(actor=actor))

    @app_commands.command(name="kick", description="Remove a user from the session.")
    @app_commands.describe(user="The participant to remove")
    async def kick(self, interaction: discord.Interaction, user: discord.Member) -> None:
        actor = await self._actor(interaction)
        if actor is None:
            return
        await self._dispatch(interaction, KickCommand(actor=actor, target_id=user.id))

    @app_commands.command(name="participants", description="List everyone in the session.")
    async def participants(self, interaction: discord.Interaction) -> None:
        actor = await self._actor(interaction)
        if actor is None:
            return
        await self._dispatch(interaction, ListParticipantsCommand(actor=actor))


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(PartyCog(bot, container))
