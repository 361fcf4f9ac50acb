"""Reusable guard functions for party slash commands and buttons.

These are free functions that accept explicit dependencies rather than relying
on a specific cog instance, making them usable from cogs and dynamic items.
"""

from __future__ import annotations

from collections.abc import Collection

import discord

from discord_listening_party.application.commands.party_commands import Actor
from discord_listening_party.domain.shared.messages import PartyMessages


async def send_ephemeral(interaction: discord.Interaction, message: str) -> None:
    """Send an ephemeral message, handling both fresh and already-responded interactions."""
    if interaction.response.is_done():
        await interaction.followup.send(message, ephemeral=True)
    else:
        await interaction.response.send_message(message, ephemeral=True)


async def get_member(interaction: discord.Interaction) -> discord.Member | None:
    """Return the invoking guild member, replying with an error outside guilds."""
    user = interaction.user
    if interaction.guild is None or not isinstance(user, discord.Member):
        await send_ephemeral(interaction, PartyMessages.GUILD_ONLY)
        return None
    return user


def is_manager(user: discord.abc.User, manager_ids: Collection[int]) -> bool:
    """Check if the user is a configured session manager or a guild admin."""
    if user.id in manager_ids:
        return True
    if isinstance(user, discord.Member):
        return user.guild_permissions.administrator
    return False


def build_actor(user: discord.abc.User, manager_ids: Collection[int]) -> Actor:
    return Actor(user_id=user.id, is_authorized=is_manager(user, manager_ids))
