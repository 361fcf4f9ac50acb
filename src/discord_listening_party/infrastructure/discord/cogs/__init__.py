"""Discord cogs - command handlers."""

from discord_listening_party.infrastructure.discord.cogs.party_cog import PartyCog

__all__ = ["PartyCog"]
