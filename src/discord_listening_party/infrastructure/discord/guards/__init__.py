"""Guard functions for Discord cogs and components."""

from discord_listening_party.infrastructure.discord.guards.manager_guards import (
    build_actor,
    get_member,
    is_manager,
    send_ephemeral,
)

__all__ = [
    "build_actor",
    "get_member",
    "is_manager",
    "send_ephemeral",
]
