"""Discord UI views and components."""

from __future__ import annotations

from discord_listening_party.infrastructure.discord.views.vote_button import VoteButton

__all__ = ["VoteButton"]
