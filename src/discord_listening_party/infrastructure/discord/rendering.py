"""Turns presentation-neutral response intents into discord.py message kwargs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import discord

from discord_listening_party.infrastructure.discord.views.vote_button import VoteButton
from discord_listening_party.utils.reply import (
    EMBED_TITLE_LIMIT,
    MESSAGE_CONTENT_LIMIT,
    truncate,
)

if TYPE_CHECKING:
    from ...application.commands.responses import ResponseIntent, VoteOption
    from ...domain.party.entities import CurrentSongView

NOW_PLAYING_COLOR = discord.Color(0xFF0000)


def build_now_playing_embed(song: CurrentSongView) -> discord.Embed:
    embed = discord.Embed(
        title=truncate(song.title, EMBED_TITLE_LIMIT),
        url=song.url,
        color=NOW_PLAYING_COLOR,
    )
    embed.set_image(url=song.thumbnail_url)
    return embed


def build_vote_view(options: tuple[VoteOption, ...]) -> discord.ui.View:
    # No timeout: the buttons are DynamicItems and are re-bound after restarts.
    view = discord.ui.View(timeout=None)
    for option in options:
        view.add_item(VoteButton(option.track_id, option.score, option.label))
    return view


def render_intent(intent: ResponseIntent) -> dict[str, Any]:
    kwargs: dict[str, Any] = {
        "content": truncate(intent.text, MESSAGE_CONTENT_LIMIT),
        "ephemeral": intent.ephemeral,
    }
    if intent.now_playing is not None:
        kwargs["embed"] = build_now_playing_embed(intent.now_playing)
    if intent.options:
        kwargs["view"] = build_vote_view(intent.options)
    return kwargs


async def send_intent(interaction: discord.Interaction, intent: ResponseIntent) -> None:
    """Reply to ``interaction``, or follow up if it was already deferred."""
    kwargs = render_intent(intent)
    if interaction.response.is_done():
        await interaction.followup.send(**kwargs)
    else:
        await interaction.response.send_message(**kwargs)
