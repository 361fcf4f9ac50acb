"""Persistent vote button bound to one track and one score."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

import discord
from pydantic import ValidationError

from discord_listening_party.application.commands.party_commands import CastVoteCommand
from discord_listening_party.domain.shared.messages import (
    ErrorMessages,
    LogTemplates,
    PartyMessages,
)
from discord_listening_party.infrastructure.discord.guards.manager_guards import (
    build_actor,
    send_ephemeral,
)

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)

CUSTOM_ID_TEMPLATE = "vote:{track_id}:{score}"


class VoteButton(
    discord.ui.DynamicItem[discord.ui.Button[Any]],
    template=r"vote:(?P<track_id>[A-Za-z0-9_-]+):(?P<score>[0-9]+)",
):
    """Vote button whose whole state lives in its ``custom_id``.

    Buttons on old messages keep working after a restart; stale ones are
    rejected by the voting rules rather than by in-process state.
    """

    def __init__(self, track_id: str, score: int, label: str) -> None:
        super().__init__(
            discord.ui.Button(
                label=label,
                style=discord.ButtonStyle.primary,
                custom_id=CUSTOM_ID_TEMPLATE.format(track_id=track_id, score=score),
            )
        )
        self.track_id = track_id
        self.score = score

    @classmethod
    async def from_custom_id(
        cls,
        interaction: discord.Interaction,
        item: discord.ui.Button[Any],
        match: re.Match[str],
        /,
    ) -> VoteButton:
        return cls(match["track_id"], int(match["score"]), item.label or match["score"])

    async def callback(self, interaction: discord.Interaction) -> None:
        container: Container | None = getattr(interaction.client, "container", None)
        if container is None:
            raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

        actor = build_actor(interaction.user, container.settings.discord.manager_user_ids)
        try:
            command = CastVoteCommand(actor=actor, track_id=self.track_id, score=self.score)
        except ValidationError:
            logger.warning(LogTemplates.BOT_VOTE_BUTTON_UNKNOWN, self.item.custom_id)
            await send_ephemeral(interaction, PartyMessages.REJECT_VOTE_CLOSED)
            return

        from ..rendering import send_intent

        intent = await container.dispatcher.dispatch(command)
        await send_intent(interaction, intent)
