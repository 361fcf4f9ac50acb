"""Tests for the persistent VoteButton dynamic item."""

import re
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from conftest import MANAGER, TRACK_X, USER_A
from discord_listening_party.application.commands import CastVoteCommand, ResponseIntent
from discord_listening_party.domain.shared.messages import PartyMessages
from discord_listening_party.infrastructure.discord.views import VoteButton


@pytest.fixture
def container():
    container = MagicMock()
    container.settings.discord.manager_user_ids = (MANAGER,)
    container.dispatcher.dispatch = AsyncMock(return_value=ResponseIntent.private("recorded"))
    return container


@pytest.fixture
def interaction(container):
    i = MagicMock(spec=discord.Interaction)
    i.client = MagicMock()
    i.client.container = container
    i.response = MagicMock()
    i.response.is_done.return_value = False
    i.response.send_message = AsyncMock()
    i.followup = MagicMock()
    i.followup.send = AsyncMock()

    member = MagicMock(spec=discord.Member)
    member.id = USER_A
    member.guild_permissions = MagicMock()
    member.guild_permissions.administrator = False
    i.user = member
    return i


class TestCustomId:
    async def test_custom_id_encodes_track_and_score(self):
        button = VoteButton(TRACK_X, 2, "🔁 Play it again!")

        assert button.item.custom_id == f"vote:{TRACK_X}:2"
        assert button.item.label == "🔁 Play it again!"
        assert button.item.style is discord.ButtonStyle.primary

    async def test_rebuilt_from_custom_id(self, interaction):
        item = discord.ui.Button(label="👍 Nice", custom_id=f"vote:{TRACK_X}:1")
        match = re.fullmatch(r"vote:(?P<track_id>[A-Za-z0-9_-]+):(?P<score>[0-9]+)", item.custom_id)

        button = await VoteButton.from_custom_id(interaction, item, match)

        assert button.track_id == TRACK_X
        assert button.score == 1
        assert button.item.label == "👍 Nice"


class TestCallback:
    async def test_dispatches_cast_vote(self, interaction, container):
        button = VoteButton(TRACK_X, 1, "👍 Nice")

        await button.callback(interaction)

        command = container.dispatcher.dispatch.await_args.args[0]
        assert isinstance(command, CastVoteCommand)
        assert command.actor.user_id == USER_A
        assert command.actor.is_authorized is False
        assert command.track_id == TRACK_X
        assert command.score == 1
        interaction.response.send_message.assert_awaited_once_with(
            content="recorded", ephemeral=True
        )

    async def test_out_of_range_score_is_rejected_locally(self, interaction, container):
        button = VoteButton(TRACK_X, 0, "zero")

        await button.callback(interaction)

        container.dispatcher.dispatch.assert_not_awaited()
        interaction.response.send_message.assert_awaited_once_with(
            PartyMessages.REJECT_VOTE_CLOSED, ephemeral=True
        )

    async def test_missing_container(self, interaction):
        interaction.client = MagicMock(spec=[])
        button = VoteButton(TRACK_X, 1, "👍 Nice")

        with pytest.raises(RuntimeError, match="Container not found"):
            await button.callback(interaction)
