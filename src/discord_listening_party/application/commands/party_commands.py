"""
Party Commands

One immutable command object per user-facing party operation. The transport
builds these from interactions; ``CommandDispatcher`` routes them.
"""

from __future__ import annotations

from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from discord_listening_party.domain.shared.types import (
    DiscordSnowflake,
    NonEmptyStr,
    ScoreInt,
)


class Actor(BaseModel):
    """The user behind a command, as vouched for by the transport."""

    model_config = ConfigDict(frozen=True)

    user_id: DiscordSnowflake
    is_authorized: bool = False


class _PartyCommandBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    requires_authorization: ClassVar[bool] = False

    actor: Actor


class SessionStartCommand(_PartyCommandBase):
    requires_authorization: ClassVar[bool] = True

    kind: Literal["session-start"] = "session-start"
    playlist_ref: str | None = None


class SessionEndCommand(_PartyCommandBase):
    requires_authorization: ClassVar[bool] = True

    kind: Literal["session-end"] = "session-end"


class VoteStartCommand(_PartyCommandBase):
    requires_authorization: ClassVar[bool] = True

    kind: Literal["vote-start"] = "vote-start"
    url: NonEmptyStr


class VoteNextCommand(_PartyCommandBase):
    requires_authorization: ClassVar[bool] = True

    kind: Literal["vote-next"] = "vote-next"


class VoteEndCommand(_PartyCommandBase):
    requires_authorization: ClassVar[bool] = True

    kind: Literal["vote-end"] = "vote-end"


class EnterCommand(_PartyCommandBase):
    kind: Literal["enter"] = "enter"


class ExitCommand(_PartyCommandBase):
    kind: Literal["exit"] = "exit"


class KickCommand(_PartyCommandBase):
    requires_authorization: ClassVar[bool] = True

    kind: Literal["kick"] = "kick"
    target_id: DiscordSnowflake


class ListParticipantsCommand(_PartyCommandBase):
    requires_authorization: ClassVar[bool] = True

    kind: Literal["participants"] = "participants"


class CastVoteCommand(_PartyCommandBase):
    """A press of one of the vote buttons attached to a now-playing message."""

    kind: Literal["vote"] = "vote"
    track_id: NonEmptyStr
    score: ScoreInt


PartyCommand = Annotated[
    Union[
        SessionStartCommand,
        SessionEndCommand,
        VoteStartCommand,
        VoteNextCommand,
        VoteEndCommand,
        EnterCommand,
        ExitCommand,
        KickCommand,
        ListParticipantsCommand,
        CastVoteCommand,
    ],
    Field(discriminator="kind"),
]
