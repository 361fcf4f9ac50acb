"""Presentation-neutral replies produced by the dispatcher."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from discord_listening_party.domain.party.entities import CurrentSongView
from discord_listening_party.domain.shared.types import ButtonLabelStr, ScoreInt


class VoteOption(BaseModel):
    """A vote button bound to one track and one score."""

    model_config = ConfigDict(frozen=True)

    track_id: str
    score: ScoreInt
    label: ButtonLabelStr


class ResponseIntent(BaseModel):
    """What to tell the user, and whether the rest of the channel sees it."""

    model_config = ConfigDict(frozen=True)

    text: str
    ephemeral: bool = False
    now_playing: CurrentSongView | None = None
    options: tuple[VoteOption, ...] = ()

    @classmethod
    def announce(cls, text: str) -> ResponseIntent:
        return cls(text=text)

    @classmethod
    def private(cls, text: str) -> ResponseIntent:
        return cls(text=text, ephemeral=True)

    @classmethod
    def now_playing_card(
        cls, text: str, view: CurrentSongView, options: tuple[VoteOption, ...]
    ) -> ResponseIntent:
        return cls(text=text, now_playing=view, options=options)
