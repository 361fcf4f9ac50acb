"""Immutable value objects for the listening party bounded context."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Final

from pydantic import PlainSerializer, PlainValidator

from discord_listening_party.domain.shared.messages import ErrorMessages

VIDEO_REF_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^.*(youtu\.be/|v/|u/\w/|embed/|shorts/|watch\?v=|&v=)([^#&?]*).*"
)
BARE_VIDEO_ID_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9_-]{11}$")
PLAYLIST_REF_PATTERN: Final[re.Pattern[str]] = re.compile(r"[?&]list=([^#&]+)")

WATCH_URL_TEMPLATE: Final[str] = "https://www.youtube.com/watch?v={video_id}"
THUMBNAIL_URL_TEMPLATE: Final[str] = "https://img.youtube.com/vi/{video_id}/mqdefault.jpg"


@dataclass(frozen=True)
class TrackId:
    """A YouTube video identifier."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError(ErrorMessages.EMPTY_TRACK_ID)

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)

    @property
    def watch_url(self) -> str:
        return WATCH_URL_TEMPLATE.format(video_id=self.value)

    @property
    def thumbnail_url(self) -> str:
        return THUMBNAIL_URL_TEMPLATE.format(video_id=self.value)

    @classmethod
    def from_url(cls, ref: str) -> TrackId | None:
        """Extract the video ID from a watch/short/embed URL or a bare ID.

        Returns None when no 11-character identifier can be found.
        """
        ref = ref.strip()
        if BARE_VIDEO_ID_PATTERN.match(ref):
            return cls(ref)

        match = VIDEO_REF_PATTERN.match(ref)
        if match and BARE_VIDEO_ID_PATTERN.match(match.group(2)):
            return cls(match.group(2))
        return None


@dataclass(frozen=True)
class PlaylistId:
    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError(ErrorMessages.EMPTY_PLAYLIST_ID)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_url(cls, ref: str) -> PlaylistId | None:
        """Extract the ``list=`` parameter from a playlist URL."""
        match = PLAYLIST_REF_PATTERN.search(ref)
        if match and match.group(1):
            return cls(match.group(1))
        return None


def _validate_track_id(value: object) -> TrackId:
    if isinstance(value, TrackId):
        return value
    if isinstance(value, str) and BARE_VIDEO_ID_PATTERN.match(value):
        return TrackId(value)
    raise ValueError(ErrorMessages.INVALID_TRACK_ID)


# Serializes as plain string in JSON, stores as TrackId in the model.
TrackIdField = Annotated[
    TrackId,
    PlainValidator(_validate_track_id),
    PlainSerializer(lambda v: v.value, return_type=str),
]


class StateKey(str, Enum):
    """Keys of the flat party state store."""

    SESSION_ACTIVE = "SESSION_ACTIVE"
    SESSION_GENERATION = "SESSION_GENERATION"
    QUEUE = "QUEUE"
    CURRENT_SONG = "CURRENT_SONG"
    SESSION_PARTICIPANTS = "SESSION_PARTICIPANTS"
    ELIGIBLE_VOTERS = "ELIGIBLE_VOTERS"
    VOTED_USERS = "VOTED_USERS"
    HISTORY = "HISTORY"


class VoteOutcome(Enum):
    """What a vote button press did."""

    CAST = "cast"
    REPLACED = "replaced"
    RETRACTED = "retracted"

    @property
    def is_retraction(self) -> bool:
        return self is VoteOutcome.RETRACTED
