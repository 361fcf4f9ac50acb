"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across the project is defined here once,
so models can simply annotate their fields::

    from discord_listening_party.domain.shared.types import DiscordSnowflake, ScoreInt

    class MyModel(BaseModel):
        user_id: DiscordSnowflake
        score: ScoreInt
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

# ── Numeric constraints ─────────────────────────────────────────────

DiscordSnowflake = Annotated[int, Field(gt=0, lt=2**64)]
"""Positive integer that fits a Discord snowflake (1 … 2^64-1)."""

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

PositiveInt = Annotated[int, Field(gt=0)]
"""Integer > 0."""

NonNegativeFloat = Annotated[float, Field(ge=0.0)]
"""Float >= 0.0."""

ScoreInt = Annotated[int, Field(gt=0, le=100)]
"""Vote score: a small positive integer from the configured option set."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

TrackTitleStr = Annotated[str, Field(min_length=1, max_length=500)]
"""Track title: 1-500 characters."""

HttpUrlStr = Annotated[str, Field(pattern=r"^https?://")]
"""String that starts with http:// or https://."""

ButtonLabelStr = Annotated[str, Field(min_length=1, max_length=80)]
"""Discord button label: 1-80 characters."""


# ── Settings-specific constraints ──────────────────────────────────

BusyTimeoutMs = Annotated[int, Field(ge=1000, le=30000)]
"""Database busy timeout in milliseconds: 1 000 … 30 000."""

ConnectionTimeoutS = Annotated[int, Field(ge=1, le=60)]
"""Database connection timeout in seconds: 1 … 60."""

PlaylistMaxItems = Annotated[int, Field(ge=1, le=50)]
"""Playlist page size accepted by the catalog: 1 … 50."""

RequestTimeoutS = Annotated[float, Field(gt=0.0, le=60.0)]
"""Outbound HTTP timeout in seconds."""
