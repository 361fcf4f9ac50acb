"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import (
    BusyTimeoutMs,
    ButtonLabelStr,
    ConnectionTimeoutS,
    NonEmptyStr,
    PlaylistMaxItems,
    RequestTimeoutS,
    ScoreInt,
)
from ..domain.shared.validators import coerce_snowflake_tuple

SnowflakeTuple = Annotated[tuple[int, ...], NoDecode]


class DatabaseSettings(BaseModel):
    """Database configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(
        default="sqlite:///data/party.db",
        validation_alias=AliasChoices("url", "database_url", "db_url"),
    )
    busy_timeout_ms: BusyTimeoutMs = Field(
        default=5000,
        validation_alias=AliasChoices("busy_timeout_ms", "busy_timeout"),
    )
    connection_timeout_s: ConnectionTimeoutS = Field(
        default=10,
        validation_alias=AliasChoices("connection_timeout_s", "connection_timeout"),
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Only SQLite backs the key-value store."""
        if not v.startswith("sqlite://"):
            raise ValueError(ErrorMessages.INVALID_DATABASE_URL)
        return v


class DiscordSettings(BaseModel):
    """Discord bot configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("token", "bot_token", "discord_token")
    )
    manager_user_ids: SnowflakeTuple = Field(
        default_factory=tuple,
        validation_alias=AliasChoices("manager_user_ids", "manager_user_id", "managers"),
    )
    guild_ids: SnowflakeTuple = Field(
        default_factory=tuple, validation_alias=AliasChoices("guild_ids", "guilds")
    )
    test_guild_ids: SnowflakeTuple = Field(
        default_factory=tuple, validation_alias=AliasChoices("test_guild_ids", "test_guilds")
    )
    sync_on_startup: bool = False

    @field_validator("manager_user_ids", "guild_ids", "test_guild_ids", mode="before")
    @classmethod
    def validate_snowflake_ids(cls, v: object) -> tuple[int, ...]:
        """Accept tuples, lists, a single ID, or a comma-separated string."""
        return coerce_snowflake_tuple(v)


class CatalogSettings(BaseModel):
    """Track catalog configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    backend: Literal["ytdlp", "youtube_api"] = "ytdlp"
    youtube_api_key: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("youtube_api_key", "api_key"),
    )
    playlist_max_items: PlaylistMaxItems = 50
    request_timeout_s: RequestTimeoutS = 10.0
    cache_ttl_seconds: int = Field(
        default=3600, ge=0, validation_alias=AliasChoices("cache_ttl_seconds", "cache_ttl")
    )
    placeholder_title: NonEmptyStr = "Unknown Song"

    @model_validator(mode="after")
    def require_api_key(self) -> CatalogSettings:
        if self.backend == "youtube_api" and not self.youtube_api_key.get_secret_value():
            raise ValueError(ErrorMessages.YOUTUBE_API_KEY_REQUIRED)
        return self


class VoteOptionSetting(BaseModel):
    """One vote button: the score it records and the label it shows."""

    model_config = SettingsConfigDict(frozen=True)

    score: ScoreInt
    label: ButtonLabelStr


def _default_vote_options() -> tuple[VoteOptionSetting, ...]:
    return (
        VoteOptionSetting(score=1, label="👍 Nice"),
        VoteOptionSetting(score=2, label="🔁 Play it again!"),
    )


class VotingSettings(BaseModel):
    """Voting configuration."""

    model_config = SettingsConfigDict(frozen=True)

    options: tuple[VoteOptionSetting, ...] = Field(default_factory=_default_vote_options)
    serialize_votes: bool = True

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: tuple[VoteOptionSetting, ...]) -> tuple[VoteOptionSetting, ...]:
        if not v:
            raise ValueError(ErrorMessages.NO_VOTE_OPTIONS)
        scores = [option.score for option in v]
        if len(set(scores)) != len(scores):
            raise ValueError(ErrorMessages.DUPLICATE_VOTE_SCORES)
        return v

    @property
    def scores(self) -> tuple[int, ...]:
        return tuple(option.score for option in self.options)

    def label_for(self, score: int) -> str:
        for option in self.options:
            if option.score == score:
                return option.label
        return str(score)


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - DISCORD__TOKEN, DISCORD__MANAGER_USER_IDS (comma-separated), etc.
    - DATABASE__URL
    - CATALOG__BACKEND, CATALOG__YOUTUBE_API_KEY, etc.
    - VOTING__OPTIONS (JSON array of {"score", "label"} objects)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    voting: VotingSettings = Field(default_factory=VotingSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=sorted(valid_levels))
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
