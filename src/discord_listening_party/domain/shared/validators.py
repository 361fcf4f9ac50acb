"""Shared validators for domain models and settings."""

from discord_listening_party.domain.shared.messages import ErrorMessages


def validate_discord_snowflake(value: int) -> int:
    """Validate a Discord snowflake ID.

    Discord snowflake IDs are 64-bit unsigned integers representing unique
    identifiers for users, guilds, channels, messages, etc.

    Args:
        value: The snowflake ID to validate.

    Returns:
        The validated snowflake ID.

    Raises:
        ValueError: If the snowflake ID is invalid.
    """
    if value <= 0:
        raise ValueError(ErrorMessages.INVALID_SNOWFLAKE)
    if value >= 2**64:
        raise ValueError(ErrorMessages.SNOWFLAKE_TOO_LARGE)
    return value


def coerce_snowflake_tuple(value: object) -> tuple[int, ...]:
    """Normalise a settings value into a tuple of validated snowflakes.

    Accepts a tuple, a list (JSON array from env vars), a single int, or a
    comma-separated string such as ``"123,456"``.
    """
    if value is None or value == "":
        return ()
    if isinstance(value, int):
        items: list[object] = [value]
    elif isinstance(value, str):
        items = [part.strip() for part in value.split(",") if part.strip()]
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        raise ValueError(ErrorMessages.INVALID_SNOWFLAKE)

    return tuple(validate_discord_snowflake(int(item)) for item in items)  # type: ignore[call-overload]
