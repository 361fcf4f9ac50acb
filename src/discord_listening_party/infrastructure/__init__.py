"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Persistence (SQLite key-value store, typed party state codec)
- Catalog (yt-dlp and YouTube Data API track lookup)
- Discord (bot, cogs, vote buttons)
"""

from discord_listening_party.infrastructure.discord.bot import create_bot
from discord_listening_party.infrastructure.persistence.database import Database

__all__ = [
    "create_bot",
    "Database",
]
