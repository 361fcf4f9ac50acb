"""Track catalog adapters."""

from discord_listening_party.infrastructure.catalog.youtube_api_catalog import (
    YouTubeDataApiCatalog,
)
from discord_listening_party.infrastructure.catalog.ytdlp_catalog import YtDlpCatalog

__all__ = ["YtDlpCatalog", "YouTubeDataApiCatalog"]
