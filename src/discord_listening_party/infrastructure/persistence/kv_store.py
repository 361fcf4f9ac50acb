"""SQLite implementation of the flat key-value store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from discord_listening_party.domain.party.repository import KeyValueStore
from discord_listening_party.domain.shared.messages import LogTemplates
from discord_listening_party.infrastructure.persistence.database import KV_TABLE

if TYPE_CHECKING:
    from .database import Database

logger = logging.getLogger(__name__)


class SQLiteKeyValueStore(KeyValueStore):
    """One row per key; every operation is a single autocommitted statement."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def get(self, key: str) -> str | None:
        row = await self._db.fetch_one(
            f"SELECT value FROM {KV_TABLE} WHERE key = ?",  # noqa: S608
            (key,),
        )
        return None if row is None else row["value"]

    async def put(self, key: str, value: str) -> None:
        await self._db.execute(
            f"""
            INSERT INTO {KV_TABLE} (key, value, updated_at)
            VALUES (?, ?, strftime('%Y-%m-%dT%H:%M:%f','now'))
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
            """,  # noqa: S608
            (key, value),
        )
        logger.debug(LogTemplates.STORE_PUT, key, len(value))

    async def delete(self, key: str) -> None:
        await self._db.execute(
            f"DELETE FROM {KV_TABLE} WHERE key = ?",  # noqa: S608
            (key,),
        )
        logger.debug(LogTemplates.STORE_DELETED, key)
