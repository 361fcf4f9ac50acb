"""Repository implementations on top of the key-value store."""

from discord_listening_party.infrastructure.persistence.repositories.party_state_repository import (
    KeyValuePartyStateRepository,
)

__all__ = [
    "KeyValuePartyStateRepository",
]
