"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from discord_listening_party.application.interfaces.catalog import TrackCatalog

__all__ = [
    "TrackCatalog",
]
