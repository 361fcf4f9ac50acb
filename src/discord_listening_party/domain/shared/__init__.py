"""
Shared Domain Kernel

Contains types, messages and exceptions shared across the project.
"""

from discord_listening_party.domain.shared.exceptions import (
    BusinessRuleViolationError,
    ConcurrencyError,
    CorruptStateError,
    DomainError,
    PartyRejectedError,
    RejectionReason,
    StaleSessionError,
)

__all__ = [
    "DomainError",
    "BusinessRuleViolationError",
    "ConcurrencyError",
    "CorruptStateError",
    "PartyRejectedError",
    "RejectionReason",
    "StaleSessionError",
]
