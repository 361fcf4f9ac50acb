# ruff: noqa: N999
"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Cross-cutting types, messages and exceptions
- party/: Session, queue, eligibility, voting and history rules
"""

from discord_listening_party.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
