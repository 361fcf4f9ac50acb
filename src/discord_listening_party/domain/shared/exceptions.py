"""Exception hierarchy for domain-level errors."""

from __future__ import annotations

from enum import Enum


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class BusinessRuleViolationError(DomainError):
    """Raised when a business rule is violated."""

    def __init__(self, rule: str, message: str | None = None) -> None:
        msg = message or f"Business rule violated: {rule}"
        super().__init__(msg, code="BUSINESS_RULE_VIOLATION")
        self.rule = rule


class ConcurrencyError(DomainError):
    """Raised when a concurrent modification conflict occurs."""

    def __init__(self, entity_type: str, message: str | None = None) -> None:
        msg = message or f"Concurrent modification detected for {entity_type}"
        super().__init__(msg, code="CONCURRENCY_ERROR")
        self.entity_type = entity_type


class RejectionReason(Enum):
    """Why a party transition was refused.

    Every reason is detected before the first store write, so a rejected
    request leaves no trace and is safe to retry.
    """

    # Session / playback preconditions
    ALREADY_ACTIVE = "already_active"
    NOT_ACTIVE = "not_active"
    VOTE_IN_PROGRESS = "vote_in_progress"
    NO_CURRENT_SONG = "no_current_song"
    QUEUE_EMPTY = "queue_empty"

    # Voting preconditions
    SESSION_CLOSED = "session_closed"
    VOTE_CLOSED = "vote_closed"
    NOT_A_PARTICIPANT = "not_a_participant"
    NOT_ELIGIBLE = "not_eligible"
    INVALID_SCORE = "invalid_score"

    # Roster preconditions
    ALREADY_JOINED = "already_joined"
    NOT_JOINED = "not_joined"
    TARGET_NOT_JOINED = "target_not_joined"
    FORBIDDEN = "forbidden"

    # Input format / external degradation
    INVALID_REFERENCE = "invalid_reference"
    UNRESOLVABLE_URL = "unresolvable_url"
    EMPTY_OR_INACCESSIBLE = "empty_or_inaccessible"


class PartyRejectedError(BusinessRuleViolationError):
    """Raised when a guard on a party transition fails."""

    def __init__(self, reason: RejectionReason, message: str | None = None) -> None:
        super().__init__(reason.value, message or f"Rejected: {reason.value}")
        self.reason = reason


class CorruptStateError(DomainError):
    """Raised when a stored value cannot be decoded into its entity."""

    def __init__(self, key: str, raw: str, detail: str | None = None) -> None:
        msg = f"Stored value for '{key}' is malformed"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg, code="CORRUPT_STATE")
        self.key = key
        self.raw = raw


class StaleSessionError(ConcurrencyError):
    """Raised when the session generation moved on while a request was in flight."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            "session",
            f"Session generation changed from {expected} to {actual} during the request",
        )
        self.expected = expected
        self.actual = actual
