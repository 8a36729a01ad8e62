"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when domain validation fails."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class BusinessRuleViolationError(DomainError):
    """Raised when a business rule is violated."""

    def __init__(self, rule: str, message: str | None = None) -> None:
        msg = message or f"Business rule violated: {rule}"
        super().__init__(msg, code="BUSINESS_RULE_VIOLATION")
        self.rule = rule


class InvalidOperationError(DomainError):
    """Raised when an operation is invalid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None) -> None:
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(msg, code="INVALID_OPERATION")
        self.operation = operation
        self.current_state = current_state


# === Player errors ===


class InvalidStateError(InvalidOperationError):
    """Raised when a player command is illegal in the player's lifecycle state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None) -> None:
        super().__init__(operation, current_state, message)
        self.code = "INVALID_STATE"


class InvalidArgumentError(ValidationError):
    """Raised when a player command receives a value of the wrong type or range."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, field=field)
        self.code = "INVALID_ARGUMENT"


class NoTrackAvailableError(BusinessRuleViolationError):
    """Raised when playback is requested but nothing is queued."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(rule="TRACK_REQUIRED", message=message)
        self.code = "NO_TRACK_AVAILABLE"


class ResolutionError(DomainError):
    """Raised when a track cannot be resolved to a playable reference."""

    def __init__(self, track_title: str, message: str | None = None) -> None:
        msg = message or f"Could not resolve '{track_title}'"
        super().__init__(msg, code="RESOLUTION_FAILED")
        self.track_title = track_title
