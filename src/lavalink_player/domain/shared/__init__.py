"""
Shared Domain Kernel

Contains exceptions and constrained types shared across the package.
"""

from lavalink_player.domain.shared.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    InvalidArgumentError,
    InvalidOperationError,
    InvalidStateError,
    NoTrackAvailableError,
    ResolutionError,
    ValidationError,
)

__all__ = [
    "DomainError",
    "ValidationError",
    "BusinessRuleViolationError",
    "InvalidOperationError",
    "InvalidStateError",
    "InvalidArgumentError",
    "NoTrackAvailableError",
    "ResolutionError",
]
