"""
Domain Layer

Contains pure playback logic:
- shared/: Exceptions, messages, constrained types and the event bus
- music/: Track, queue, node payloads and the end-of-track policy
"""

from lavalink_player.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
