"""
Music Bounded Context

Tracks, the queue, node payloads and the end-of-track policy.
"""

from lavalink_player.domain.music.end_policy import EndDecision, decide_next_action
from lavalink_player.domain.music.entities import SearchOptions, SearchResult, Track
from lavalink_player.domain.music.queue import QueueSnapshot, TrackQueue
from lavalink_player.domain.music.repository import PlayerRegistry
from lavalink_player.domain.music.search import TrackSearcher
from lavalink_player.domain.music.value_objects import (
    EndAction,
    LoopMode,
    PlayerState,
    RequeuePosition,
    TrackEndReason,
)

__all__ = [
    # Entities
    "Track",
    "SearchOptions",
    "SearchResult",
    "TrackQueue",
    "QueueSnapshot",
    # Value Objects
    "PlayerState",
    "LoopMode",
    "TrackEndReason",
    "EndAction",
    "RequeuePosition",
    # Policy
    "EndDecision",
    "decide_next_action",
    # Ports
    "PlayerRegistry",
    "TrackSearcher",
]
