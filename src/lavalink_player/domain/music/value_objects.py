"""Immutable value objects for the player bounded context."""

from __future__ import annotations

from enum import Enum
from typing import Any


class PlayerState(Enum):
    """Player lifecycle state.

    Connection states:
    - CONNECTING -> CONNECTED (connect)
    - CONNECTED -> CONNECTING (moved to another voice channel)
    - CONNECTED -> DISCONNECTING -> DISCONNECTED (disconnect)

    Teardown (terminal):
    - Any -> DESTROYING -> DESTROYED (destroy)
    """

    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTING = "disconnecting"
    DISCONNECTED = "disconnected"
    DESTROYING = "destroying"
    DESTROYED = "destroyed"

    @property
    def is_tearing_down(self) -> bool:
        return self in {PlayerState.DESTROYING, PlayerState.DESTROYED}

    @property
    def is_destroyed(self) -> bool:
        return self == PlayerState.DESTROYED


class LoopMode(Enum):
    """Loop mode settings for queue playback."""

    NONE = "none"
    QUEUE = "queue"  # Loop entire queue
    TRACK = "track"  # Loop current track

    def next_mode(self) -> LoopMode:
        """Cycle to next loop mode."""
        modes = list(LoopMode)
        current_index = modes.index(self)
        next_index = (current_index + 1) % len(modes)
        return modes[next_index]

    @classmethod
    def parse(cls, value: Any) -> LoopMode | None:
        """Return the matching mode for a LoopMode or its string value, else None."""
        if isinstance(value, LoopMode):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                return None
        return None


class TrackEndReason(Enum):
    """Reasons the node reports for a track ending.

    Both the upper-case v3 spellings (``LOAD_FAILED``, ``CLEANUP``) and the
    camel-case v4 spellings (``loadFailed``, ``cleanup``) are accepted.
    """

    FINISHED = "FINISHED"
    LOAD_FAILED = "LOAD_FAILED"
    STOPPED = "STOPPED"
    REPLACED = "REPLACED"
    CLEAN_UP = "CLEAN_UP"

    @classmethod
    def _missing_(cls, value: object) -> TrackEndReason | None:
        if not isinstance(value, str):
            return None
        key = "".join(ch for ch in value.upper() if ch.isalnum())
        for member in cls:
            if member.value.replace("_", "") == key:
                return member
        return None

    @classmethod
    def parse(cls, value: Any) -> TrackEndReason | None:
        """Return the matching reason, or None for reasons this package does not know."""
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def is_failure(self) -> bool:
        """The current track could not be played and will not be retried."""
        return self in {TrackEndReason.LOAD_FAILED, TrackEndReason.CLEAN_UP}


class NodeEvent(Enum):
    """Signals a node player delivers to its listeners."""

    START = "start"
    END = "end"
    CLOSED = "closed"
    EXCEPTION = "exception"
    UPDATE = "update"


class EndAction(Enum):
    """What the player does after a node end event."""

    IGNORE = "ignore"  # Player is being torn down
    NOTIFY_ONLY = "notify_only"  # Emit end, leave the queue alone
    ADVANCE = "advance"  # Emit end and play the next track
    IDLE = "idle"  # Emit empty, nothing left to play


class RequeuePosition(Enum):
    """Where a looped track goes back into the queue."""

    FRONT = "front"
    BACK = "back"


class LoadType(Enum):
    """Result kinds returned by the search backend."""

    TRACK = "track"
    PLAYLIST = "playlist"
    SEARCH = "search"
    EMPTY = "empty"
    ERROR = "error"
