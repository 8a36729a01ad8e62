"""Ordered track queue with ``current`` and ``previous`` slots."""

from __future__ import annotations

import random
from collections.abc import Iterator
from dataclasses import dataclass

from lavalink_player.domain.music.entities import Track


@dataclass(frozen=True, slots=True)
class QueueSnapshot:
    """Read-only view of the queue used by the end-of-track policy."""

    has_current: bool
    upcoming_count: int

    @property
    def total_size(self) -> int:
        return self.upcoming_count + (1 if self.has_current else 0)


class TrackQueue:
    """Upcoming tracks plus the one playing now and the one before it.

    ``current`` is never also present in the upcoming list; ``len()`` and
    iteration only cover upcoming tracks. Nothing here raises on an empty
    queue: empty lookups return ``None``.
    """

    def __init__(self, tracks: list[Track] | None = None) -> None:
        self._upcoming: list[Track] = list(tracks or [])
        self.current: Track | None = None
        self.previous: Track | None = None

    def __len__(self) -> int:
        return len(self._upcoming)

    def __iter__(self) -> Iterator[Track]:
        return iter(list(self._upcoming))

    def __getitem__(self, index: int) -> Track:
        return self._upcoming[index]

    def __repr__(self) -> str:
        return (
            f"TrackQueue(upcoming={len(self._upcoming)}, "
            f"current={self.current.title if self.current else None!r})"
        )

    @property
    def upcoming(self) -> tuple[Track, ...]:
        return tuple(self._upcoming)

    @property
    def size(self) -> int:
        return len(self._upcoming)

    @property
    def total_size(self) -> int:
        return len(self._upcoming) + (1 if self.current else 0)

    @property
    def is_empty(self) -> bool:
        return not self._upcoming

    @property
    def total_length_ms(self) -> int:
        """Sum of known track lengths, current track included."""
        tracks = [*self._upcoming, *([self.current] if self.current else [])]
        return sum(t.length_ms or 0 for t in tracks if not t.is_stream)

    def push(self, *tracks: Track) -> int:
        """Append tracks to the end and return the new upcoming length."""
        self._upcoming.extend(tracks)
        return len(self._upcoming)

    def unshift(self, track: Track) -> int:
        """Insert a track at the front and return the new upcoming length."""
        self._upcoming.insert(0, track)
        return len(self._upcoming)

    def shift(self) -> Track | None:
        """Remove and return the next track."""
        if not self._upcoming:
            return None
        return self._upcoming.pop(0)

    def peek(self) -> Track | None:
        """Look at the next track without removing it."""
        return self._upcoming[0] if self._upcoming else None

    def remove_at(self, index: int) -> Track | None:
        """Remove a track at a specific upcoming position."""
        if 0 <= index < len(self._upcoming):
            return self._upcoming.pop(index)
        return None

    def move(self, from_index: int, to_index: int) -> bool:
        """Move a track from one upcoming position to another."""
        if not (0 <= from_index < len(self._upcoming) and 0 <= to_index < len(self._upcoming)):
            return False

        track = self._upcoming.pop(from_index)
        self._upcoming.insert(to_index, track)
        return True

    def shuffle(self) -> None:
        random.shuffle(self._upcoming)

    def clear(self) -> int:
        """Clear upcoming tracks and return the count removed."""
        count = len(self._upcoming)
        self._upcoming.clear()
        return count

    def find_by_encoded(self, encoded: str | None) -> Track | None:
        """Best-effort lookup of the queued track the node says is playing.

        Searches upcoming, then current, then previous. Returns None when no
        slot holds a track with that playable reference.
        """
        if encoded is None:
            return None
        candidates = [*self._upcoming]
        if self.current:
            candidates.append(self.current)
        if self.previous:
            candidates.append(self.previous)
        return next((t for t in candidates if t.encoded == encoded), None)

    def snapshot(self) -> QueueSnapshot:
        return QueueSnapshot(has_current=self.current is not None, upcoming_count=len(self._upcoming))
