"""Port interface for the node-side player of one guild."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ...domain.music.payloads import FilterState, PlayTrackRequest, VolumeDirective
    from ...domain.music.value_objects import NodeEvent

NodeEventCallback = Callable[[Any], Awaitable[None]]


class NodePlayer(ABC):
    """Interface for the audio node's player handle.

    The handle is shared with whatever created it; the guild player only
    releases it through :meth:`destroy`.
    """

    @property
    @abstractmethod
    def filters(self) -> "FilterState":
        """Mutable filter state; the guild player writes ``volume`` here."""
        ...

    @abstractmethod
    async def set_paused(self, paused: bool) -> None:
        """Pause or resume playback on the node."""
        ...

    @abstractmethod
    async def stop_track(self) -> None:
        """Stop the current track; the node answers with an end event."""
        ...

    @abstractmethod
    async def play_track(self, request: "PlayTrackRequest") -> None:
        """Start playing a resolved track."""
        ...

    @abstractmethod
    async def update_volume(self, directive: "VolumeDirective") -> None:
        """Send the stored volume to the node."""
        ...

    @abstractmethod
    async def destroy(self) -> None:
        """Release the node-side player resource."""
        ...

    @abstractmethod
    def add_listener(self, event: "NodeEvent", callback: NodeEventCallback) -> None:
        """Subscribe to a node event.

        Callbacks receive the matching payload model: ``TrackStartPayload``,
        ``TrackEndPayload``, ``WebSocketClosedPayload``,
        ``TrackExceptionPayload`` or ``PlayerUpdatePayload``.
        """
        ...
