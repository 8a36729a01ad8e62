"""Decides what a player does when the node reports that a track ended.

Kept free of I/O so every combination of end reason, loop mode and queue
shape can be checked without a node.
"""

from __future__ import annotations

from dataclasses import dataclass

from lavalink_player.domain.music.queue import QueueSnapshot
from lavalink_player.domain.music.value_objects import (
    EndAction,
    LoopMode,
    PlayerState,
    RequeuePosition,
    TrackEndReason,
)


@dataclass(frozen=True, slots=True)
class EndDecision:
    """Outcome of a single end event.

    Attributes:
        action: The one next step the player takes.
        requeue: Where the finished track goes back into the queue, if anywhere.
        failed: The track ended because it could not be played.
        paused: Value of the player's ``paused`` flag afterwards, or None to leave it.
    """

    action: EndAction
    requeue: RequeuePosition | None = None
    failed: bool = False
    paused: bool | None = None


_IGNORE = EndDecision(EndAction.IGNORE)
_NOTIFY_ONLY = EndDecision(EndAction.NOTIFY_ONLY)


def decide_next_action(
    reason: TrackEndReason | None,
    loop_mode: LoopMode,
    snapshot: QueueSnapshot,
    state: PlayerState = PlayerState.CONNECTED,
) -> EndDecision:
    """Map an end event onto exactly one next action.

    Args:
        reason: Parsed end reason; None means the node sent a reason this
            package does not know, which is handled as a normal completion.
        loop_mode: The player's loop mode.
        snapshot: Queue shape at the time the event arrived.
        state: Player lifecycle state.
    """
    # The node reports STOPPED while the player is torn down.
    if state.is_tearing_down:
        return _IGNORE

    if reason is TrackEndReason.REPLACED:
        return _NOTIFY_ONLY

    if reason is not None and reason.is_failure:
        if snapshot.upcoming_count == 0:
            return EndDecision(EndAction.IDLE, failed=True, paused=True)
        return EndDecision(EndAction.ADVANCE, failed=True, paused=True)

    requeue: RequeuePosition | None = None
    if snapshot.has_current:
        if loop_mode is LoopMode.TRACK:
            requeue = RequeuePosition.FRONT
        elif loop_mode is LoopMode.QUEUE:
            requeue = RequeuePosition.BACK

    remaining = snapshot.upcoming_count + (1 if requeue else 0)
    if remaining == 0:
        return EndDecision(EndAction.IDLE, requeue=requeue, paused=True)
    return EndDecision(EndAction.ADVANCE, requeue=requeue, paused=False)
