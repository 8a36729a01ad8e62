"""Per-guild Lavalink player: queue, loop modes and node event handling."""

from lavalink_player.application.services.player import GuildPlayer
from lavalink_player.domain.music.entities import SearchOptions, SearchResult, Track
from lavalink_player.domain.music.payloads import PlayOptions
from lavalink_player.domain.music.queue import TrackQueue
from lavalink_player.domain.music.value_objects import LoopMode, PlayerState, TrackEndReason

__all__ = [
    "GuildPlayer",
    "LoopMode",
    "PlayOptions",
    "PlayerState",
    "SearchOptions",
    "SearchResult",
    "Track",
    "TrackEndReason",
    "TrackQueue",
]
