"""Port for the track search backend.

The search backend itself lives outside this package; tracks and players
only need something that turns a query into node tracks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from lavalink_player.domain.shared.types import NonEmptyStr

if TYPE_CHECKING:
    from lavalink_player.domain.music.entities import SearchOptions, SearchResult


class TrackSearcher(ABC):
    """Interface for resolving search queries and URLs to node tracks."""

    @abstractmethod
    async def search(
        self, query: NonEmptyStr, options: "SearchOptions | None" = None
    ) -> "SearchResult":
        """Search for tracks matching a query or load a URL.

        Implementations raise on transport failures; an empty result is
        returned as a ``SearchResult`` with no tracks.
        """
        ...
