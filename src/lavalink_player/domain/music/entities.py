"""Core domain entities for the player bounded context."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from lavalink_player.domain.music.value_objects import LoadType
from lavalink_player.domain.shared.exceptions import ResolutionError
from lavalink_player.domain.shared.messages import ErrorMessages, LogTemplates
from lavalink_player.domain.shared.types import DurationMs, NonEmptyStr, TrackTitleStr

if TYPE_CHECKING:
    from lavalink_player.domain.music.search import TrackSearcher

logger = logging.getLogger(__name__)

# Candidates whose length is within this window count as the same recording.
LENGTH_MATCH_WINDOW_MS = 2000


class Track(BaseModel):
    """A playable item.

    Metadata is frozen once built. ``encoded`` is the node's playable
    reference and is only filled in by :meth:`resolve` (or by a search
    backend that already returns node tracks).
    """

    model_config = ConfigDict(validate_assignment=True)

    title: TrackTitleStr = Field(frozen=True)
    identifier: str | None = Field(default=None, frozen=True)
    author: str | None = Field(default=None, frozen=True)
    uri: str | None = Field(default=None, frozen=True)
    source_name: str | None = Field(default=None, frozen=True)
    length_ms: DurationMs | None = Field(default=None, frozen=True)
    is_seekable: bool = Field(default=False, frozen=True)
    is_stream: bool = Field(default=False, frozen=True)
    artwork_url: str | None = Field(default=None, frozen=True)
    requester: Any = Field(default=None, frozen=True, repr=False)

    encoded: NonEmptyStr | None = None

    _searcher: TrackSearcher | None = PrivateAttr(default=None)
    _engine: str | None = PrivateAttr(default=None)

    @property
    def is_resolved(self) -> bool:
        return self.encoded is not None

    @property
    def length_formatted(self) -> str:
        """Format length as MM:SS or HH:MM:SS."""
        if self.is_stream:
            return "Live"
        if self.length_ms is None:
            return "Unknown"

        hours, remainder = divmod(self.length_ms // 1000, 3600)
        minutes, seconds = divmod(remainder, 60)

        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    @property
    def display_title(self) -> str:
        """Get display title with author and length when known."""
        title = f"{self.author} - {self.title}" if self.author else self.title
        if self.length_ms:
            return f"{title} [{self.length_formatted}]"
        return title

    @property
    def search_query(self) -> str:
        return f"{self.author} - {self.title}" if self.author else self.title

    def bind_resolver(self, searcher: TrackSearcher, engine: str | None = None) -> Track:
        """Attach the search capability used by :meth:`resolve`."""
        self._searcher = searcher
        self._engine = engine
        return self

    async def resolve(
        self, searcher: TrackSearcher | None = None, *, overwrite: bool = False
    ) -> Track:
        """Populate ``encoded`` by searching for this track.

        Idempotent: an already resolved track is returned unchanged unless
        ``overwrite`` is set.

        Raises:
            ResolutionError: No searcher is bound, the search failed, or it
                returned nothing playable.
        """
        if self.encoded is not None and not overwrite:
            return self

        searcher = searcher or self._searcher
        if searcher is None:
            raise ResolutionError(
                self.title, ErrorMessages.RESOLVER_NOT_BOUND.format(title=self.title)
            )

        query = self.search_query
        logger.debug(LogTemplates.TRACK_RESOLVING, self.title, query)

        try:
            result = await searcher.search(
                query, SearchOptions(engine=self._engine, requester=self.requester)
            )
        except ResolutionError:
            raise
        except Exception as e:
            raise ResolutionError(
                self.title, ErrorMessages.SEARCH_FAILED.format(query=query, error=e)
            ) from e

        candidates = [t for t in result.tracks if t.encoded]
        if not candidates:
            raise ResolutionError(self.title, ErrorMessages.NO_SEARCH_RESULTS.format(query=query))

        match = self._best_match(candidates)
        self.encoded = match.encoded
        logger.debug(LogTemplates.TRACK_RESOLVED, self.title, match.title)
        return self

    def _best_match(self, candidates: list[Track]) -> Track:
        authors = [self.author, f"{self.author} - Topic"] if self.author else []

        def same_text(expected: str, actual: str | None) -> bool:
            return actual is not None and re.fullmatch(re.escape(expected), actual, re.IGNORECASE) is not None

        for candidate in candidates:
            if any(same_text(name, candidate.author) for name in authors):
                return candidate
            if same_text(self.title, candidate.title):
                return candidate

        if self.length_ms:
            for candidate in candidates:
                if candidate.length_ms is not None and (
                    abs(candidate.length_ms - self.length_ms) <= LENGTH_MATCH_WINDOW_MS
                ):
                    return candidate

        return candidates[0]


class SearchOptions(BaseModel):
    """Options passed to the search backend."""

    model_config = ConfigDict(frozen=True)

    engine: str | None = None
    requester: Any = None


class SearchResult(BaseModel):
    """What the search backend returns for a query."""

    load_type: LoadType = LoadType.SEARCH
    tracks: list[Track] = Field(default_factory=list)
    playlist_name: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.tracks
