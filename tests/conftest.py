from collections import defaultdict

import pytest
import pytest_asyncio

from lavalink_player.application.interfaces.node_player import NodePlayer
from lavalink_player.application.interfaces.voice_gateway import VoiceGateway
from lavalink_player.domain.music.entities import SearchResult, Track
from lavalink_player.domain.music.payloads import FilterState
from lavalink_player.domain.music.search import TrackSearcher
from lavalink_player.domain.shared.events import (
    Debug,
    EventBus,
    PlayerClosed,
    PlayerDestroy,
    PlayerEmpty,
    PlayerEnd,
    PlayerException,
    PlayerResolveError,
    PlayerStart,
    PlayerUpdate,
)

GUILD_ID = 123456789012345678
VOICE_CHANNEL_ID = 223456789012345678
OTHER_VOICE_CHANNEL_ID = 323456789012345678
TEXT_CHANNEL_ID = 423456789012345678


# ============================================================================
# Fakes
# ============================================================================


class FakeNodePlayer(NodePlayer):
    """Node player that records directives and lets tests fire node events."""

    def __init__(self) -> None:
        self._filters = FilterState()
        self.listeners = defaultdict(list)
        self.paused_calls: list[bool] = []
        self.stop_calls = 0
        self.play_requests = []
        self.volume_directives = []
        self.destroy_calls = 0

    @property
    def filters(self) -> FilterState:
        return self._filters

    async def set_paused(self, paused: bool) -> None:
        self.paused_calls.append(paused)

    async def stop_track(self) -> None:
        self.stop_calls += 1

    async def play_track(self, request) -> None:
        self.play_requests.append(request)

    async def update_volume(self, directive) -> None:
        self.volume_directives.append(directive)

    async def destroy(self) -> None:
        self.destroy_calls += 1

    def add_listener(self, event, callback) -> None:
        self.listeners[event].append(callback)

    async def fire(self, event, payload) -> None:
        for callback in list(self.listeners[event]):
            await callback(payload)


class FakeGateway(VoiceGateway):
    def __init__(self) -> None:
        self.sent = []

    async def send(self, guild_id, payload) -> None:
        self.sent.append((guild_id, payload))

    @property
    def last_payload(self) -> dict:
        return self.sent[-1][1].model_dump()


class FakeSearcher(TrackSearcher):
    """Answers every query with one resolved track titled after the query."""

    def __init__(self, results: list[Track] | None = None, error: Exception | None = None) -> None:
        self.results = results
        self.error = error
        self.queries = []

    async def search(self, query, options=None) -> SearchResult:
        self.queries.append((query, options))
        if self.error is not None:
            raise self.error
        if self.results is not None:
            return SearchResult(tracks=self.results)
        return SearchResult(tracks=[Track(title=query, encoded=f"encoded:{query}")])


class EventRecorder:
    """Collects every event published on a bus, in order."""

    EVENT_TYPES = (
        PlayerStart,
        PlayerEnd,
        PlayerEmpty,
        PlayerClosed,
        PlayerException,
        PlayerUpdate,
        PlayerResolveError,
        PlayerDestroy,
        Debug,
    )

    def __init__(self, bus: EventBus) -> None:
        self.events = []
        for event_type in self.EVENT_TYPES:
            bus.subscribe(event_type, self._record)

    async def _record(self, event) -> None:
        self.events.append(event)

    def of_type(self, event_type):
        return [e for e in self.events if isinstance(e, event_type)]


def make_track(title: str, *, resolved: bool = True, **kwargs) -> Track:
    """Build a track, resolved by default so no search is needed."""
    if resolved:
        kwargs.setdefault("encoded", f"encoded:{title}")
    return Track(title=title, **kwargs)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def recorder(event_bus):
    return EventRecorder(event_bus)


@pytest.fixture
def node():
    return FakeNodePlayer()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def searcher():
    return FakeSearcher()


@pytest.fixture
def registry():
    from lavalink_player.infrastructure.registry import InMemoryPlayerRegistry

    return InMemoryPlayerRegistry()


@pytest.fixture
def player(node, gateway, searcher, registry, event_bus):
    """A registered player that has not joined a voice channel yet."""
    from lavalink_player.application.services.player import GuildPlayer

    guild_player = GuildPlayer(
        guild_id=GUILD_ID,
        node=node,
        gateway=gateway,
        searcher=searcher,
        registry=registry,
        event_bus=event_bus,
        text_channel_id=TEXT_CHANNEL_ID,
        search_engine="youtube",
    )
    registry.add(guild_player)
    return guild_player


@pytest_asyncio.fixture
async def connected_player(player):
    await player.connect(VOICE_CHANNEL_ID)
    return player
