"""Guild Player - per-guild playback state machine over a node player."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from ...domain.music.end_policy import EndDecision, decide_next_action
from ...domain.music.entities import SearchOptions, SearchResult, Track
from ...domain.music.payloads import (
    FilterState,
    PlayerUpdatePayload,
    PlayOptions,
    PlayTrackRequest,
    TrackEndPayload,
    TrackExceptionPayload,
    TrackStartPayload,
    VoiceStateUpdate,
    VolumeDirective,
    WebSocketClosedPayload,
)
from ...domain.music.queue import TrackQueue
from ...domain.music.value_objects import (
    EndAction,
    LoopMode,
    NodeEvent,
    PlayerState,
    RequeuePosition,
)
from ...domain.shared.events import (
    Debug,
    DomainEvent,
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
from ...domain.shared.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    NoTrackAvailableError,
    ResolutionError,
)
from ...domain.shared.messages import DebugMessages, ErrorMessages, LogTemplates
from ...domain.shared.types import ChannelIdField, GuildIdField
from ...domain.shared.validators import is_real_number, validate_discord_snowflake

if TYPE_CHECKING:
    from ...domain.music.repository import PlayerRegistry
    from ...domain.music.search import TrackSearcher
    from ..interfaces.node_player import NodePlayer
    from ..interfaces.voice_gateway import VoiceGateway

logger = logging.getLogger(__name__)


class GuildPlayer:
    """Controls playback for one guild.

    Commands go out to the node player and the voice gateway; node events
    come back in through the listeners registered in ``__init__`` and are
    republished as domain events on the event bus.

    Concurrency: everything runs on one event loop. ``play()`` suspends only
    while resolving its track, after ``queue.current`` is already committed.
    A ``skip()`` during that window races the pending play; a ``destroy()``
    during that window wins and the late result is dropped. Lifecycle
    commands are serialised by a per-player lock.
    """

    def __init__(
        self,
        *,
        guild_id: GuildIdField,
        node: NodePlayer,
        gateway: VoiceGateway,
        searcher: TrackSearcher,
        registry: PlayerRegistry,
        event_bus: EventBus,
        voice_channel_id: ChannelIdField | None = None,
        text_channel_id: ChannelIdField | None = None,
        self_mute: bool = False,
        self_deaf: bool = True,
        search_engine: str | None = None,
    ) -> None:
        self.guild_id = validate_discord_snowflake(guild_id)
        self.voice_channel_id = voice_channel_id
        self.text_channel_id = text_channel_id
        self.queue = TrackQueue()
        self.state = PlayerState.CONNECTING
        self.paused = True
        self.loop = LoopMode.NONE
        self.data: dict[str, Any] = {}

        self._node = node
        self._gateway = gateway
        self._searcher = searcher
        self._registry = registry
        self._event_bus = event_bus
        self._self_mute = self_mute
        self._self_deaf = self_deaf
        self._search_engine = search_engine
        self._lifecycle_lock = asyncio.Lock()

        node.add_listener(NodeEvent.START, self._on_track_start)
        node.add_listener(NodeEvent.END, self._on_track_end)
        node.add_listener(NodeEvent.CLOSED, self._on_closed)
        node.add_listener(NodeEvent.EXCEPTION, self._on_exception)
        node.add_listener(NodeEvent.UPDATE, self._on_update)

    def __repr__(self) -> str:
        return (
            f"GuildPlayer(guild_id={self.guild_id}, state={self.state.value}, "
            f"paused={self.paused}, loop={self.loop.value}, queue={len(self.queue)})"
        )

    @property
    def playing(self) -> bool:
        return not self.paused

    @property
    def volume(self) -> float:
        return self._node.filters.volume

    @property
    def filters(self) -> FilterState:
        return self._node.filters

    # === Lifecycle ===

    # Lifecycle commands change state under the lock and publish only after
    # releasing it.

    async def connect(self, voice_channel_id: ChannelIdField) -> GuildPlayer:
        """Join ``voice_channel_id`` and mark the player connected.

        Channel and state are only committed once the join was sent.
        """
        async with self._lifecycle_lock:
            self._ensure_not_destroyed("connect")
            if self.state is PlayerState.CONNECTED or self.voice_channel_id is not None:
                raise InvalidStateError(
                    "connect", self.state.value, ErrorMessages.PLAYER_CONNECTED
                )

            await self._send_voice_join(voice_channel_id)
            self.voice_channel_id = voice_channel_id
            self.state = PlayerState.CONNECTED

        logger.info(LogTemplates.PLAYER_CONNECTED, self.guild_id, voice_channel_id)
        await self._debug(DebugMessages.CONNECTED.format(guild_id=self.guild_id))
        return self

    async def disconnect(self) -> GuildPlayer:
        """Leave the voice channel, pausing playback first."""
        async with self._lifecycle_lock:
            await self._disconnect()

        await self._debug(DebugMessages.DISCONNECTED.format(guild_id=self.guild_id))
        return self

    async def destroy(self) -> GuildPlayer:
        """Tear the player down. Only ever succeeds once."""
        self._ensure_not_tearing_down()
        async with self._lifecycle_lock:
            # Another destroy may have finished while this one waited.
            self._ensure_not_tearing_down()

            disconnected = False
            if self.voice_channel_id is not None and self.state is not PlayerState.DISCONNECTED:
                await self._disconnect()
                disconnected = True

            self.state = PlayerState.DESTROYING
            try:
                await self._node.destroy()
            finally:
                self._registry.remove(self.guild_id)
                self.state = PlayerState.DESTROYED

        logger.info(LogTemplates.PLAYER_DESTROYED, self.guild_id)
        if disconnected:
            await self._debug(DebugMessages.DISCONNECTED.format(guild_id=self.guild_id))
        await self._emit(PlayerDestroy(guild_id=self.guild_id, player=self))
        await self._debug(DebugMessages.DESTROYED.format(guild_id=self.guild_id))
        return self

    async def set_voice_channel(self, voice_channel_id: ChannelIdField) -> GuildPlayer:
        """Move to another voice channel; the voice session is re-established."""
        async with self._lifecycle_lock:
            self._ensure_not_destroyed("set_voice_channel")
            await self._send_voice_join(voice_channel_id)
            self.voice_channel_id = voice_channel_id
            self.state = PlayerState.CONNECTING

        logger.info(LogTemplates.PLAYER_MOVED, self.guild_id, voice_channel_id)
        await self._debug(
            DebugMessages.MOVED.format(guild_id=self.guild_id, channel_id=voice_channel_id)
        )
        return self

    def set_text_channel(self, text_channel_id: ChannelIdField) -> GuildPlayer:
        self._ensure_not_destroyed("set_text_channel")
        self.text_channel_id = text_channel_id
        return self

    # === Playback commands ===

    async def pause(self, pause: bool) -> GuildPlayer:
        """Pause or resume. Does nothing if already in the requested state."""
        self._ensure_not_destroyed("pause")
        if not isinstance(pause, bool):
            raise InvalidArgumentError(ErrorMessages.PAUSE_NOT_BOOL, field="pause")

        if self.paused == pause:
            return self

        self.paused = pause
        await self._node.set_paused(pause)
        logger.debug(LogTemplates.PLAYER_PAUSED, self.guild_id, pause)
        return self

    def set_loop(self, loop: LoopMode | str | None = None) -> GuildPlayer:
        """Set the loop mode, or cycle none -> queue -> track when called without one."""
        self._ensure_not_destroyed("set_loop")
        if loop is None:
            self.loop = self.loop.next_mode()
        else:
            mode = LoopMode.parse(loop)
            if mode is None:
                raise InvalidArgumentError(ErrorMessages.LOOP_INVALID, field="loop")
            self.loop = mode

        logger.debug(LogTemplates.PLAYER_LOOP_SET, self.guild_id, self.loop.value)
        return self

    async def set_volume(self, volume: float) -> GuildPlayer:
        """Set the volume in percent (100 is unchanged)."""
        self._ensure_not_destroyed("set_volume")
        if not is_real_number(volume):
            raise InvalidArgumentError(ErrorMessages.VOLUME_NOT_NUMBER, field="volume")

        self._node.filters.volume = volume / 100
        await self._node.update_volume(
            VolumeDirective(guild_id=self.guild_id, volume=self._node.filters.volume * 100)
        )
        logger.debug(LogTemplates.PLAYER_VOLUME_SET, self.guild_id, volume)
        return self

    async def skip(self) -> GuildPlayer:
        """Stop the current track. The queue advances when the node reports the end."""
        self._ensure_not_destroyed("skip")
        await self._node.stop_track()
        logger.debug(LogTemplates.PLAYER_SKIP, self.guild_id)
        return self

    async def play(
        self, track: Track | None = None, options: PlayOptions | None = None
    ) -> GuildPlayer:
        """Play ``track`` now, or the current/next queued track when none is given.

        Unless ``options.replace_current`` is set, a track that is already
        current goes back to the front of the queue. A track that cannot be
        resolved is reported with ``PlayerResolveError`` and skipped.

        Raises:
            InvalidStateError: The player is destroyed.
            InvalidArgumentError: ``track`` is not a Track.
            NoTrackAvailableError: Nothing to play.
        """
        self._ensure_not_destroyed("play")
        if track is not None and not isinstance(track, Track):
            raise InvalidArgumentError(ErrorMessages.TRACK_INVALID, field="track")
        if track is None and self.queue.total_size == 0:
            raise NoTrackAvailableError(ErrorMessages.NO_TRACK_AVAILABLE)

        options = options or PlayOptions()

        if track is not None:
            if not options.replace_current and self.queue.current is not None:
                self.queue.unshift(self.queue.current)
            self.queue.current = track
        elif self.queue.current is None:
            self.queue.current = self.queue.shift()

        current = self.queue.current
        if current is None:
            raise NoTrackAvailableError(ErrorMessages.NO_TRACK_AVAILABLE)

        current.bind_resolver(self._searcher, self._search_engine)
        encoded: str | None = None
        error: ResolutionError | None = None
        try:
            encoded = await self._resolve_encoded(current)
        except ResolutionError as e:
            error = e

        if self.state.is_tearing_down:
            logger.debug(LogTemplates.PLAYER_RESOLVED_AFTER_DESTROY, self.guild_id, current.title)
            await self._debug(
                DebugMessages.RESOLVED_AFTER_DESTROY.format(
                    guild_id=self.guild_id, title=current.title
                )
            )
            return self

        if encoded is None:
            message = error.message if error is not None else ""
            logger.warning(LogTemplates.PLAYER_RESOLVE_FAILED, self.guild_id, current.title, message)
            await self._emit(
                PlayerResolveError(guild_id=self.guild_id, player=self, track=current, error=message)
            )
            return await self.skip()

        await self._node.play_track(
            PlayTrackRequest(encoded=encoded, options=options.to_node_options())
        )
        logger.info(LogTemplates.PLAYER_PLAY, self.guild_id, current.title)
        return self

    async def _resolve_encoded(self, track: Track) -> str:
        await track.resolve()
        if track.encoded is None:
            raise ResolutionError(track.title)
        return track.encoded

    async def search(self, query: str, options: SearchOptions | None = None) -> SearchResult:
        """Search with the player's searcher, defaulting to its search engine."""
        return await self._searcher.search(
            query, options or SearchOptions(engine=self._search_engine)
        )

    # === Node events ===

    async def _on_track_start(self, payload: TrackStartPayload | dict[str, Any]) -> None:
        payload = TrackStartPayload.model_validate(payload)
        logger.debug(LogTemplates.NODE_EVENT_RECEIVED, self.guild_id, NodeEvent.START.value)

        self.paused = False
        track = self.queue.find_by_encoded(payload.track)
        await self._emit(PlayerStart(guild_id=self.guild_id, player=self, track=track))

    async def _on_track_end(self, payload: TrackEndPayload | dict[str, Any]) -> None:
        payload = TrackEndPayload.model_validate(payload)
        decision = decide_next_action(
            payload.end_reason, self.loop, self.queue.snapshot(), self.state
        )
        logger.debug(
            LogTemplates.NODE_END_DECISION,
            self.guild_id,
            payload.reason,
            self.loop.value,
            decision.action.value,
        )

        if decision.action is EndAction.IGNORE:
            await self._debug(DebugMessages.DESTROYED_FROM_END.format(guild_id=self.guild_id))
            return

        if decision.action is EndAction.NOTIFY_ONLY:
            await self._emit(PlayerEnd(guild_id=self.guild_id, player=self))
            return

        finished = self._apply_end_decision(decision)
        if decision.failed:
            logger.warning(
                LogTemplates.NODE_TRACK_FAILED,
                self.guild_id,
                finished.title if finished else None,
                payload.reason,
            )

        if decision.action is EndAction.IDLE:
            await self._emit(PlayerEmpty(guild_id=self.guild_id, player=self))
            return

        await self._emit(PlayerEnd(guild_id=self.guild_id, player=self, track=finished))
        await self._advance()

    def _apply_end_decision(self, decision: EndDecision) -> Track | None:
        """Move the finished track out of ``current``; requeue it first when looping."""
        finished = self.queue.current

        if finished is not None:
            if decision.requeue is RequeuePosition.FRONT:
                self.queue.unshift(finished)
            elif decision.requeue is RequeuePosition.BACK:
                self.queue.push(finished)

        self.queue.previous = finished
        self.queue.current = None
        if decision.paused is not None:
            self.paused = decision.paused
        return finished

    async def _advance(self) -> None:
        # End handlers may have destroyed the player or emptied the queue.
        if self.state.is_tearing_down:
            logger.debug(LogTemplates.NODE_ADVANCE_SKIPPED, self.guild_id, self.state.value)
            return
        if self.queue.total_size == 0:
            self.paused = True
            await self._emit(PlayerEmpty(guild_id=self.guild_id, player=self))
            return
        await self.play()

    async def _on_closed(self, payload: WebSocketClosedPayload | dict[str, Any]) -> None:
        payload = WebSocketClosedPayload.model_validate(payload)
        logger.debug(LogTemplates.NODE_EVENT_RECEIVED, self.guild_id, NodeEvent.CLOSED.value)

        self.paused = True
        await self._emit(PlayerClosed(guild_id=self.guild_id, player=self, payload=payload))

    async def _on_exception(self, payload: TrackExceptionPayload | dict[str, Any]) -> None:
        payload = TrackExceptionPayload.model_validate(payload)
        logger.debug(LogTemplates.NODE_EVENT_RECEIVED, self.guild_id, NodeEvent.EXCEPTION.value)

        self.paused = True
        await self._emit(PlayerException(guild_id=self.guild_id, player=self, payload=payload))

    async def _on_update(self, payload: PlayerUpdatePayload | dict[str, Any]) -> None:
        payload = PlayerUpdatePayload.model_validate(payload)
        await self._emit(PlayerUpdate(guild_id=self.guild_id, player=self, payload=payload))

    # === Helpers ===

    def _ensure_not_destroyed(self, operation: str) -> None:
        if self.state.is_destroyed:
            raise InvalidStateError(operation, self.state.value, ErrorMessages.PLAYER_DESTROYED)

    def _ensure_not_tearing_down(self) -> None:
        if self.state.is_tearing_down:
            raise InvalidStateError("destroy", self.state.value, ErrorMessages.PLAYER_DESTROYED)

    async def _disconnect(self) -> None:
        """Leave the voice channel. The caller holds the lifecycle lock and publishes."""
        self._ensure_not_destroyed("disconnect")
        if self.state is PlayerState.DISCONNECTED or self.voice_channel_id is None:
            raise InvalidStateError(
                "disconnect", self.state.value, ErrorMessages.PLAYER_DISCONNECTED
            )

        self.state = PlayerState.DISCONNECTING
        await self.pause(True)
        await self._gateway.send(self.guild_id, VoiceStateUpdate.leave(self.guild_id))
        self.voice_channel_id = None
        self.state = PlayerState.DISCONNECTED
        logger.info(LogTemplates.PLAYER_DISCONNECTED, self.guild_id)

    async def _send_voice_join(self, voice_channel_id: ChannelIdField) -> None:
        payload = VoiceStateUpdate.join(
            self.guild_id,
            voice_channel_id,
            self_mute=self._self_mute,
            self_deaf=self._self_deaf,
        )
        await self._gateway.send(self.guild_id, payload)

    async def _emit(self, event: DomainEvent) -> None:
        await self._event_bus.publish(event)

    async def _debug(self, message: str) -> None:
        logger.debug(LogTemplates.DEBUG_EVENT, message)
        await self._event_bus.publish(Debug(message=message))
