"""Domain event bus for publishing and subscribing to player events."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from lavalink_player.domain.music.entities import Track
from lavalink_player.domain.music.payloads import (
    PlayerUpdatePayload,
    TrackExceptionPayload,
    WebSocketClosedPayload,
)
from lavalink_player.domain.shared.datetime_utils import utcnow
from lavalink_player.domain.shared.messages import LogTemplates
from lavalink_player.domain.shared.types import DiscordSnowflake, NonEmptyStr, UtcDatetimeField

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="DomainEvent")
EventHandler = Callable[[T], Awaitable[None]]


class DomainEvent(BaseModel):
    """Base class for all domain events."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    event_id: NonEmptyStr = Field(default_factory=lambda: str(uuid4()))
    occurred_at: UtcDatetimeField = Field(default_factory=utcnow)


# === Player Events ===


class PlayerEvent(DomainEvent):
    """Event raised by a guild player; ``player`` is the emitting instance."""

    guild_id: DiscordSnowflake
    player: Any = Field(default=None, repr=False, exclude=True)


class PlayerStart(PlayerEvent):
    track: Track | None = None


class PlayerEnd(PlayerEvent):
    track: Track | None = None


class PlayerEmpty(PlayerEvent):
    pass


class PlayerClosed(PlayerEvent):
    payload: WebSocketClosedPayload


class PlayerException(PlayerEvent):
    payload: TrackExceptionPayload


class PlayerUpdate(PlayerEvent):
    payload: PlayerUpdatePayload


class PlayerResolveError(PlayerEvent):
    track: Track
    error: str = ""


class PlayerDestroy(PlayerEvent):
    pass


class Debug(DomainEvent):
    """Informational message; never represents a failure."""

    message: str


# === Event Bus ===


class EventBus:
    """In-memory pub/sub event bus for domain events.

    Handlers are called concurrently. Exceptions in handlers are logged
    but do not prevent other handlers from running.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler[Any]]] = defaultdict(list)

    def subscribe(self, event_type: type[T], handler: EventHandler[T]) -> None:
        self._handlers[event_type].append(handler)
        logger.debug(LogTemplates.EVENT_SUBSCRIBED, event_type.__name__)

    def unsubscribe(self, event_type: type[T], handler: EventHandler[T]) -> None:
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)
            logger.debug(LogTemplates.EVENT_UNSUBSCRIBED, event_type.__name__)

    async def publish(self, event: DomainEvent) -> None:
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug(LogTemplates.EVENT_NO_HANDLERS, event_type.__name__)
            return

        logger.debug(LogTemplates.EVENT_PUBLISHING, event_type.__name__, len(handlers))

        async def safe_call(handler: EventHandler[Any]) -> None:
            try:
                await handler(event)
            except Exception as e:
                logger.exception(LogTemplates.EVENT_HANDLER_ERROR, event_type.__name__, e)

        async with asyncio.TaskGroup() as tg:
            for handler in handlers:
                tg.create_task(safe_call(handler))

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
        logger.debug(LogTemplates.EVENT_HANDLERS_CLEARED)
