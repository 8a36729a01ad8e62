"""Dependency Injection Container

Holds the process-wide collaborators (settings, event bus, player registry,
voice gateway, track searcher) and builds guild players from them.
Components are created on first access and cached for reuse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..application.interfaces.node_player import NodePlayer
    from ..application.interfaces.voice_gateway import VoiceGateway
    from ..application.services.player import GuildPlayer
    from ..domain.music.repository import PlayerRegistry
    from ..domain.music.search import TrackSearcher
    from ..domain.shared.events import EventBus
    from .settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """Dependency injection container.

    The voice gateway and the track searcher are supplied by the host
    application; everything else is created lazily.
    """

    settings: Settings
    gateway: VoiceGateway
    searcher: TrackSearcher

    _event_bus: EventBus | None = None
    _registry: PlayerRegistry | None = None

    @property
    def event_bus(self) -> EventBus:
        """Get the event bus players publish on."""
        if self._event_bus is None:
            from ..domain.shared.events import EventBus

            self._event_bus = EventBus()
        return self._event_bus

    @property
    def registry(self) -> PlayerRegistry:
        """Get the player registry."""
        if self._registry is None:
            from ..infrastructure.registry import InMemoryPlayerRegistry

            self._registry = InMemoryPlayerRegistry()
        return self._registry

    def configure_logging(self) -> None:
        from ..utils.logging import setup_logging

        setup_logging(self.settings.log_level)

    def get_player(self, guild_id: int) -> GuildPlayer | None:
        return self.registry.get(guild_id)

    async def create_player(
        self,
        guild_id: int,
        *,
        node: NodePlayer,
        voice_channel_id: int | None = None,
        text_channel_id: int | None = None,
    ) -> GuildPlayer:
        """Return the guild's player, creating and registering it if needed.

        When ``voice_channel_id`` is given a new player connects to it.
        """
        existing = self.registry.get(guild_id)
        if existing is not None:
            return existing

        from ..application.services.player import GuildPlayer

        player_settings = self.settings.player
        player = GuildPlayer(
            guild_id=guild_id,
            node=node,
            gateway=self.gateway,
            searcher=self.searcher,
            registry=self.registry,
            event_bus=self.event_bus,
            text_channel_id=text_channel_id,
            self_mute=player_settings.self_mute,
            self_deaf=player_settings.self_deaf,
            search_engine=player_settings.default_search_engine,
        )
        self.registry.add(player)
        logger.info(LogTemplates.PLAYER_CREATED, guild_id)

        if voice_channel_id is not None:
            await player.connect(voice_channel_id)
        return player


def create_container(
    settings: Settings | None = None,
    *,
    gateway: VoiceGateway,
    searcher: TrackSearcher,
) -> Container:
    """Create a container, loading settings from the environment when not given."""
    if settings is None:
        from .settings import get_settings

        settings = get_settings()
    return Container(settings=settings, gateway=gateway, searcher=searcher)
