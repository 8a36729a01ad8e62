"""In-memory implementation of the player registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lavalink_player.domain.music.repository import PlayerRegistry
from lavalink_player.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from lavalink_player.application.services.player import GuildPlayer

logger = logging.getLogger(__name__)


class InMemoryPlayerRegistry(PlayerRegistry):
    def __init__(self) -> None:
        self._players: dict[int, GuildPlayer] = {}

    def add(self, player: GuildPlayer) -> None:
        self._players[player.guild_id] = player
        logger.debug(LogTemplates.REGISTRY_ADDED, player.guild_id)

    def get(self, guild_id: int) -> GuildPlayer | None:
        return self._players.get(guild_id)

    def remove(self, guild_id: int) -> GuildPlayer | None:
        player = self._players.pop(guild_id, None)
        if player is not None:
            logger.debug(LogTemplates.REGISTRY_REMOVED, guild_id)
        return player

    def all(self) -> list[GuildPlayer]:
        return list(self._players.values())

    def __contains__(self, guild_id: object) -> bool:
        return guild_id in self._players

    def __len__(self) -> int:
        return len(self._players)
