"""Application services."""

from lavalink_player.application.services.player import GuildPlayer

__all__ = ["GuildPlayer"]
