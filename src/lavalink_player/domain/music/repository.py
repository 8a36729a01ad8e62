"""
Player Registry Interface

Abstract base class for the per-guild player lookup owned by the manager.
Implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lavalink_player.application.services.player import GuildPlayer


class PlayerRegistry(ABC):
    """Registry of live players keyed by guild ID.

    A player only ever calls :meth:`remove`, once, while being destroyed.
    """

    @abstractmethod
    def add(self, player: GuildPlayer) -> None:
        """Register a player under its guild ID."""
        ...

    @abstractmethod
    def get(self, guild_id: int) -> GuildPlayer | None:
        """Return the player for a guild, if any."""
        ...

    @abstractmethod
    def remove(self, guild_id: int) -> GuildPlayer | None:
        """Forget the player for a guild and return it.

        Args:
            guild_id: The Discord guild ID.

        Returns:
            The removed player, or None if none was registered.
        """
        ...

    @abstractmethod
    def __contains__(self, guild_id: object) -> bool: ...

    @abstractmethod
    def __len__(self) -> int: ...
