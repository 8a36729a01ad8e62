"""Port interface for sending voice state updates to the Discord gateway."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from lavalink_player.domain.shared.types import GuildIdField

if TYPE_CHECKING:
    from ...domain.music.payloads import VoiceStateUpdate


class VoiceGateway(ABC):
    """Interface for the shard connection that owns a guild."""

    @abstractmethod
    async def send(self, guild_id: GuildIdField, payload: "VoiceStateUpdate") -> None:
        """Send an opcode 4 payload on the shard for ``guild_id``.

        ``payload.model_dump()`` is the exact JSON body.
        """
        ...
