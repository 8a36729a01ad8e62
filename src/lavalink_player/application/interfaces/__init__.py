"""Port interfaces implemented by the host application."""

from lavalink_player.application.interfaces.node_player import NodePlayer
from lavalink_player.application.interfaces.voice_gateway import VoiceGateway

__all__ = [
    "NodePlayer",
    "VoiceGateway",
]
