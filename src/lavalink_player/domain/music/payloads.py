"""Typed payloads exchanged with the node and the voice gateway.

Inbound models describe what the node reports (start/end/closed/exception/update).
Outbound models are the directives the player sends. Every model keeps unknown
keys so newer node versions do not break validation.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lavalink_player.domain.music.value_objects import TrackEndReason
from lavalink_player.domain.shared.types import (
    ChannelIdField,
    DurationMs,
    GuildIdField,
    NonEmptyStr,
)


class NodeModel(BaseModel):
    """Base for node payloads: camelCase aliases, extra keys preserved."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )


# === Inbound: node events ===


class TrackStartPayload(NodeModel):
    track: str


class TrackEndPayload(NodeModel):
    track: str | None = None
    reason: str

    @property
    def end_reason(self) -> TrackEndReason | None:
        """Parsed reason, or None when the node reports something unrecognised."""
        return TrackEndReason.parse(self.reason)


class WebSocketClosedPayload(NodeModel):
    code: int
    reason: str = ""
    by_remote: bool = False


class ExceptionDetail(NodeModel):
    message: str | None = None
    severity: str | None = None
    cause: str | None = None


class TrackExceptionPayload(NodeModel):
    track: str | None = None
    exception: ExceptionDetail | None = None
    error: str | None = None

    @property
    def message(self) -> str:
        if self.exception and self.exception.message:
            return self.exception.message
        return self.error or ""


class PlayerUpdateState(NodeModel):
    time: int = 0
    position: DurationMs = 0
    connected: bool = False
    ping: int = -1


class PlayerUpdatePayload(NodeModel):
    state: PlayerUpdateState = Field(default_factory=PlayerUpdateState)

    @property
    def position(self) -> int:
        return self.state.position

    @property
    def timestamp(self) -> int:
        return self.state.time


# === Outbound: directives ===


class FilterState(BaseModel):
    """Mutable node-side filter state; only ``volume`` is managed here."""

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    volume: float = 1.0


class NodePlayOptions(NodeModel):
    """Options forwarded with a play directive."""

    no_replace: bool = False
    start_time: DurationMs | None = None
    end_time: DurationMs | None = None
    pause: bool | None = None
    volume: int | None = None


class PlayOptions(BaseModel):
    """Caller-facing options for ``GuildPlayer.play``."""

    model_config = ConfigDict(frozen=True)

    replace_current: bool = False
    start_time: DurationMs | None = None
    end_time: DurationMs | None = None
    pause: bool | None = None
    volume: int | None = None

    def to_node_options(self) -> NodePlayOptions:
        # The node rejects the request when no_replace is set and something is playing.
        return NodePlayOptions(
            no_replace=False,
            start_time=self.start_time,
            end_time=self.end_time,
            pause=self.pause,
            volume=self.volume,
        )


class PlayTrackRequest(NodeModel):
    encoded: NonEmptyStr
    options: NodePlayOptions = Field(default_factory=NodePlayOptions)


class VolumeDirective(NodeModel):
    guild_id: GuildIdField
    volume: float


class VoiceStateData(BaseModel):
    model_config = ConfigDict(frozen=True)

    guild_id: GuildIdField
    channel_id: ChannelIdField | None
    self_mute: bool = False
    self_deaf: bool = False


class VoiceStateUpdate(BaseModel):
    """Gateway opcode 4 (voice state update)."""

    model_config = ConfigDict(frozen=True)

    op: Literal[4] = 4
    d: VoiceStateData

    @classmethod
    def join(
        cls,
        guild_id: int,
        channel_id: int | None,
        *,
        self_mute: bool = False,
        self_deaf: bool = False,
    ) -> VoiceStateUpdate:
        return cls(
            d=VoiceStateData(
                guild_id=guild_id,
                channel_id=channel_id,
                self_mute=self_mute,
                self_deaf=self_deaf,
            )
        )

    @classmethod
    def leave(cls, guild_id: int) -> VoiceStateUpdate:
        return cls(d=VoiceStateData(guild_id=guild_id, channel_id=None))
