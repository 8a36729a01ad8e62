"""Centralized message constants for error messages, validation, and log output."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Discord ID Validation Errors
    INVALID_SNOWFLAKE = "Discord snowflake ID must be positive"
    SNOWFLAKE_TOO_LARGE = "Discord snowflake ID exceeds maximum value (2^64)"

    # Player Lifecycle Errors
    PLAYER_DESTROYED = "Player is already destroyed"
    PLAYER_CONNECTED = "Player is already connected"
    PLAYER_DISCONNECTED = "Player is already disconnected"

    # Player Argument Errors
    PAUSE_NOT_BOOL = "pause must be a boolean"
    LOOP_INVALID = "loop must be one of 'none', 'queue', 'track'"
    VOLUME_NOT_NUMBER = "volume must be a number"
    TRACK_INVALID = "track must be a Track"
    NO_TRACK_AVAILABLE = "No track is available to play"

    # Resolution Errors
    RESOLVER_NOT_BOUND = "No track searcher is bound to '{title}'"
    NO_SEARCH_RESULTS = "No results found for '{query}'"
    SEARCH_FAILED = "Search failed for '{query}': {error}"

    # Settings Errors
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Player Lifecycle
    PLAYER_CREATED = "Created player for guild %s"
    PLAYER_CONNECTED = "Player %s connected to voice channel %s"
    PLAYER_MOVED = "Player %s moved to voice channel %s"
    PLAYER_DISCONNECTED = "Player %s disconnected"
    PLAYER_DESTROYED = "Player %s destroyed"

    # Commands
    PLAYER_PAUSED = "Player %s paused=%s"
    PLAYER_LOOP_SET = "Player %s loop mode set to %s"
    PLAYER_VOLUME_SET = "Player %s volume set to %s"
    PLAYER_SKIP = "Player %s skipping current track"
    PLAYER_PLAY = "Player %s playing '%s'"
    PLAYER_RESOLVE_FAILED = "Player %s could not resolve '%s': %s"
    PLAYER_RESOLVED_AFTER_DESTROY = "Player %s discarded '%s' resolved after destroy"

    # Node Events
    NODE_EVENT_RECEIVED = "Player %s received node event %s"
    NODE_END_DECISION = "Player %s end reason=%s loop=%s -> %s"
    NODE_TRACK_FAILED = "Player %s could not play '%s' (reason=%s)"
    NODE_ADVANCE_SKIPPED ="Player %s not advancing; state is %s"

    # Track Resolution
    TRACK_RESOLVING = "Resolving '%s' with query '%s'"
    TRACK_RESOLVED = "Resolved '%s' to '%s'"

    # Event Bus
    EVENT_SUBSCRIBED = "Subscribed handler to: %s"
    EVENT_UNSUBSCRIBED = "Unsubscribed handler from %s"
    EVENT_NO_HANDLERS = "No handlers for %s"
    EVENT_PUBLISHING = "Publishing %s to %d handlers"
    EVENT_HANDLER_ERROR = "Error in handler for %s: %s"
    EVENT_HANDLERS_CLEARED = "Cleared all event handlers"

    # Debug Events
    DEBUG_EVENT = "[debug] %s"

    # Registry
    REGISTRY_ADDED = "Registered player for guild %s"
    REGISTRY_REMOVED = "Removed player for guild %s"


class DebugMessages:
    """Text carried by ``Debug`` domain events."""

    CONNECTED = "Player {guild_id} connected"
    MOVED = "Player {guild_id} moved to voice channel {channel_id}"
    DISCONNECTED = "Player disconnected; Guild id: {guild_id}"
    DESTROYED = "Player destroyed; Guild id: {guild_id}"
    DESTROYED_FROM_END = "Player {guild_id} destroyed from end event"
    RESOLVED_AFTER_DESTROY = "Player {guild_id} dropped '{title}' resolved after destroy"
