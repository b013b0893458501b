"""Centralized message constants for error messages and log output."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Transport
    NO_CONNECTION = "No available websocket connection for selected node."

    # Command validation
    VOLUME_OUT_OF_RANGE = "Volume {volume} must be between 0 and {max_volume}"
    EMPTY_GUILD_ID = "Guild ID cannot be empty"

    # Settings
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Inbound
    UNEXPECTED_EVENT_TYPE = "Unexpected event type: {event_type}"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Player lifecycle
    PLAYER_CREATED = "Created player for guild %s"
    PLAYER_REBOUND = "Player for guild %s rebound to a new node transport"

    # Commands
    COMMAND_SENDING = "Sending %s for guild %s"
    COMMAND_NOT_CONNECTED = "Cannot send %s for guild %s: node is not connected"
    COMMAND_SWITCH_CHANNEL = "Switching guild %s to voice channel %s"

    # Inbound
    EVENT_RECEIVED = "Received %s for guild %s"
    EVENT_UNKNOWN = "Unexpected event type %r for guild %s"
    STATE_MERGED = "Merged player state for guild %s (position=%s)"
    MESSAGE_IGNORED = "Ignoring node message with op %r for guild %s"
    TRACK_STUCK_STOP_FAILED = "Stop after stuck track failed for guild %s: %s"

    # Notifier
    NOTIFY_SUBSCRIBED = "Subscribed handler to: %s"
    NOTIFY_UNSUBSCRIBED = "Unsubscribed handler from %s"
    NOTIFY_NO_HANDLERS = "No handlers for %s"
    NOTIFY_PUBLISHING = "Publishing %s to %d handlers"
    NOTIFY_HANDLER_ERROR = "Error in handler for %s: %s"
    NOTIFY_CLEARED = "Cleared all notification handlers"
