"""Centralized message constants for error messages, logging, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Discord ID Validation Errors
    INVALID_SNOWFLAKE = "Discord snowflake ID must be positive"
    SNOWFLAKE_TOO_LARGE = "Discord snowflake ID exceeds maximum value (2^64)"

    # Track Validation Errors
    EMPTY_TRACK_ID = "Track ID cannot be empty"
    INVALID_TRACK_ID = "Track ID must be an 11-character video identifier"
    EMPTY_PLAYLIST_ID = "Playlist ID cannot be empty"

    # Voting Validation Errors
    NO_VOTE_OPTIONS = "At least one vote option is required"
    DUPLICATE_VOTE_SCORES = "Vote option scores must be unique"

    # Settings Validation Errors
    INVALID_DATABASE_URL = "Database URL must start with sqlite://"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Authentication/Security Errors
    DISCORD_TOKEN_REQUIRED = "DISCORD_TOKEN environment variable is required"
    YOUTUBE_API_KEY_REQUIRED = "CATALOG__YOUTUBE_API_KEY is required for the youtube_api backend"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."
    CONTAINER_NOT_FOUND = "Container not found on bot instance"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Database Lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"

    # Key-value store
    STORE_PUT = "Stored key %s (%d bytes)"
    STORE_DELETED = "Deleted key %s"

    # Session lifecycle
    SESSION_STARTED = "Listening session started (generation=%d, queued=%d)"
    SESSION_ENDED = "Listening session ended (%d tracks in summary)"
    SESSION_GENERATION_BUMPED = "Session generation advanced to %d"

    # Playback
    VOTE_OPENED = "Voting opened for '%s' (%s), %d eligible voters"
    VOTE_CLOSED = "Voting closed for '%s' (%s): total=%d voters=%d eligible=%d"
    QUEUE_ADVANCED = "Advanced queue to '%s' (%s), %d remaining"

    # Voting
    VOTE_CAST = "User %s cast score %d on %s"
    VOTE_RETRACTED = "User %s retracted vote on %s"

    # Roster
    PARTICIPANT_JOINED = "User %s joined the session (%d participants)"
    PARTICIPANT_LEFT = "User %s left the session"
    PARTICIPANT_KICKED = "User %s was removed from the session by %s"

    # Dispatch
    COMMAND_DISPATCHED = "Dispatching %s for user %s"
    COMMAND_REJECTED = "Command %s rejected for user %s: %s"
    CORRUPT_STATE = "Corrupt party state while handling %s: %s"

    # Catalog
    CATALOG_TITLE_LOOKUP_FAILED = "Title lookup failed for %s: %r"
    CATALOG_PLAYLIST_FAILED = "Playlist lookup failed for %s: %r"
    CATALOG_PLAYLIST_LOADED = "Loaded %d tracks from playlist %s"
    CATALOG_CACHE_HIT = "Catalog cache hit for %s"
    CATALOG_BACKEND_SELECTED = "Using catalog backend: %s"

    # Logging
    LOGGING_CONFIG_FALLBACK = (
        "Could not load %s; the listening party bot is logging with the basic console format"
    )

    # Bot Lifecycle
    BOT_STARTING = "Starting listening party bot (environment=%s)"
    BOT_STARTING_RUN = "Starting bot..."
    BOT_STOPPED = "Bot stopped"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down"
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SETUP = "Setting up bot..."
    BOT_CONTAINER_INITIALIZED = "Container initialized"
    BOT_CONTAINER_INIT_FAILED = "Failed to initialize container: %s"
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_COGS_LOADED_SUMMARY = "Loaded %d cogs (%d failed)"
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_READY = "Logged in as %s (ID: %s)"
    BOT_CONNECTED_GUILDS = "Connected to %d guilds"
    BOT_SYNCED_GUILD = "Synced %d commands to guild %s"
    BOT_SYNC_GUILD_FAILED = "Failed to sync commands to guild %s: %s"
    BOT_SYNCED_GLOBAL = "Synced %d global commands"
    BOT_SYNC_GLOBAL_FAILED = "Failed to sync global commands: %s"
    BOT_SYNC_ON_STARTUP_FAILED = "Command sync on startup failed: %s"
    BOT_SLASH_COMMAND_ERROR = "Slash command error in /%s: %r"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_CONTAINER_SHUTDOWN = "Container shut down"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error shutting down container: %s"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %.1fs"
    BOT_VOTE_BUTTON_UNKNOWN = "Ignoring malformed vote button custom_id: %s"


class PartyMessages:
    """User-facing messages for the listening party."""

    # Rejections
    REJECT_ALREADY_ACTIVE = "**A session is already running.**"
    REJECT_NOT_ACTIVE = "**There is no active session.**"
    REJECT_VOTE_IN_PROGRESS = "A song is already playing! End its vote first with `/vote-end`."
    REJECT_NO_CURRENT_SONG = "Nothing is playing right now."
    REJECT_QUEUE_EMPTY = (
        "**No songs left in the queue.** Use `/vote-start <url>` to add one manually."
    )
    REJECT_SESSION_CLOSED = "This session has already ended."
    REJECT_VOTE_CLOSED = "Voting for this song has already closed."
    REJECT_NOT_A_PARTICIPANT = "Join the session with `/enter` before voting."
    REJECT_NOT_ELIGIBLE = (
        "You joined after this song started. You can vote from the next song on."
    )
    REJECT_INVALID_SCORE = "That vote option is no longer available."
    REJECT_ALREADY_JOINED = "You are already in this session."
    REJECT_NOT_JOINED = "You are not in this session."
    REJECT_TARGET_NOT_JOINED = "That user is not in this session."
    REJECT_FORBIDDEN = "Only the session manager can do that."
    REJECT_INVALID_REFERENCE = (
        "**Invalid URL.** Please provide a valid YouTube playlist link."
    )
    REJECT_UNRESOLVABLE_URL = "Could not read a YouTube video from that link."
    REJECT_EMPTY_OR_INACCESSIBLE = (
        "**Could not load the playlist.**\nMake sure it is public and not empty."
    )
    STATE_CORRUPT = "The party state looks damaged. Please ask the manager to restart the session."
    UNEXPECTED_ERROR = "❌ Something went wrong while handling that. Please try again."
    GUILD_ONLY = "This command can only be used in a server."

    # Session
    SESSION_STARTED = "**A new listening session has started!**"
    SESSION_STARTED_WITH_PLAYLIST = (
        "**A new listening session has started!**\n**Playlist loaded:** {count} songs waiting"
    )
    SESSION_ENDED = "**The session has ended.**\n\n**Final results:**\n{summary}"
    SESSION_SUMMARY_LINE = "• **{title}**: {average:.2f} avg ({voters} votes)"
    SESSION_SUMMARY_EMPTY = "No songs saved."

    # Playback
    NOW_PLAYING = "🎶 **Now playing**"
    NOW_PLAYING_NEXT = "🎶 **Next song** (remaining: {remaining})"
    VOTE_ENDED = (
        "**Voting closed!** ({title})\n"
        "**Result**: {total} points from {voters}/{eligible} voters (avg {average:.2f})"
    )
    VOTE_ENDED_HIGH_APPROVAL = "🔥 The room wants to hear this one again!"

    # Voting
    VOTE_CAST = "**Vote recorded!** ({label})"
    VOTE_RETRACTED = "Your vote was cancelled."

    # Roster
    JOINED = "You joined the session! ({count} participants)"
    LEFT = "You left the session."
    KICKED = "<@{user_id}> was removed from the session."
    PARTICIPANTS = "**Participants ({count}):**\n{lines}"
    PARTICIPANTS_LINE = "• <@{user_id}>"
    PARTICIPANTS_EMPTY = "No one has joined yet."
