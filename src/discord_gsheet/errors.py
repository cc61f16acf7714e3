"""Error taxonomy for the backfill run.

Fatal errors (configuration, authentication) abort the run before any message
is processed. Recoverable errors (channel access, persistence) are caught by the
scanner at the narrowest scope, logged with context, and never retried.
"""


class DiscordGsheetError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(DiscordGsheetError):
    """Settings or the run config file are missing or invalid. Fatal."""


class AuthenticationError(DiscordGsheetError):
    """Discord login or Google credential setup failed. Fatal."""


class ChannelAccessError(DiscordGsheetError):
    """A configured channel cannot be resolved or is not a text channel."""

    def __init__(self, channel_id: str, reason: str) -> None:
        self.channel_id = channel_id
        self.reason = reason
        super().__init__(f"Channel {channel_id}: {reason}")


class PersistenceError(DiscordGsheetError):
    """Provisioning a tab or appending a row failed for one link."""

    def __init__(self, genre: str, url: str | None, reason: str) -> None:
        self.genre = genre
        self.url = url
        self.reason = reason
        target = url or "entry"
        super().__init__(f"Failed to persist {target} to tab {genre!r}: {reason}")
