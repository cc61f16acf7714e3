"""Discord ingress: client lifecycle and backlog pagination."""

from discord_gsheet.source.client import open_discord_client
from discord_gsheet.source.messages import DiscordMessageSource, to_raw_message

__all__ = [
    "DiscordMessageSource",
    "open_discord_client",
    "to_raw_message",
]
