"""Discord REST client lifecycle.

The backfill only replays history, so the client logs in over HTTP and never
opens a gateway connection.
"""

import contextlib
import logging
from collections.abc import AsyncIterator

import discord

from discord_gsheet.errors import AuthenticationError

logger = logging.getLogger(__name__)


def _intents() -> discord.Intents:
    intents = discord.Intents.default()
    intents.message_content = True  # Without it, history returns empty content
    return intents


@contextlib.asynccontextmanager
async def open_discord_client(token: str) -> AsyncIterator[discord.Client]:
    """Log in with the bot token and close the client on exit.

    Raises AuthenticationError if Discord rejects the token.
    """
    client = discord.Client(intents=_intents())
    try:
        await client.login(token)
    except discord.LoginFailure as exc:
        await client.close()
        raise AuthenticationError(f"Discord login failed: {exc}") from exc

    logger.info("Logged in to Discord as %s", client.user)
    try:
        yield client
    finally:
        await client.close()
        logger.info("Discord client closed")
