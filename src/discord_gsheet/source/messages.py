"""Discord implementation of the MessageSource protocol."""

import asyncio
import logging

import aiohttp
import discord

from discord_gsheet.errors import ChannelAccessError
from discord_gsheet.models.message import Author, RawMessage

logger = logging.getLogger(__name__)

# Network failures below discord.py's HTTPException
TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)


def to_raw_message(message: discord.Message) -> RawMessage:
    """Copy the fields the pipeline needs out of a discord.Message."""
    return RawMessage(
        id=str(message.id),
        content=message.content,
        author=Author(
            id=str(message.author.id),
            name=message.author.name,
            bot=message.author.bot,
        ),
        created_at=message.created_at,
        channel_id=str(message.channel.id),
    )


class DiscordMessageSource:
    """Reads channel backlogs through a logged-in discord.Client."""

    def __init__(self, client: discord.Client) -> None:
        self._client = client

    async def resolve_channel(self, channel_id: str) -> discord.TextChannel:
        """Fetch a guild text channel by id.

        Raises ChannelAccessError if the id is malformed, the channel does not
        exist or is not visible to the bot, it is not a text channel, or the
        request fails at the network level.
        """
        try:
            channel = await self._client.fetch_channel(int(channel_id))
        except ValueError as exc:
            raise ChannelAccessError(channel_id, "not a valid channel id") from exc
        except discord.NotFound as exc:
            raise ChannelAccessError(channel_id, "not found") from exc
        except discord.Forbidden as exc:
            raise ChannelAccessError(channel_id, "missing access") from exc
        except (discord.HTTPException, discord.InvalidData) as exc:
            raise ChannelAccessError(channel_id, str(exc)) from exc
        except TRANSPORT_ERRORS as exc:
            raise ChannelAccessError(channel_id, f"connection failed: {exc!r}") from exc

        if not isinstance(channel, discord.TextChannel):
            raise ChannelAccessError(channel_id, f"not a text channel ({type(channel).__name__})")
        return channel

    async def fetch_page(
        self,
        channel: discord.TextChannel,
        page_size: int,
        before_id: str | None = None,
    ) -> list[RawMessage]:
        """Fetch one page of history older than before_id, newest first.

        Raises ChannelAccessError if Discord refuses the history request or
        the connection drops.
        """
        before = discord.Object(id=int(before_id)) if before_id else None
        try:
            return [
                to_raw_message(message)
                async for message in channel.history(limit=page_size, before=before)
            ]
        except discord.HTTPException as exc:
            raise ChannelAccessError(str(channel.id), f"history fetch failed: {exc}") from exc
        except TRANSPORT_ERRORS as exc:
            raise ChannelAccessError(str(channel.id), f"history fetch failed: {exc!r}") from exc
