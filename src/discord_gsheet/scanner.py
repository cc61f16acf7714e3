"""Backlog scanning orchestration.

Walks each configured channel newest to oldest, one page at a time, and
drives every message through link extraction, metadata heuristics, genre
classification, and the sheet sink. Everything runs in a single sequence:
channels, pages, messages, and links are processed one at a time, and the
only scheduled wait is the backoff between page fetches.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import date

from discord_gsheet.classification.genre import classify
from discord_gsheet.config import RunConfig
from discord_gsheet.errors import ChannelAccessError, PersistenceError
from discord_gsheet.extraction.links import extract_links
from discord_gsheet.extraction.metadata import extract_date, extract_keywords, extract_title
from discord_gsheet.models.entry import ClassifiedEntry, ExtractedLink
from discord_gsheet.models.message import RawMessage
from discord_gsheet.models.stats import ChannelStats, ScanStats
from discord_gsheet.protocols import MessageSource
from discord_gsheet.sheets.service import HistorySink

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class FixedDelay:
    """Backoff policy that waits a constant time between page fetches."""

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds

    async def wait(self) -> None:
        if self.seconds > 0:
            await asyncio.sleep(self.seconds)


class HistoryScanner:
    """Replays channel backlogs into the sink and aggregates run statistics."""

    def __init__(
        self,
        source: MessageSource,
        sink: HistorySink,
        config: RunConfig,
        backoff: FixedDelay | None = None,
        clock: Callable[[], date] = date.today,
        page_size: int = PAGE_SIZE,
    ) -> None:
        self._source = source
        self._sink = sink
        self._config = config
        self._backoff = backoff or FixedDelay(1.0)
        self._clock = clock
        self._page_size = page_size

    async def run(self, channel_ids: list[str] | None = None) -> ScanStats:
        """Scan every channel in order and return the run statistics.

        Channels that cannot be resolved are logged and skipped. The run-level
        summary is always logged, whatever failures happened along the way.
        """
        if channel_ids is None:
            channel_ids = self._config.target_channel_ids

        logger.info("Fetching existing messages from %d channels", len(channel_ids))
        stats = ScanStats()

        for channel_id in channel_ids:
            channel_stats = await self.scan_channel(channel_id)
            if channel_stats is None:
                stats.skipped_channels.append(channel_id)
            else:
                stats.channels.append(channel_stats)

        logger.info(
            "Completed: %d messages with URLs processed, %d URLs saved, %d failed, %d channels skipped",
            stats.messages_with_links,
            stats.saved,
            stats.failed,
            len(stats.skipped_channels),
        )
        return stats

    async def scan_channel(self, channel_id: str) -> ChannelStats | None:
        """Walk one channel's backlog. Returns None if the channel was skipped.

        A failure to resolve the channel skips it. A failed page fetch stops
        the channel and keeps its partial counts. Neither aborts the run.
        """
        try:
            channel = await self._source.resolve_channel(channel_id)
        except ChannelAccessError as exc:
            logger.warning("Skipping channel %s: %s", channel_id, exc.reason)
            return None
        except Exception as exc:
            logger.error("Skipping channel %s: %s", channel_id, exc, exc_info=True)
            return None

        stats = ChannelStats(channel_id=channel_id, name=getattr(channel, "name", channel_id))
        logger.info("Processing channel: %s (%s)", stats.name, channel_id)

        before_id: str | None = None
        while True:
            try:
                page = await self._source.fetch_page(channel, self._page_size, before_id)
            except Exception as exc:
                stats.error = exc.reason if isinstance(exc, ChannelAccessError) else str(exc)
                logger.error(
                    "Stopped reading channel %s after %d saved entries: %s",
                    channel_id,
                    stats.saved,
                    stats.error,
                    exc_info=True,
                )
                break

            if not page:
                break

            for message in page:
                await self._process_message(message, stats)

            before_id = page[-1].id
            await self._backoff.wait()

        logger.info(
            'Channel "%s": %d messages with URLs, %d saved, %d failed',
            stats.name,
            stats.messages_with_links,
            stats.saved,
            stats.failed,
        )
        return stats

    async def _process_message(self, message: RawMessage, stats: ChannelStats) -> None:
        if message.author.bot:
            return

        links = extract_links(message.content)
        if not links:
            return

        stats.messages_with_links += 1

        for link in links:
            entry = self.build_entry(message, link)
            try:
                await self._sink.append(entry.genre, entry)
            except PersistenceError as exc:
                stats.failed += 1
                logger.error(
                    "Failed to save %s (genre %s, channel %s, message %s): %s",
                    link.url,
                    entry.genre,
                    message.channel_id,
                    message.id,
                    exc.reason,
                    exc_info=True,
                )
                continue

            stats.saved += 1
            logger.info(
                "[%s] %s (%s) %s",
                entry.genre,
                entry.event_date,
                entry.weekday or "?",
                entry.title,
            )

    def build_entry(self, message: RawMessage, link: ExtractedLink) -> ClassifiedEntry:
        """Derive the persisted entry for one link of a message. No I/O."""
        title = extract_title(message.content, link.url)
        event = extract_date(message.content, today=self._clock())
        genre = classify(title, link.url, event, self._config)

        return ClassifiedEntry(
            title=title,
            url=link.url,
            platform=link.platform,
            genre=genre,
            event_date=event.display if event else "",
            weekday=event.weekday.symbol if event else "",
            keywords=extract_keywords(title),
            author=message.author.name,
            channel_id=message.channel_id,
            created_at=message.created_at,
        )
