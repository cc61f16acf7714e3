"""Backfill run wiring: builds the real collaborators and runs the scanner."""

import logging

from discord_gsheet.config import RunConfig, Settings
from discord_gsheet.models.stats import ScanStats
from discord_gsheet.scanner import FixedDelay, HistoryScanner
from discord_gsheet.sheets.client import build_sheets_destination
from discord_gsheet.sheets.service import HistorySink
from discord_gsheet.source.client import open_discord_client
from discord_gsheet.source.messages import DiscordMessageSource

logger = logging.getLogger(__name__)


async def run_backfill(
    settings: Settings,
    config: RunConfig,
    channel_ids: list[str] | None = None,
) -> ScanStats:
    """Authenticate against Google Sheets and Discord, then scan the target channels.

    ``channel_ids`` narrows the run to a subset of the configured targets;
    by default every configured channel is scanned.

    Lets AuthenticationError propagate: credential problems are fatal and are
    raised before any message is read.
    """
    destination = await build_sheets_destination(settings)
    sink = HistorySink(destination)
    channel_ids = channel_ids or config.target_channel_ids
    logger.info("Starting backfill of %d channels", len(channel_ids))

    async with open_discord_client(settings.discord_bot_token) as client:
        scanner = HistoryScanner(
            source=DiscordMessageSource(client),
            sink=sink,
            config=config,
            backoff=FixedDelay(settings.page_delay_seconds),
        )
        return await scanner.run(channel_ids)


async def list_entries(settings: Settings, genre: str) -> list[list[str]]:
    """Read back the stored rows of one genre tab."""
    destination = await build_sheets_destination(settings)
    return await HistorySink(destination).read_entries(genre)


def format_summary(stats: ScanStats) -> str:
    """Build the human-readable end-of-run report."""
    lines: list[str] = []

    for channel in stats.channels:
        line = (
            f'Channel "{channel.name}": {channel.messages_with_links} messages with URLs, '
            f"{channel.saved} saved"
        )
        if channel.failed:
            line += f", {channel.failed} failed"
        if channel.error:
            line += f" (stopped early: {channel.error})"
        lines.append(line)

    for channel_id in stats.skipped_channels:
        lines.append(f"Channel {channel_id}: skipped (not found or not a text channel)")

    lines.append(
        f"Completed! Total: {stats.messages_with_links} messages processed, "
        f"{stats.saved} URLs saved, {stats.failed} failed"
    )
    return "\n".join(lines)
