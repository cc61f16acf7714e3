"""Command-line entry point: ``python -m discord_gsheet`` or ``discord-gsheet``.

Runs one backfill pass over the configured channels and prints the summary.
Exit code is 0 when the run completes (even if some links failed to save)
and 1 on fatal configuration or authentication errors.
"""

import argparse
import asyncio
import logging
import sys

from discord_gsheet.backfill import format_summary, list_entries, run_backfill
from discord_gsheet.config import load_run_config, load_settings
from discord_gsheet.errors import AuthenticationError, ConfigurationError
from discord_gsheet.logging_config import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="discord-gsheet",
        description="Save YouTube/Zoom links from Discord channel history to Google Sheets",
    )
    parser.add_argument("--config", help="Path to config.json (default: CONFIG_PATH or ./config.json)")
    parser.add_argument(
        "--delay",
        type=float,
        help="Seconds to wait between history page fetches (default: PAGE_DELAY_SECONDS or 1.0)",
    )
    parser.add_argument(
        "--list",
        metavar="GENRE",
        dest="list_genre",
        help="Print the stored rows of one genre tab instead of scanning",
    )
    parser.add_argument(
        "--channel",
        action="append",
        dest="channels",
        metavar="ID",
        help="Scan only this configured channel (repeatable; default: all targetChannelIds)",
    )
    return parser


async def _run(args: argparse.Namespace) -> int:
    settings = load_settings()
    configure_logging(settings.log_level)

    overrides = {}
    if args.config:
        overrides["config_path"] = args.config
    if args.delay is not None:
        overrides["page_delay_seconds"] = args.delay
    if overrides:
        settings = settings.model_copy(update=overrides)

    if args.list_genre:
        if not settings.google_spreadsheet_id:
            raise ConfigurationError("GOOGLE_SPREADSHEET_ID is not set in environment or .env file")
        rows = await list_entries(settings, args.list_genre)
        for row in rows:
            print("\t".join(row))
        return 0

    settings.require()
    config = load_run_config(settings.config_path)

    channel_ids = None
    if args.channels:
        unknown = [c for c in args.channels if not config.is_target_channel(c)]
        if unknown:
            raise ConfigurationError(f"Not in targetChannelIds: {', '.join(unknown)}")
        channel_ids = args.channels

    stats = await run_backfill(settings, config, channel_ids)
    print(format_summary(stats))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the backfill, and map fatal errors to exit code 1."""
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(_run(args))
    except (ConfigurationError, AuthenticationError) as exc:
        logger.error("Fatal: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
