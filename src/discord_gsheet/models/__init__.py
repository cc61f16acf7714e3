"""Data models for the backfill pipeline."""

from discord_gsheet.models.entry import (
    ClassifiedEntry,
    ExtractedLink,
    ParsedEvent,
    Platform,
    Weekday,
)
from discord_gsheet.models.message import Author, RawMessage
from discord_gsheet.models.stats import ChannelStats, ScanStats

__all__ = [
    "Author",
    "RawMessage",
    "Platform",
    "ExtractedLink",
    "Weekday",
    "ParsedEvent",
    "ClassifiedEntry",
    "ChannelStats",
    "ScanStats",
]
