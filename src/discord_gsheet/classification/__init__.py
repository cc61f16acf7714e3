"""Genre classification for extracted links."""

from discord_gsheet.classification.genre import (
    WEEKDAY_GENRES,
    classify,
    classify_by_keywords,
    classify_by_weekday,
)

__all__ = [
    "classify",
    "classify_by_keywords",
    "classify_by_weekday",
    "WEEKDAY_GENRES",
]
