"""Link and metadata extraction from message text.

Public API:
    extract_links(text) -> list[ExtractedLink]
    extract_title(text, url) -> str
    extract_date(text, today=None) -> ParsedEvent | None
    extract_keywords(title) -> str
"""

from discord_gsheet.extraction.links import extract_links
from discord_gsheet.extraction.metadata import (
    NO_TITLE,
    extract_date,
    extract_keywords,
    extract_title,
)

__all__ = [
    "extract_date",
    "extract_keywords",
    "extract_links",
    "extract_title",
    "NO_TITLE",
]
