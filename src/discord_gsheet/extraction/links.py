"""YouTube and Zoom link detection in raw message text."""

import re

from discord_gsheet.models.entry import ExtractedLink, Platform

# Scheme and "www." are optional: members often paste bare "youtu.be/..." links
VIDEO_PATTERNS = (
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/watch\?v=[A-Za-z0-9_-]+"),
    re.compile(r"(?:https?://)?(?:www\.)?youtu\.be/[A-Za-z0-9_-]+"),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/live/[A-Za-z0-9_-]+"),
)

# Any single subdomain label (us02web., sub., ...) then the whole non-whitespace path
MEETING_PATTERN = re.compile(r"(?:https?://)?(?:[A-Za-z0-9_-]+\.)?zoom\.us/\S+")


def extract_links(text: str) -> list[ExtractedLink]:
    """Extract all YouTube and Zoom links from message text.

    Patterns are applied one after another (watch, short, live, then Zoom),
    each globally, so the result is grouped by pattern and in text order
    within a pattern. Repeated URLs are kept: a URL pasted twice yields two
    links.
    """
    links: list[ExtractedLink] = []
    for pattern in VIDEO_PATTERNS:
        links.extend(
            ExtractedLink(url=match.group(0), platform=Platform.VIDEO)
            for match in pattern.finditer(text)
        )
    links.extend(
        ExtractedLink(url=match.group(0), platform=Platform.MEETING)
        for match in MEETING_PATTERN.finditer(text)
    )
    return links
