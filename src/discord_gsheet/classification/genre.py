"""Genre classification by event weekday or by title/URL keywords.

Both rules are pure and stateless. ``classify`` is the run wiring that picks
one of them based on whether an event date was found.
"""

from discord_gsheet.config import RunConfig
from discord_gsheet.models.entry import ParsedEvent, Weekday

LIVE_STREAM_GENRE = "ユニコ バイブコーディング生配信"
EFFICIENCY_GENRE = "業務効率化"
CO_WORKING_GENRE = "バイブコーディング共同作業会"

# Fri/Sat fall through to the configured default genre
WEEKDAY_GENRES: dict[Weekday, str] = {
    Weekday.SUN: LIVE_STREAM_GENRE,
    Weekday.MON: LIVE_STREAM_GENRE,
    Weekday.TUE: LIVE_STREAM_GENRE,
    Weekday.WED: EFFICIENCY_GENRE,
    Weekday.THU: CO_WORKING_GENRE,
}


def classify_by_weekday(weekday: Weekday | None, default_genre: str) -> str:
    """Map the event weekday to its recurring-session genre."""
    if weekday is None:
        return default_genre
    return WEEKDAY_GENRES.get(weekday, default_genre)


def classify_by_keywords(
    title: str,
    url: str,
    genres: dict[str, list[str]],
    default_genre: str,
) -> str:
    """Return the first genre (in config order) with a keyword hit in title or URL.

    Matching is a case-insensitive substring test. The default genre's own
    keyword list is never consulted.
    """
    text = f"{title} {url}".lower()

    for genre, keywords in genres.items():
        if genre == default_genre:
            continue
        if any(keyword.lower() in text for keyword in keywords):
            return genre

    return default_genre


def classify(title: str, url: str, event: ParsedEvent | None, config: RunConfig) -> str:
    """Pick the genre for one link.

    A parsed event date always decides via the weekday rule. Without one, the
    keyword rule runs only when ``keyword_fallback`` is enabled.
    """
    if event is not None:
        return classify_by_weekday(event.weekday, config.default_genre)
    if config.keyword_fallback:
        return classify_by_keywords(title, url, config.genres, config.default_genre)
    return config.default_genre
