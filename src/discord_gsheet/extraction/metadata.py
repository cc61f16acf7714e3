"""Title, event date, and keyword heuristics over raw message text.

All three derivations are pure functions of the message text (plus today's
date for year inference) and never touch the network.
"""

import re
from datetime import date

from discord_gsheet.models.entry import ParsedEvent, Weekday

NO_TITLE = "タイトルなし"

# "8月4日", "12月25日": first occurrence anywhere in the message
DATE_PATTERN = re.compile(r"([0-9]{1,2})月([0-9]{1,2})日")

# ASCII and ideographic whitespace, Japanese punctuation, and the ❌/×/＆ markers
KEYWORD_SEPARATORS = re.compile(r"[\s、。！？❌×＆]")
MIN_KEYWORD_LENGTH = 2
MAX_KEYWORDS = 10


def extract_title(text: str, url: str) -> str:
    """Guess a title for the link from the message layout.

    Looks at the first line containing the URL: text before the URL on that
    line wins, then the previous line, then the message's first line. Only the
    first line containing the URL is considered, even if the URL appears there
    for an unrelated reason.
    """
    lines = text.split("\n")

    for i, line in enumerate(lines):
        if url not in line:
            continue
        before_url = line[: line.index(url)].strip()
        if before_url:
            return before_url
        if i > 0:
            previous = lines[i - 1].strip()
            if previous:
                return previous
        break

    return lines[0].strip() or NO_TITLE


def extract_date(text: str, today: date | None = None) -> ParsedEvent | None:
    """Parse the first "<month>月<day>日" marker into a ParsedEvent.

    Messages are archive announcements, so a month later than the current one
    is taken to be from last year. Returns None when there is no marker or the
    marker is not a real calendar date (e.g. "2月30日").
    """
    match = DATE_PATTERN.search(text)
    if match is None:
        return None

    month = int(match.group(1))
    day = int(match.group(2))

    today = today or date.today()
    year = today.year - 1 if month > today.month else today.year

    try:
        event_date = date(year, month, day)
    except ValueError:
        return None

    return ParsedEvent(
        month=month,
        day=day,
        year=year,
        weekday=Weekday.from_date(event_date),
    )


def extract_keywords(title: str) -> str:
    """Build the keyword digest: up to 10 title tokens joined with ", ".

    Tokens shorter than two characters are dropped. Order is preserved and no
    case folding or deduplication is applied.
    """
    keywords = [
        token.strip()
        for token in KEYWORD_SEPARATORS.split(title)
        if len(token.strip()) >= MIN_KEYWORD_LENGTH
    ]
    return ", ".join(keywords[:MAX_KEYWORDS])
