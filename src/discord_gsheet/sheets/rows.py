"""Pure functions mapping ClassifiedEntry to spreadsheet rows and ranges."""

from discord_gsheet.models.entry import ClassifiedEntry

# Event date, weekday, posted at, title, URL, type, keywords, author, channel id
HEADER_ROW = [
    "イベント日付",
    "曜日",
    "投稿日時",
    "タイトル",
    "URL",
    "タイプ",
    "キーワード",
    "投稿者",
    "チャンネルID",
]

LAST_COLUMN = "I"


def build_row(entry: ClassifiedEntry) -> list[str]:
    """Map an entry to the 9 column values in HEADER_ROW order.

    Pure function. The timestamp is ISO 8601 with its UTC offset so the exact
    instant survives the round trip through the sheet.
    """
    return [
        entry.event_date,
        entry.weekday,
        entry.created_at.isoformat(),
        entry.title,
        entry.url,
        entry.platform.value,
        entry.keywords,
        entry.author,
        entry.channel_id,
    ]


def quote_tab(name: str) -> str:
    """Quote a tab name for A1 notation ("My Tab" -> "'My Tab'")."""
    return "'" + name.replace("'", "''") + "'"


def a1_range(name: str, cells: str = f"A:{LAST_COLUMN}") -> str:
    """Build an A1 range such as 'genre'!A:I for the given tab."""
    return f"{quote_tab(name)}!{cells}"
