"""Link, event date, and classified entry models."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class Platform(str, Enum):
    """Hosting platform of an extracted link. Value is the persisted label."""

    VIDEO = "youtube"
    MEETING = "zoom"


class Weekday(str, Enum):
    """Day of week token, Sunday first."""

    SUN = "Sun"
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"

    @property
    def symbol(self) -> str:
        """Single-character glyph written to the weekday column."""
        return _WEEKDAY_SYMBOLS[self]

    @classmethod
    def from_date(cls, value: date) -> "Weekday":
        # date.isoweekday(): Monday=1 .. Sunday=7
        return _SUNDAY_FIRST[value.isoweekday() % 7]


_SUNDAY_FIRST = list(Weekday)
_WEEKDAY_SYMBOLS = dict(zip(_SUNDAY_FIRST, "日月火水木金土"))


class ExtractedLink(BaseModel):
    """One regex match of a supported link in message text."""

    model_config = ConfigDict(frozen=True)

    url: str
    platform: Platform


class ParsedEvent(BaseModel):
    """Event date inferred from a "<month>月<day>日" marker in the message."""

    model_config = ConfigDict(frozen=True)

    month: int
    day: int
    year: int
    weekday: Weekday

    @property
    def event_date(self) -> date:
        return date(self.year, self.month, self.day)

    @property
    def display(self) -> str:
        """Render as written in the channel, e.g. "8月4日"."""
        return f"{self.month}月{self.day}日"


class ClassifiedEntry(BaseModel):
    """The unit of persistence: one row per (message, link) pair."""

    model_config = ConfigDict(frozen=True)

    title: str
    url: str
    platform: Platform
    genre: str
    event_date: str = ""  # Display string, empty when no date was found
    weekday: str = ""  # Weekday symbol, empty when no date was found
    keywords: str = ""
    author: str
    channel_id: str
    created_at: datetime
