"""Shared test fixtures and in-memory fakes for the external collaborators."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from discord_gsheet.app import app
from discord_gsheet.config import RunConfig
from discord_gsheet.errors import ChannelAccessError
from discord_gsheet.models.message import Author, RawMessage

POSTED_AT = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


class FakeDestination:
    """In-memory spreadsheet: tab name -> rows (header included)."""

    def __init__(self, tabs: dict[str, list[list[str]]] | None = None) -> None:
        self.tabs: dict[str, list[list[str]]] = tabs or {}
        self.calls: list[tuple] = []
        self.fail_appends_for: set[str] = set()
        self.fail_header_writes = False

    async def list_tabs(self) -> set[str]:
        self.calls.append(("list_tabs",))
        return set(self.tabs)

    async def create_tab(self, name: str, header_row: list[str]) -> None:
        self.calls.append(("create_tab", name))
        self.tabs[name] = []
        await self.write_header(name, header_row)

    async def read_header(self, name: str) -> list[str]:
        self.calls.append(("read_header", name))
        rows = self.tabs[name]
        return list(rows[0]) if rows else []

    async def write_header(self, name: str, header_row: list[str]) -> None:
        self.calls.append(("write_header", name))
        if self.fail_header_writes:
            raise RuntimeError("503 backend error")
        rows = self.tabs[name]
        if rows:
            rows[0] = list(header_row)
        else:
            rows.append(list(header_row))

    async def append_row(self, name: str, values: list[str]) -> None:
        self.calls.append(("append_row", name))
        if name in self.fail_appends_for:
            raise RuntimeError("quota exceeded")
        if name not in self.tabs:
            raise RuntimeError(f"Unable to parse range: {name}")
        self.tabs[name].append(list(values))

    async def read_rows(self, name: str) -> list[list[str]]:
        self.calls.append(("read_rows", name))
        return [list(row) for row in self.tabs[name][1:]]


class FakeSource:
    """Channel backlogs held newest first; paginates with an exclusive before cursor.

    ``resolve_errors`` maps a channel id to the exception resolving it raises.
    ``fetch_errors`` maps (channel id, before cursor) to the exception that page raises.
    """

    def __init__(self, channels: dict[str, list[RawMessage]]) -> None:
        self.channels = channels
        self.fetches: list[tuple[str, str | None]] = []
        self.resolve_errors: dict[str, Exception] = {}
        self.fetch_errors: dict[tuple[str, str | None], Exception] = {}

    async def resolve_channel(self, channel_id: str):
        if channel_id in self.resolve_errors:
            raise self.resolve_errors[channel_id]
        if channel_id not in self.channels:
            raise ChannelAccessError(channel_id, "not found")
        return SimpleNamespace(id=channel_id, name=f"channel-{channel_id}")

    async def fetch_page(self, channel, page_size: int, before_id: str | None = None):
        self.fetches.append((channel.id, before_id))
        if (channel.id, before_id) in self.fetch_errors:
            raise self.fetch_errors[(channel.id, before_id)]
        messages = self.channels[channel.id]
        start = 0
        if before_id is not None:
            start = [m.id for m in messages].index(before_id) + 1
        return messages[start : start + page_size]


@pytest.fixture
def make_message():
    """Factory for RawMessage with sensible defaults."""

    def _make(
        content: str,
        message_id: str = "1",
        channel_id: str = "100",
        author: str = "alice",
        bot: bool = False,
        created_at: datetime = POSTED_AT,
    ) -> RawMessage:
        return RawMessage(
            id=message_id,
            content=content,
            author=Author(id="U1", name=author, bot=bot),
            created_at=created_at,
            channel_id=channel_id,
        )

    return _make


@pytest.fixture
def run_config() -> RunConfig:
    """A RunConfig with one target channel and two keyword genres."""
    return RunConfig.model_validate(
        {
            "discord": {"targetChannelIds": ["100"]},
            "genres": {
                "AI": ["chatgpt", "Claude"],
                "業務効率化": ["自動化", "GAS"],
                "その他": ["misc"],
            },
            "defaultGenre": "その他",
        }
    )


@pytest.fixture
def fake_destination() -> FakeDestination:
    return FakeDestination()


@pytest.fixture
def fake_source_factory():
    return FakeSource


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)
