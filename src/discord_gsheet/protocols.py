"""Capability interfaces for the external collaborators.

The scanner and sink depend only on these protocols, so the extraction and
classification logic never imports discord.py or the Google API client and
tests can substitute in-memory fakes.
"""

from typing import Any, Protocol

from discord_gsheet.models.message import RawMessage


class MessageSource(Protocol):
    """Paginated read access to channel backlogs."""

    async def resolve_channel(self, channel_id: str) -> Any:
        """Return a channel handle, or raise ChannelAccessError."""
        ...

    async def fetch_page(
        self,
        channel: Any,
        page_size: int,
        before_id: str | None = None,
    ) -> list[RawMessage]:
        """Return up to page_size messages older than before_id, newest first."""
        ...


class TabularDestination(Protocol):
    """Named tabs of rows inside one spreadsheet."""

    async def list_tabs(self) -> set[str]: ...

    async def create_tab(self, name: str, header_row: list[str]) -> None: ...

    async def read_header(self, name: str) -> list[str]: ...

    async def write_header(self, name: str, header_row: list[str]) -> None: ...

    async def append_row(self, name: str, values: list[str]) -> None: ...

    async def read_rows(self, name: str) -> list[list[str]]: ...
