"""Per-genre tab provisioning and row append.

One tab per genre, created on first use with the fixed header row. Rows are
appended as-is: there is no uniqueness check, so persisting the same entry
twice yields two rows.
"""

import logging

from cachetools import TTLCache

from discord_gsheet.errors import PersistenceError
from discord_gsheet.models.entry import ClassifiedEntry
from discord_gsheet.protocols import TabularDestination
from discord_gsheet.sheets.rows import HEADER_ROW, build_row

logger = logging.getLogger(__name__)

_TAB_CACHE_TTL = 300  # 5 minutes


class HistorySink:
    """Writes classified entries into per-genre tabs of a destination.

    Tabs confirmed to exist are remembered for a few minutes so a run does
    not re-read the spreadsheet metadata for every row. A failed append drops
    the tab from that cache so the next entry re-checks the live tab list.
    """

    def __init__(self, destination: TabularDestination, tab_cache_ttl: float = _TAB_CACHE_TTL) -> None:
        self._destination = destination
        self._known_tabs: TTLCache = TTLCache(maxsize=128, ttl=tab_cache_ttl)

    async def ensure(self, genre: str) -> None:
        """Create the genre's tab with its header row unless it already exists.

        An existing tab whose first row is empty (a creation that failed
        between adding the tab and writing its header) gets the header written
        before any data row. A tab confirmed here is not re-checked until its
        cache entry expires, so a tab deleted mid-run fails the appends in that
        window (each is logged and the failure evicts the tab).
        """
        if genre in self._known_tabs:
            return

        try:
            existing = await self._destination.list_tabs()
            if genre not in existing:
                await self._destination.create_tab(genre, HEADER_ROW)
                logger.info("Created new tab: %s", genre)
            elif not any(await self._destination.read_header(genre)):
                await self._destination.write_header(genre, HEADER_ROW)
                logger.warning("Restored missing header row in tab: %s", genre)
        except Exception as exc:
            raise PersistenceError(genre, None, str(exc)) from exc

        self._known_tabs[genre] = True

    async def append(self, genre: str, entry: ClassifiedEntry) -> None:
        """Ensure the genre's tab exists, then append exactly one row for the entry."""
        try:
            await self.ensure(genre)
        except PersistenceError as exc:
            raise PersistenceError(genre, entry.url, exc.reason) from exc

        try:
            await self._destination.append_row(genre, build_row(entry))
        except Exception as exc:
            self._known_tabs.pop(genre, None)
            raise PersistenceError(genre, entry.url, str(exc)) from exc

        logger.debug("Added entry to tab %s: %s", genre, entry.title)

    async def read_entries(self, genre: str) -> list[list[str]]:
        """Return the stored data rows of a genre's tab (header skipped)."""
        try:
            return await self._destination.read_rows(genre)
        except Exception as exc:
            raise PersistenceError(genre, None, str(exc)) from exc
