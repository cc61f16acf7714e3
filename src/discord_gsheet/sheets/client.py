"""Google Sheets destination over the Sheets v4 API.

Authenticates with a service-account JSON key and exposes the tab operations
the HistorySink needs. The discovery client is synchronous, so every request
is executed in a worker thread and awaited; calls are still issued one at a
time.
"""

import asyncio
import logging

from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from discord_gsheet.config import Settings
from discord_gsheet.errors import AuthenticationError
from discord_gsheet.sheets.rows import LAST_COLUMN, a1_range

logger = logging.getLogger(__name__)

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

# Store values verbatim: no number, date or formula parsing (snowflake ids exceed 15 digits)
VALUE_INPUT_OPTION = "RAW"


class GoogleSheetsDestination:
    """Tabs of one spreadsheet, backed by an authenticated Sheets service."""

    def __init__(self, service, spreadsheet_id: str) -> None:
        self._service = service
        self.spreadsheet_id = spreadsheet_id

    @property
    def _spreadsheets(self):
        return self._service.spreadsheets()

    async def list_tabs(self) -> set[str]:
        """Return the titles of all tabs in the spreadsheet."""
        request = self._spreadsheets.get(
            spreadsheetId=self.spreadsheet_id,
            fields="sheets.properties.title",
        )
        response = await asyncio.to_thread(request.execute)
        return {sheet["properties"]["title"] for sheet in response.get("sheets", [])}

    async def create_tab(self, name: str, header_row: list[str]) -> None:
        """Add a tab and write the header row to its first row."""
        add_request = self._spreadsheets.batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={"requests": [{"addSheet": {"properties": {"title": name}}}]},
        )
        await asyncio.to_thread(add_request.execute)
        await self.write_header(name, header_row)

    async def read_header(self, name: str) -> list[str]:
        """Return the first row of the tab, or [] if it is empty."""
        request = self._spreadsheets.values().get(
            spreadsheetId=self.spreadsheet_id,
            range=a1_range(name, f"A1:{LAST_COLUMN}1"),
        )
        response = await asyncio.to_thread(request.execute)
        values = response.get("values", [])
        return values[0] if values else []

    async def write_header(self, name: str, header_row: list[str]) -> None:
        """Overwrite the first row of the tab with the header."""
        request = self._spreadsheets.values().update(
            spreadsheetId=self.spreadsheet_id,
            range=a1_range(name, f"A1:{LAST_COLUMN}1"),
            valueInputOption=VALUE_INPUT_OPTION,
            body={"values": [header_row]},
        )
        await asyncio.to_thread(request.execute)

    async def append_row(self, name: str, values: list[str]) -> None:
        """Append one row after the last non-empty row of the tab."""
        request = self._spreadsheets.values().append(
            spreadsheetId=self.spreadsheet_id,
            range=a1_range(name),
            valueInputOption=VALUE_INPUT_OPTION,
            body={"values": [values]},
        )
        await asyncio.to_thread(request.execute)

    async def read_rows(self, name: str) -> list[list[str]]:
        """Return all data rows of the tab, header excluded."""
        request = self._spreadsheets.values().get(
            spreadsheetId=self.spreadsheet_id,
            range=a1_range(name, f"A2:{LAST_COLUMN}"),
        )
        response = await asyncio.to_thread(request.execute)
        return response.get("values", [])


async def build_sheets_destination(settings: Settings) -> GoogleSheetsDestination:
    """Authenticate with the service-account key and verify spreadsheet access.

    Reads the key file at ``google_credentials_path``, builds the Sheets
    service, and lists the tabs once so bad credentials or a wrong spreadsheet
    id fail at startup. Raises AuthenticationError on any failure.
    """
    path = settings.google_credentials_path
    try:
        credentials = service_account.Credentials.from_service_account_file(
            path, scopes=SHEETS_SCOPES
        )
    except (OSError, ValueError) as exc:
        raise AuthenticationError(f"Failed to load Google credentials from {path}: {exc}") from exc

    service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
    destination = GoogleSheetsDestination(service, settings.google_spreadsheet_id)

    try:
        tabs = await destination.list_tabs()
    except (GoogleAuthError, HttpError) as exc:
        raise AuthenticationError(
            f"Cannot access spreadsheet {settings.google_spreadsheet_id}: {exc}"
        ) from exc

    logger.info(
        "Google Sheets client initialized for %s (%d tabs)",
        settings.google_spreadsheet_id,
        len(tabs),
    )
    return destination
