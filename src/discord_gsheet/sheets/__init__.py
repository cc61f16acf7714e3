"""Google Sheets output: tab provisioning and row append."""

from discord_gsheet.sheets.client import GoogleSheetsDestination, build_sheets_destination
from discord_gsheet.sheets.rows import HEADER_ROW, a1_range, build_row
from discord_gsheet.sheets.service import HistorySink

__all__ = [
    "a1_range",
    "build_row",
    "build_sheets_destination",
    "GoogleSheetsDestination",
    "HEADER_ROW",
    "HistorySink",
]
