"""Replay Discord channel backlogs and file YouTube/Zoom links into Google Sheets."""

__version__ = "0.1.0"
