"""Application configuration.

Two layers, each validated once at startup and passed explicitly to the
components that need them:

- ``Settings``: secrets and runtime knobs from environment variables / ``.env``
  (pydantic-settings).
- ``RunConfig``: target channels and genre keywords from a JSON file.
"""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from discord_gsheet.errors import ConfigurationError

DEFAULT_GENRE = "その他"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Discord
    discord_bot_token: str = ""

    # Google Sheets
    google_spreadsheet_id: str = ""
    google_credentials_path: str = "./credentials.json"

    # Run
    config_path: str = "./config.json"
    page_delay_seconds: float = 1.0

    # Scheduler
    scheduler_secret: str = ""

    # App
    log_level: str = "INFO"

    def require(self) -> "Settings":
        """Raise ConfigurationError if a setting needed for a run is missing."""
        missing = [
            name.upper()
            for name in ("discord_bot_token", "google_spreadsheet_id")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError(f"{', '.join(missing)} is not set in environment or .env file")
        return self


def load_settings() -> Settings:
    """Build Settings from the environment, wrapping validation failures."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings: {exc}") from exc


class DiscordConfig(BaseModel):
    """Discord section of the run config file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    target_channel_ids: list[str] = Field(alias="targetChannelIds", min_length=1)
    description: str | None = None

    @field_validator("target_channel_ids", mode="before")
    @classmethod
    def _coerce_ids(cls, value):
        # Snowflakes are sometimes written as JSON numbers
        if isinstance(value, list):
            return [str(v) for v in value]
        return value


class RunConfig(BaseModel):
    """Immutable per-run configuration loaded from config.json."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    discord: DiscordConfig
    genres: dict[str, list[str]] = {}
    default_genre: str = Field(default=DEFAULT_GENRE, alias="defaultGenre", min_length=1)
    keyword_fallback: bool = Field(default=False, alias="keywordFallback")

    @property
    def target_channel_ids(self) -> list[str]:
        return list(self.discord.target_channel_ids)

    def is_target_channel(self, channel_id: str) -> bool:
        """Return True if the channel id is one of the configured targets."""
        return str(channel_id) in self.discord.target_channel_ids


def load_run_config(path: str | Path) -> RunConfig:
    """Load and validate the run config JSON file.

    Raises ConfigurationError if the file is missing, is not valid JSON, or
    does not match the RunConfig schema.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Config file not found or unreadable: {path}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Config file is not valid JSON: {path}: {exc}") from exc

    try:
        return RunConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Config file {path} is invalid: {exc}") from exc
