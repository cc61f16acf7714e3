"""Tests for settings and run config loading."""

import json

import pytest
from pydantic import ValidationError

from discord_gsheet.config import DEFAULT_GENRE, RunConfig, Settings, load_run_config
from discord_gsheet.errors import ConfigurationError


def _write(tmp_path, data) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return str(path)


# -- Settings tests --


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "token-abc")
    monkeypatch.setenv("GOOGLE_SPREADSHEET_ID", "sheet-1")
    monkeypatch.setenv("PAGE_DELAY_SECONDS", "0.5")

    settings = Settings(_env_file=None)

    assert settings.discord_bot_token == "token-abc"
    assert settings.google_spreadsheet_id == "sheet-1"
    assert settings.page_delay_seconds == 0.5
    assert settings.google_credentials_path == "./credentials.json"


def test_settings_are_immutable():
    settings = Settings(_env_file=None, discord_bot_token="t")
    with pytest.raises(ValidationError):
        settings.discord_bot_token = "other"


def test_require_passes_with_token_and_sheet():
    settings = Settings(_env_file=None, discord_bot_token="t", google_spreadsheet_id="s")
    assert settings.require() is settings


def test_require_names_missing_settings(monkeypatch):
    monkeypatch.delenv("DISCORD_BOT_TOKEN", raising=False)
    monkeypatch.delenv("GOOGLE_SPREADSHEET_ID", raising=False)
    settings = Settings(_env_file=None)

    with pytest.raises(ConfigurationError, match="DISCORD_BOT_TOKEN, GOOGLE_SPREADSHEET_ID"):
        settings.require()


# -- RunConfig tests --


def test_load_run_config(tmp_path):
    path = _write(
        tmp_path,
        {
            "discord": {"targetChannelIds": ["111", 222], "description": "アーカイブ"},
            "genres": {"B": ["b"], "A": ["a"]},
            "defaultGenre": "未分類",
        },
    )

    config = load_run_config(path)

    assert config.target_channel_ids == ["111", "222"]
    assert config.discord.description == "アーカイブ"
    assert list(config.genres) == ["B", "A"]  # insertion order kept
    assert config.default_genre == "未分類"
    assert config.keyword_fallback is False


def test_run_config_defaults(tmp_path):
    config = load_run_config(_write(tmp_path, {"discord": {"targetChannelIds": ["1"]}}))
    assert config.default_genre == DEFAULT_GENRE
    assert config.genres == {}


def test_run_config_is_frozen():
    config = RunConfig.model_validate({"discord": {"targetChannelIds": ["1"]}})
    with pytest.raises(ValidationError):
        config.default_genre = "x"


def test_is_target_channel():
    config = RunConfig.model_validate({"discord": {"targetChannelIds": ["1", "2"]}})
    assert config.is_target_channel("2")
    assert config.is_target_channel(1)
    assert not config.is_target_channel("3")


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_run_config(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="not valid JSON"):
        load_run_config(path)


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"discord": {"targetChannelIds": []}},
        {"discord": {"targetChannelIds": ["1"]}, "defaultGenre": ""},
        {"discord": {"targetChannelIds": ["1"]}, "genres": {"A": "not-a-list"}},
    ],
)
def test_invalid_schema(tmp_path, data):
    with pytest.raises(ConfigurationError, match="is invalid"):
        load_run_config(_write(tmp_path, data))
