"""Tests for FastAPI app endpoints including scheduler authentication."""

import json
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from discord_gsheet.app import app, get_app_settings, run_backfill_task
from discord_gsheet.config import Settings
from discord_gsheet.errors import AuthenticationError
from discord_gsheet.models.stats import ScanStats


@pytest.fixture
def config_path(tmp_path) -> str:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"discord": {"targetChannelIds": ["100", "200"]}}),
        encoding="utf-8",
    )
    return str(path)


@pytest.fixture
def client():
    """Create a TestClient scoped to this module (not session-scoped conftest)."""
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use_settings(**values) -> Settings:
    settings = Settings(_env_file=None, **values)
    app.dependency_overrides[get_app_settings] = lambda: settings
    return settings


def test_backfill_endpoint_requires_auth(client: TestClient):
    """POST /backfill without scheduler secret returns 403."""
    _use_settings(scheduler_secret="correct-secret")
    response = client.post("/backfill")
    assert response.status_code == 403
    assert "Invalid scheduler secret" in response.json()["detail"]


def test_backfill_endpoint_unset_secret_rejects_everything(client: TestClient):
    """An empty configured secret never authenticates."""
    _use_settings(scheduler_secret="")
    response = client.post("/backfill", headers={"X-Scheduler-Secret": ""})
    assert response.status_code == 403


def test_backfill_endpoint_wrong_secret(client: TestClient):
    """POST /backfill with wrong scheduler secret returns 403."""
    _use_settings(scheduler_secret="correct-secret")
    response = client.post("/backfill", headers={"X-Scheduler-Secret": "wrong-secret"})
    assert response.status_code == 403


def test_backfill_endpoint_with_valid_auth(client: TestClient, config_path: str):
    """POST /backfill with correct secret schedules one run and reports channel count."""
    settings = _use_settings(
        scheduler_secret="test-secret",
        discord_bot_token="token",
        google_spreadsheet_id="sheet-1",
        config_path=config_path,
    )
    with patch("discord_gsheet.app.run_backfill", new_callable=AsyncMock) as mock_run:
        mock_run.return_value = ScanStats()
        response = client.post("/backfill", headers={"X-Scheduler-Secret": "test-secret"})

    assert response.status_code == 200
    assert response.json() == {"status": "accepted", "channels": 2}
    mock_run.assert_awaited_once()
    assert mock_run.call_args.args[0] is settings


def test_backfill_endpoint_missing_settings_returns_500(client: TestClient, config_path: str):
    _use_settings(
        scheduler_secret="test-secret",
        discord_bot_token="",
        google_spreadsheet_id="",
        config_path=config_path,
    )
    with patch("discord_gsheet.app.run_backfill", new_callable=AsyncMock) as mock_run:
        response = client.post("/backfill", headers={"X-Scheduler-Secret": "test-secret"})

    assert response.status_code == 500
    assert "DISCORD_BOT_TOKEN" in response.json()["detail"]
    mock_run.assert_not_called()


async def test_run_backfill_task_logs_fatal_errors(run_config, caplog):
    """Fatal errors in the background task are logged, not raised."""
    settings = Settings(_env_file=None, discord_bot_token="t", google_spreadsheet_id="s")
    with patch("discord_gsheet.app.run_backfill", new_callable=AsyncMock) as mock_run:
        mock_run.side_effect = AuthenticationError("bad key")
        await run_backfill_task(settings, run_config)

    assert "Backfill aborted" in caplog.text
