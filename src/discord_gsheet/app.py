"""FastAPI application with lifespan, health endpoint, and scheduled backfill trigger."""

import logging
from contextlib import asynccontextmanager

from fastapi import BackgroundTasks, Depends, FastAPI, HTTPException, Request

from discord_gsheet.backfill import format_summary, run_backfill
from discord_gsheet.config import RunConfig, Settings, load_run_config, load_settings
from discord_gsheet.errors import ConfigurationError, DiscordGsheetError
from discord_gsheet.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: load settings and configure logging on startup."""
    settings = load_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    yield


app = FastAPI(
    title="Discord to Google Sheets",
    lifespan=lifespan,
)


def get_app_settings(request: Request) -> Settings:
    """Return the settings loaded at startup, or load them on demand."""
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = load_settings()
        request.app.state.settings = settings
    return settings


async def verify_scheduler(request: Request, settings: Settings = Depends(get_app_settings)) -> None:
    """Verify the scheduler secret header for protected endpoints.

    Compares the X-Scheduler-Secret header against the configured secret.
    Raises HTTPException 403 if the header is missing, empty, or mismatched.
    """
    secret = request.headers.get("X-Scheduler-Secret", "")
    if not settings.scheduler_secret or secret != settings.scheduler_secret:
        raise HTTPException(status_code=403, detail="Invalid scheduler secret")


async def run_backfill_task(settings: Settings, config: RunConfig) -> None:
    """Background task wrapper: the response is already sent, so only log the outcome."""
    try:
        stats = await run_backfill(settings, config)
    except DiscordGsheetError:
        logger.error("Backfill aborted", exc_info=True)
        return
    logger.info("Backfill finished:\n%s", format_summary(stats))


@app.get("/health")
async def health():
    """Health check endpoint for Cloud Run and local development."""
    return {
        "status": "ok",
        "service": "discord-gsheet",
        "version": "0.1.0",
    }


@app.post("/backfill")
async def backfill_endpoint(
    background_tasks: BackgroundTasks,
    _: None = Depends(verify_scheduler),
    settings: Settings = Depends(get_app_settings),
):
    """Trigger one backfill pass over all configured channels."""
    try:
        settings.require()
        config = load_run_config(settings.config_path)
    except ConfigurationError as exc:
        logger.error("Backfill not started: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    background_tasks.add_task(run_backfill_task, settings, config)
    return {"status": "accepted", "channels": len(config.target_channel_ids)}
