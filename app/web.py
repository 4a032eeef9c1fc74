from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.api import get_store
from app.schemas import HistoryEntry, LatestState
from models.readings import ConnectionStatus
from services.telemetry_store import TelemetryStore
from settings import get_settings


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

POLL_INTERVAL_MS = 2000


router = APIRouter(include_in_schema=False)


@router.get("/", name="dashboard", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    store: TelemetryStore = Depends(get_store),
) -> HTMLResponse:
    recent_count = get_settings().dashboard_recent_count
    snapshot = store.snapshot()
    recent = [HistoryEntry.from_reading(reading) for reading in snapshot.history[-recent_count:]]
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "state": LatestState.from_reading(snapshot.latest),
            "connected": snapshot.status is ConnectionStatus.connected,
            "recent": list(reversed(recent)),
            "recent_count": recent_count,
            "poll_interval_ms": POLL_INTERVAL_MS,
        },
    )
