"""HTTP route definitions for the service."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.schemas import HealthStatus, HistoryEntry, LatestState, SensorAck
from services.telemetry_store import TelemetryStore, build_default_store

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store() -> TelemetryStore:
    return build_default_store()


async def read_json_body(request: Request) -> Any:
    """Decode the request body, treating an empty body as an empty object."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as exc:
        client = request.client.host if request.client else None
        logger.warning(
            "Rejected unparsable sensor payload",
            extra={"reason": str(exc), "client": client},
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request body is not valid JSON.",
        ) from exc


@router.post(
    "/api/sensor",
    response_model=SensorAck,
    summary="Record a reading pushed by the sensor device.",
)
async def ingest_reading(
    payload: Any = Depends(read_json_body),
    store: TelemetryStore = Depends(get_store),
) -> SensorAck:
    reading = store.ingest(payload)
    return SensorAck(timestamp=reading.timestamp_ms)


@router.get(
    "/api/data",
    response_model=LatestState,
    summary="Fetch the most recent reading and connection status.",
)
async def get_latest(store: TelemetryStore = Depends(get_store)) -> LatestState:
    return LatestState.from_reading(store.latest())


@router.get(
    "/api/history",
    response_model=list[HistoryEntry],
    summary="Fetch buffered readings, oldest first.",
)
async def get_history(store: TelemetryStore = Depends(get_store)) -> list[HistoryEntry]:
    return [HistoryEntry.from_reading(reading) for reading in store.history()]


@router.get(
    "/health",
    response_model=HealthStatus,
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck(store: TelemetryStore = Depends(get_store)) -> HealthStatus:
    return HealthStatus(readings=len(store))
