"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.readings import NO_TAG, ConnectionStatus, Reading


class SensorAck(BaseModel):
    """Acknowledgement returned to the device after an ingestion."""

    success: bool = True
    message: str = "Data received!"
    timestamp: int = Field(..., description="Server ingestion time in epoch milliseconds.")


class LatestState(BaseModel):
    """Most recent reading, or the waiting placeholder before any ingestion."""

    model_config = ConfigDict(populate_by_name=True)

    last_update: Optional[str] = Field(default=None, alias="lastUpdate")
    distance: float = 0.0
    temperature: float = 0.0
    rfid: str = NO_TAG
    status: ConnectionStatus = ConnectionStatus.waiting

    @classmethod
    def from_reading(cls, reading: Optional[Reading]) -> "LatestState":
        if reading is None:
            return cls()
        return cls(
            last_update=reading.captured_at.isoformat(),
            distance=reading.distance,
            temperature=reading.temperature,
            rfid=reading.tag_id,
            status=reading.connection_status,
        )


class HistoryEntry(LatestState):
    """A buffered reading as exposed by the history endpoint."""

    timestamp: int = Field(..., description="Capture time in epoch milliseconds.")

    @classmethod
    def from_reading(cls, reading: Reading) -> "HistoryEntry":  # type: ignore[override]
        return cls(
            timestamp=reading.timestamp_ms,
            last_update=reading.captured_at.isoformat(),
            distance=reading.distance,
            temperature=reading.temperature,
            rfid=reading.tag_id,
            status=reading.connection_status,
        )


class HealthStatus(BaseModel):
    status: str = "ok"
    readings: int = Field(..., ge=0)
