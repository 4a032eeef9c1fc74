"""Domain models for sensor telemetry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

NO_TAG = "none"


class ConnectionStatus(str, Enum):
    """Whether the sensor device has reported at least once."""

    waiting = "waiting"
    connected = "connected"


@dataclass(frozen=True, slots=True)
class Reading:
    """A single normalized sensor sample stamped with the server's capture time."""

    distance: float
    temperature: float
    tag_id: str
    captured_at: datetime
    connection_status: ConnectionStatus = ConnectionStatus.connected

    @property
    def timestamp_ms(self) -> int:
        return int(self.captured_at.timestamp() * 1000)


@dataclass(frozen=True, slots=True)
class TelemetrySnapshot:
    """Latest reading and history captured together under the store lock."""

    latest: Optional[Reading]
    history: tuple[Reading, ...]

    @property
    def status(self) -> ConnectionStatus:
        if self.latest is None:
            return ConnectionStatus.waiting
        return self.latest.connection_status
