"""In-memory holder for the latest reading and its bounded history."""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone
from functools import lru_cache
from threading import Lock
from typing import Any, Callable, Deque, Optional

from models.readings import ConnectionStatus, Reading, TelemetrySnapshot
from services.normalizer import normalize_payload
from settings import get_settings

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_CAPACITY = 50


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TelemetryStore:
    """Owns the latest reading and a FIFO history capped at ``capacity``.

    Replacing the latest reading and appending it to the history happen in a
    single critical section, so readers always see ``latest`` equal to the
    newest history entry.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_HISTORY_CAPACITY,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if capacity <= 0:
            raise ValueError("History capacity must be positive.")
        self.capacity = capacity
        self._clock = clock
        self._latest: Optional[Reading] = None
        self._history: Deque[Reading] = deque(maxlen=capacity)
        self._lock = Lock()

    def ingest(self, payload: Any) -> Reading:
        """Normalize ``payload`` and record it as the newest reading."""
        fields = normalize_payload(payload)
        reading = Reading(
            distance=fields.distance,
            temperature=fields.temperature,
            tag_id=fields.tag_id,
            captured_at=self._clock(),
            connection_status=ConnectionStatus.connected,
        )
        with self._lock:
            self._latest = reading
            # deque(maxlen=...) drops the oldest entry on overflow.
            self._history.append(reading)
            history_size = len(self._history)

        logger.info(
            "Sensor reading received",
            extra={
                "distance": reading.distance,
                "temperature": reading.temperature,
                "rfid": reading.tag_id,
                "history_size": history_size,
            },
        )
        return reading

    def latest(self) -> Optional[Reading]:
        with self._lock:
            return self._latest

    def history(self) -> list[Reading]:
        """Return every buffered reading, oldest first."""
        with self._lock:
            return list(self._history)

    def recent(self, count: int) -> list[Reading]:
        """Return the ``count`` most recent readings, oldest first."""
        if count <= 0:
            return []
        with self._lock:
            items = list(self._history)
        return items[-count:]

    def snapshot(self) -> TelemetrySnapshot:
        with self._lock:
            return TelemetrySnapshot(latest=self._latest, history=tuple(self._history))

    @property
    def status(self) -> ConnectionStatus:
        with self._lock:
            if self._latest is None:
                return ConnectionStatus.waiting
            return self._latest.connection_status

    def __len__(self) -> int:
        with self._lock:
            return len(self._history)

    def clear(self) -> None:
        """Drop all state; used when the application shuts down."""
        with self._lock:
            self._latest = None
            self._history.clear()


@lru_cache
def build_default_store(capacity: Optional[int] = None) -> TelemetryStore:
    """Factory that sizes the store from settings."""
    settings = get_settings()
    history_capacity = settings.history_capacity if capacity is None else capacity
    return TelemetryStore(capacity=history_capacity)
