"""Coercion of raw device payloads into reading fields."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from models.readings import NO_TAG


@dataclass(frozen=True, slots=True)
class NormalizedPayload:
    distance: float
    temperature: float
    tag_id: str


def _coerce_number(value: Any) -> float:
    # bool is an int subclass; a device sending true/false is not a measurement.
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return 0.0
        try:
            number = float(candidate)
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _coerce_tag(value: Any) -> str:
    if isinstance(value, str):
        return value or NO_TAG
    if isinstance(value, bool) or value is None:
        return NO_TAG
    if isinstance(value, (int, float)):
        return str(value) if value else NO_TAG
    return NO_TAG


def normalize_payload(payload: Any) -> NormalizedPayload:
    """Map any JSON-compatible value onto reading fields.

    Missing, falsy or wrongly typed fields fall back to ``0`` for the numeric
    fields and ``"none"`` for the tag. This never raises: the sending device
    cannot act on validation feedback.
    """
    fields: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}
    return NormalizedPayload(
        distance=_coerce_number(fields.get("distance")),
        temperature=_coerce_number(fields.get("temperature")),
        tag_id=_coerce_tag(fields.get("rfid")),
    )
