"""
loraradar.messages
==================

JSON telemetry frames sent by the ESP32 bridge, one per line:

    {"angle": 45, "distance": "312.5", "connected": true}
    {"status": "ready"}

`angle` / `distance` arrive as numbers or numeric strings; anything that
does not coerce to a finite float invalidates the *sample* but not the rest
of the message, so `connected` and `status` are still honoured.
"""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

log = logging.getLogger(__name__)

NAN = float("nan")

# older bridge firmware reports the relay state under this name
_LINK_ALIASES = ("connected", "loraConnected")


def parse_numeric(value: Any) -> float:
    """`float(value)` for numbers and numeric strings, NaN for everything else."""
    if isinstance(value, bool) or value is None:
        return NAN
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return NAN


def is_valid_number(x: Optional[float]) -> bool:
    return x is not None and math.isfinite(x)


@dataclass(frozen=True)
class TelemetryMessage:
    angle: Optional[float] = None
    distance: Optional[float] = None
    connected: Optional[bool] = None
    status: Optional[str] = None

    @property
    def has_sample(self) -> bool:
        """Both angle and distance present and finite."""
        return is_valid_number(self.angle) and is_valid_number(self.distance)


def parse(line: str) -> Optional[TelemetryMessage]:
    """
    Parse one frame.  Returns None for noise lines (anything not starting
    with ``{``), undecodable JSON, and JSON that is not an object.
    """
    text = line.strip()
    if not text.startswith("{"):
        return None

    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, oversized int literals, pathological nesting
        log.warning("dropping malformed frame %r: %s", text[:120], e)
        return None

    if not isinstance(data, dict):
        log.debug("frame is not an object: %r", text)
        return None

    angle = distance = None
    if "angle" in data:
        angle = parse_numeric(data["angle"])
    if "distance" in data:
        distance = parse_numeric(data["distance"])
    if (angle is not None or distance is not None) and not (
            is_valid_number(angle) and is_valid_number(distance)):
        log.debug("no usable sample in %r", text)

    connected = None
    for key in _LINK_ALIASES:
        if key in data:
            v = data[key]
            if isinstance(v, bool):
                connected = v
            else:
                log.debug("ignoring non-boolean %s=%r", key, v)
            break

    status = data.get("status")
    if status is not None and not isinstance(status, str):
        status = str(status)

    return TelemetryMessage(angle, distance, connected, status)
