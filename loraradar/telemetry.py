"""Latest sweep reading and link flags, as last reported by the sensor."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from loraradar.messages import TelemetryMessage


@dataclass(frozen=True)
class TelemetrySnapshot:
    angle: float = 0.0
    distance: float = 0.0
    link_connected: bool = False       # LoRa relay, as reported in frames
    transport_connected: bool = False  # local USB / MQTT connection
    status: Optional[str] = None


class TelemetryState:
    def __init__(self) -> None:
        self.angle = 0.0
        self.distance = 0.0
        self.link_connected = False
        self.transport_connected = False
        self.status: Optional[str] = None

    def apply(self, msg: TelemetryMessage) -> None:
        """Copy whatever *msg* carries; absent or invalid fields are left alone."""
        if msg.has_sample:
            self.angle = msg.angle
            self.distance = msg.distance
        if msg.connected is not None:
            self.link_connected = msg.connected
        if msg.status is not None:
            self.status = msg.status

    def disconnect(self) -> None:
        self.link_connected = False
        self.transport_connected = False

    def snapshot(self) -> TelemetrySnapshot:
        return TelemetrySnapshot(self.angle, self.distance, self.link_connected,
                                 self.transport_connected, self.status)
