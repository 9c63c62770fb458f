"""
Display-side sweep smoothing.

Telemetry arrives in bursts over LoRa; drawing the raw angle makes the sweep
line jump.  `SweepSmoother.tick()` is called once per display frame and
eases the displayed angle toward the latest reported angle.
"""
from __future__ import annotations


class SweepSmoother:
    GAIN = 0.10        # fraction of the remaining gap closed per tick
    SNAP_DEG = 0.5

    def __init__(self, angle: float = 0.0) -> None:
        self.angle = angle
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True

    def stop(self) -> None:
        self._running = False

    def tick(self, target: float) -> float:
        """Advance one frame toward *target*; a stopped smoother stays put."""
        if not self._running:
            return self.angle
        diff = target - self.angle
        if abs(diff) < self.SNAP_DEG:
            self.angle = target
        else:
            self.angle += diff * self.GAIN
        return self.angle
