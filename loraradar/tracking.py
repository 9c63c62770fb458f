"""
Book-keeping for detected targets ("fish").

The sensor sweeps continuously; a target is inferred whenever the range at
a bearing jumps by more than CHANGE_THRESHOLD compared with the *previous*
reading at that bearing.  Bearings are coarsened into 5° buckets so that
jitter in the reported angle still hits the same baseline.

Targets live for TARGET_TTL seconds.  A new detection close to an existing
live target (within DUP_ANGLE° and DUP_DISTANCE cm) is discarded rather
than merged; the older target keeps its timestamp.

Insertion order is arrival order; the list is not capped, the TTL keeps it
short.
"""
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from itertools import count
from typing import Callable, Dict, List, Optional, Tuple

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectedTarget:
    id: str
    angle: float
    distance: float
    timestamp: float


def bearing_bucket(angle: float, step: int = 5) -> int:
    """Nearest multiple of *step*, halves rounded up (12.5 → 15)."""
    return int(math.floor(angle / step + 0.5)) * step


class TargetDetector:
    BUCKET_DEG = 5
    CHANGE_THRESHOLD = 50.0   # cm jump vs. previous reading in the bucket
    TARGET_TTL = 30.0         # seconds a target stays live
    DUP_ANGLE = 10.0          # degrees
    DUP_DISTANCE = 100.0      # cm

    # ─────────────────────────────────────────────────────────── INIT
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self.baseline: Dict[int, float] = {}     # bucket → last distance
        self._targets: List[DetectedTarget] = []
        self._ids = count()

    @property
    def targets(self) -> Tuple[DetectedTarget, ...]:
        return tuple(self._targets)

    # ───────────────────────────────────────────────────── public API
    def observe(self, angle: float, distance: float,
                now: Optional[float] = None) -> Optional[DetectedTarget]:
        """
        Feed one sample.

        Returns
        -------
        DetectedTarget or None
            The newly created target, if this sample produced one.
        """
        if now is None:
            now = self._clock()

        bucket = bearing_bucket(angle, self.BUCKET_DEG)
        previous = self.baseline.get(bucket)
        self._prune(now)

        new = None
        if (previous is not None and distance > 0
                and abs(distance - previous) > self.CHANGE_THRESHOLD):
            if self._duplicate_of(angle, distance) is None:
                new = DetectedTarget(f"F{next(self._ids)}", angle, distance, now)
                self._targets.append(new)
                log.info("target %s at %.1f° / %.0f cm (was %.0f cm)",
                         new.id, angle, distance, previous)

        # baseline slides forward whether or not anything fired
        self.baseline[bucket] = distance
        return new

    def prune(self, now: Optional[float] = None) -> None:
        """Drop expired targets without feeding a sample."""
        self._prune(self._clock() if now is None else now)

    def clear(self) -> None:
        self._targets.clear()
        self.baseline.clear()

    # ───────────────────────────────────────────────── internal helpers
    def _prune(self, now: float) -> None:
        live = [t for t in self._targets if now - t.timestamp < self.TARGET_TTL]
        if len(live) != len(self._targets):
            log.debug("expired %d target(s)", len(self._targets) - len(live))
            self._targets = live

    def _duplicate_of(self, angle: float, distance: float) -> Optional[DetectedTarget]:
        for t in self._targets:
            if (abs(t.angle - angle) < self.DUP_ANGLE
                    and abs(t.distance - distance) < self.DUP_DISTANCE):
                return t
        return None
