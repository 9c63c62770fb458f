"""
loraradar.history
=================

Trailing trace of the last 360 sweep samples (roughly one revolution at
1 sample / degree).  Oldest samples fall off the front.
"""
from __future__ import annotations

import collections
import time
from dataclasses import dataclass, field
from typing import Iterator, Optional


@dataclass(frozen=True)
class PolarSample:
    angle: float                 # degrees
    distance: float              # cm
    timestamp: float = field(default_factory=time.monotonic)


class SampleHistory:
    MAX_SAMPLES = 360
    FADE_SEC = 5.0               # age at which a trail dot is fully faded

    def __init__(self, maxlen: int = MAX_SAMPLES) -> None:
        self._samples: collections.deque[PolarSample] = collections.deque(maxlen=maxlen)

    def record(self, sample: PolarSample) -> None:
        self._samples.append(sample)

    def clear(self) -> None:
        self._samples.clear()

    def __iter__(self) -> Iterator[PolarSample]:
        return iter(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    @classmethod
    def fade(cls, sample: PolarSample, now: Optional[float] = None) -> float:
        """Opacity in [0, 1]: 1 for a fresh sample, 0 once FADE_SEC old."""
        if now is None:
            now = time.monotonic()
        age = max(0.0, now - sample.timestamp)
        return max(0.0, 1.0 - age / cls.FADE_SEC)
