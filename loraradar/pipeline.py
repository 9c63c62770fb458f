"""
loraradar.pipeline
==================

One `RadarPipeline` owns every piece of mutable telemetry state:

    chunk ─▶ decode ─▶ LineFramer ─▶ parse ─┬─▶ TelemetryState
                                            ├─▶ SampleHistory
                                            └─▶ TargetDetector

`feed()` is meant to be subscribed to a transport; the transport calls it
from one thread only, and each chunk is processed end-to-end before the
next one.  The read accessors (`telemetry()`, `history()`, `targets()`) take
the same lock and return immutable copies, so the GUI thread can poll them
at frame rate.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, List, Optional, Tuple

from loraradar.decoder import decode
from loraradar.errors import TransportError
from loraradar.framing import LineFramer
from loraradar.history import PolarSample, SampleHistory
from loraradar.messages import TelemetryMessage, parse
from loraradar.telemetry import TelemetrySnapshot, TelemetryState
from loraradar.tracking import DetectedTarget, TargetDetector
from loraradar.transport import ChunkTransport, Subscription

log = logging.getLogger(__name__)


class RadarPipeline:
    def __init__(self,
                 on_target: Optional[Callable[[DetectedTarget], None]] = None,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self.on_target = on_target

        self.framer = LineFramer()
        self.state = TelemetryState()
        self.samples = SampleHistory()
        self.detector = TargetDetector(clock)

        self.transport: Optional[ChunkTransport] = None
        self._sub: Optional[Subscription] = None
        self.last_chunk = clock()

    # ───────────────────────────────────────── transport lifecycle
    def attach(self, transport: ChunkTransport) -> None:
        """Subscribe to *transport* and start it.  Detaches any previous one."""
        self.detach()
        sub = transport.subscribe(self.feed)
        try:
            transport.start()
        except TransportError:
            sub.remove()
            raise
        self.transport, self._sub = transport, sub
        with self._lock:
            self.state.transport_connected = True
            self.last_chunk = self._clock()

    def detach(self) -> None:
        """Unsubscribe, stop the transport and reset link state.  Idempotent."""
        if self._sub is not None:
            self._sub.remove()
            self._sub = None
        if self.transport is not None:
            self.transport.stop()
            self.transport = None
        self.reset()

    @property
    def attached(self) -> bool:
        return self.transport is not None

    def send_command(self, command: str) -> None:
        """Send e.g. ``"STATUS"``; raises TransportError, never retries."""
        if self.transport is None:
            raise TransportError("not connected")
        self.transport.send(command)
        log.info("sent command %r", command)

    # ───────────────────────────────────────── chunk processing
    def feed(self, chunk) -> List[TelemetryMessage]:
        """Process one raw chunk; returns the messages it completed."""
        text = decode(chunk)
        out: List[TelemetryMessage] = []
        found: List[DetectedTarget] = []

        with self._lock:
            self.last_chunk = self._clock()
            for line in self.framer.feed(text):
                msg = parse(line)
                if msg is None:
                    continue
                out.append(msg)
                target = self._dispatch(msg)
                if target is not None:
                    found.append(target)

        if self.on_target is not None:
            for target in found:
                self.on_target(target)
        return out

    def _dispatch(self, msg: TelemetryMessage) -> Optional[DetectedTarget]:
        self.state.apply(msg)
        if msg.status == "ready":
            log.info("bridge reports ready")
        if not msg.has_sample:
            return None
        now = self._clock()
        self.samples.record(PolarSample(msg.angle, msg.distance, now))
        return self.detector.observe(msg.angle, msg.distance, now)

    # ───────────────────────────────────────── read-only accessors
    def telemetry(self) -> TelemetrySnapshot:
        with self._lock:
            return self.state.snapshot()

    def history(self) -> Tuple[PolarSample, ...]:
        with self._lock:
            return tuple(self.samples)

    def targets(self) -> Tuple[DetectedTarget, ...]:
        with self._lock:
            self.detector.prune(self._clock())
            return self.detector.targets

    # ───────────────────────────────────────── resets
    def clear_targets(self) -> None:
        with self._lock:
            self.detector.clear()

    def clear_history(self) -> None:
        with self._lock:
            self.samples.clear()
            self.detector.clear()

    def reset(self) -> None:
        """Forget partial lines, baselines, targets and both link flags."""
        with self._lock:
            self.framer.reset()
            self.detector.clear()
            self.state.disconnect()
