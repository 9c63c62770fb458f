"""Shared test doubles."""

from __future__ import annotations

from typing import List

from loraradar.errors import TransportError
from loraradar.transport import ChunkTransport


class FakeTransport(ChunkTransport):
    """In-memory transport: `push()` delivers a chunk, `sent` records writes."""

    def __init__(self, fail_start: bool = False, fail_send: bool = False) -> None:
        super().__init__()
        self.fail_start, self.fail_send = fail_start, fail_send
        self.started = False
        self.stop_calls = 0
        self.sent: List[str] = []

    def start(self) -> None:
        if self.fail_start:
            raise TransportError("no such port")
        self.started = True

    def stop(self) -> None:
        self.stop_calls += 1
        self.started = False

    def push(self, chunk) -> None:
        self._deliver(chunk)

    def _write(self, line: str) -> None:
        if self.fail_send:
            raise TransportError("write timeout")
        self.sent.append(line)


class Clock:
    def __init__(self, t: float = 0.0) -> None:
        self.t = t

    def __call__(self) -> float:
        return self.t
