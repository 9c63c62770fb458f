"""
loraradar.transport
===================

Common plumbing for the serial and MQTT readers.

A transport delivers raw chunks to any number of subscribers, always from
a single thread, so subscribers see chunks strictly in arrival order.

    sub = reader.subscribe(pipeline.feed)
    reader.start()
    ...
    sub.remove()       # safe to call twice
    reader.stop()      # ditto
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, List

log = logging.getLogger(__name__)

ChunkCallback = Callable[[object], None]


class Subscription:
    """Revocable handle returned by `ChunkTransport.subscribe()`."""

    def __init__(self, transport: "ChunkTransport", callback: ChunkCallback):
        self._transport = transport
        self._callback = callback
        self.active = True

    def remove(self) -> None:
        if not self.active:
            return
        self.active = False
        self._transport._unsubscribe(self._callback)


class ChunkTransport:
    TERMINATOR = "\n"

    def __init__(self) -> None:
        self._listeners: List[ChunkCallback] = []
        self._lock = threading.Lock()

    # ───────────────────────── public API
    def subscribe(self, callback: ChunkCallback) -> Subscription:
        with self._lock:
            self._listeners.append(callback)
        return Subscription(self, callback)

    def send(self, command: str) -> None:
        """Fire-and-forget: the terminator is appended, no reply is awaited."""
        self._write(command.rstrip("\r\n") + self.TERMINATOR)

    def start(self) -> None:
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError

    # ───────────────────────── for subclasses
    def _write(self, line: str) -> None:
        raise NotImplementedError

    def _deliver(self, chunk) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for cb in listeners:
            try:
                cb(chunk)
            except Exception:
                # a broken consumer must not kill the reader thread
                log.exception("chunk subscriber %r failed", cb)

    def _unsubscribe(self, callback: ChunkCallback) -> None:
        with self._lock:
            try:
                self._listeners.remove(callback)
            except ValueError:
                pass
