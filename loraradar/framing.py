"""
loraradar.framing
=================

Reassembles newline-terminated frames from decoded text chunks.

A frame split across two deliveries is held in `buffer` until its newline
arrives; output keeps arrival order.
"""
from __future__ import annotations

from typing import List


class LineFramer:
    SEP = "\n"

    def __init__(self) -> None:
        self._buf = ""

    @property
    def buffer(self) -> str:
        """The unterminated tail carried into the next `feed()`."""
        return self._buf

    def feed(self, text: str) -> List[str]:
        parts = (self._buf + text).split(self.SEP)
        self._buf = parts.pop()
        return parts

    def reset(self) -> None:
        self._buf = ""
