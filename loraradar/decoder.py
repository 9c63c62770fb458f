"""
loraradar.decoder
=================

Turns one transport chunk into text.

The USB bridge and the MQTT relay disagree on what a "chunk" is:

    "7B22616E676C65223A..."      hex digit pairs (MQTT relay, some drivers)
    b'{"angle":...' / [123, 34]  raw byte values (pyserial)
    '{"angle": 12, ...'          already-decoded text

Every byte maps to the code point of the same value (latin-1), so the result
is exactly what the ESP32 printed.  `decode()` never raises; irregular values
are logged and skipped.
"""
from __future__ import annotations

import logging
import string

log = logging.getLogger(__name__)
raw_log = logging.getLogger("loraradar.raw")

_HEX = frozenset(string.hexdigits)


def is_hex_text(chunk: str) -> bool:
    """True for a non-empty, even-length string of hex digits only."""
    return bool(chunk) and len(chunk) % 2 == 0 and all(c in _HEX for c in chunk)


def _from_hex(chunk: str) -> str:
    return bytes.fromhex(chunk).decode("latin-1")


def _from_values(values) -> str:
    out = []
    bad = 0
    for v in values:
        # bool is an int subclass but never a byte value on the wire
        if isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= 255:
            out.append(chr(v))
        else:
            bad += 1
    if bad:
        log.warning("dropped %d out-of-range byte value(s) from chunk", bad)
    return "".join(out)


def decode(chunk) -> str:
    """Return the text carried by *chunk* (see module docstring)."""
    raw_log.debug("chunk: %r", chunk)

    if chunk is None:
        return ""

    if isinstance(chunk, str):
        if is_hex_text(chunk):
            return _from_hex(chunk)
        if len(chunk) % 2 and chunk and all(c in _HEX for c in chunk):
            log.debug("odd-length hex-like chunk %r treated as text", chunk)
        return chunk

    if isinstance(chunk, (bytes, bytearray, memoryview)):
        return bytes(chunk).decode("latin-1")

    if isinstance(chunk, (list, tuple)):
        return _from_values(chunk)

    try:
        return str(chunk)
    except Exception:                               # __str__ of a foreign object
        log.warning("undecodable chunk of type %s dropped",
                    type(chunk).__name__, exc_info=True)
        return ""
