"""Chunk decoding across the three delivery shapes."""

from __future__ import annotations

import pytest

from loraradar.decoder import decode, is_hex_text


def test_hex_pairs_decode_to_text() -> None:
    assert decode("48656C6C6F") == "Hello"
    assert decode("48656c6c6f") == "Hello"


def test_byte_values_decode_to_text() -> None:
    assert decode([72, 101, 108, 108, 111]) == "Hello"
    assert decode((72, 105)) == "Hi"
    assert decode(b'{"angle":1}\n') == '{"angle":1}\n'
    assert decode(bytearray(b"ok")) == "ok"


def test_plain_text_passes_through() -> None:
    assert decode('{"angle": 12}') == '{"angle": 12}'
    assert decode("status ready") == "status ready"


def test_odd_length_hex_is_treated_as_text() -> None:
    assert decode("ABC") == "ABC"
    assert not is_hex_text("ABC")


def test_high_bytes_map_to_same_code_point() -> None:
    assert decode([0xB0]) == "°"
    assert decode("B0") == "°"


def test_out_of_range_values_are_skipped(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING", logger="loraradar.decoder"):
        assert decode([72, 300, -1, 105, "x"]) == "Hi"
    assert "out-of-range" in caplog.text


@pytest.mark.parametrize("chunk, expected", [(None, ""), ("", ""), (42, "42")])
def test_other_shapes_never_raise(chunk, expected) -> None:
    assert decode(chunk) == expected


def test_unprintable_object_returns_empty() -> None:
    class Broken:
        def __str__(self) -> str:
            raise RuntimeError("nope")

    assert decode(Broken()) == ""
