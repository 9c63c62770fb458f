"""Telemetry frame parsing and field coercion."""

from __future__ import annotations

import json
import math

import pytest

from loraradar import messages
from loraradar.messages import TelemetryMessage, is_valid_number, parse, parse_numeric


def test_numeric_and_string_fields_are_coerced() -> None:
    msg = parse('{"angle": "45.5", "distance": 312, "connected": true}')

    assert msg == TelemetryMessage(45.5, 312.0, True, None)
    assert msg.has_sample


def test_surrounding_whitespace_is_ignored() -> None:
    msg = parse('   {"angle": 1, "distance": 2}\r')
    assert msg is not None and msg.has_sample


@pytest.mark.parametrize("line", ["", "ESP32 boot", "ready", "[1, 2]", "  # {x}"])
def test_noise_lines_never_reach_json(monkeypatch, line: str) -> None:
    def boom(*_a, **_kw):
        raise AssertionError("json.loads called")

    monkeypatch.setattr(messages.json, "loads", boom)
    assert parse(line) is None


def test_truncated_frame_is_dropped(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING", logger="loraradar.messages"):
        assert parse('{"angle": 12, "dist') is None
    assert "malformed" in caplog.text


def test_non_numeric_sample_keeps_link_fields() -> None:
    msg = parse('{"angle": "abc", "distance": 10, "connected": false, "status": "ready"}')

    assert msg is not None
    assert math.isnan(msg.angle)
    assert not msg.has_sample
    assert msg.connected is False
    assert msg.status == "ready"


def test_status_only_frame() -> None:
    msg = parse('{"status": "ready"}')
    assert msg == TelemetryMessage(status="ready")
    assert not msg.has_sample


def test_legacy_link_field_name() -> None:
    assert parse('{"loraConnected": true}').connected is True


def test_non_boolean_link_value_is_ignored() -> None:
    assert parse('{"connected": "yes"}').connected is None


def test_infinite_values_are_not_a_sample() -> None:
    msg = parse(json.dumps({"angle": "inf", "distance": 5}))
    assert not msg.has_sample


@pytest.mark.parametrize("value, expected", [
    (12, 12.0), ("3.5", 3.5), (" 7 ", 7.0), (2.25, 2.25),
])
def test_parse_numeric_accepts_numbers(value, expected) -> None:
    assert parse_numeric(value) == expected


@pytest.mark.parametrize("value", ["", "12cm", None, True, [1], {}])
def test_parse_numeric_rejects_everything_else(value) -> None:
    assert math.isnan(parse_numeric(value))


def test_is_valid_number() -> None:
    assert is_valid_number(0.0)
    assert not is_valid_number(None)
    assert not is_valid_number(float("nan"))
    assert not is_valid_number(float("-inf"))


def test_parse_numeric_overflow_is_nan() -> None:
    assert math.isnan(parse_numeric(10 ** 400))


@pytest.mark.parametrize("line", [
    '{"angle": 1' + "0" * 400 + ', "distance": 5}',       # int too large for float
    '{"angle": 1' + "0" * 5000 + ', "distance": 5}',      # over the int-literal digit limit
    '{"a": ' + "[" * 100000 + "]" * 100000 + "}",         # nesting past the recursion limit
])
def test_hostile_but_bracketed_frames_never_raise(line: str) -> None:
    msg = parse(line)
    assert msg is None or not msg.has_sample
