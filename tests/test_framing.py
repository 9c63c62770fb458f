from __future__ import annotations

from loraradar.framing import LineFramer


def test_split_frame_is_reassembled_in_order() -> None:
    framer = LineFramer()

    assert framer.feed('{"a":1}\n{"b":2') == ['{"a":1}']
    assert framer.buffer == '{"b":2'
    assert framer.feed("}\n") == ['{"b":2}']
    assert framer.buffer == ""


def test_multiple_lines_and_empty_segments() -> None:
    framer = LineFramer()

    assert framer.feed("one\n\ntwo\nthr") == ["one", "", "two"]
    assert framer.feed("") == []
    assert framer.feed("ee\n") == ["three"]


def test_reset_drops_partial_line() -> None:
    framer = LineFramer()
    framer.feed('{"angle": 4')
    framer.reset()

    assert framer.buffer == ""
    assert framer.feed('{"x":1}\n') == ['{"x":1}']
