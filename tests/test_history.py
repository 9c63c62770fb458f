from __future__ import annotations

import pytest

from loraradar.history import PolarSample, SampleHistory


def test_history_is_capped_at_360_fifo() -> None:
    hist = SampleHistory()
    for i in range(400):
        hist.record(PolarSample(i % 360, 100.0, float(i)))

    kept = list(hist)
    assert len(hist) == 360
    assert kept[0].timestamp == 40.0
    assert kept[-1].timestamp == 399.0


def test_iteration_is_restartable_and_ordered() -> None:
    hist = SampleHistory()
    for t in (1.0, 2.0, 3.0):
        hist.record(PolarSample(0, 10, t))

    assert [s.timestamp for s in hist] == [1.0, 2.0, 3.0]
    assert [s.timestamp for s in hist] == [1.0, 2.0, 3.0]


def test_clear() -> None:
    hist = SampleHistory()
    hist.record(PolarSample(0, 10, 0.0))
    hist.clear()
    assert len(hist) == 0 and list(hist) == []


@pytest.mark.parametrize("age, alpha", [(0, 1.0), (2.5, 0.5), (5.0, 0.0), (9.0, 0.0), (-1, 1.0)])
def test_fade(age: float, alpha: float) -> None:
    sample = PolarSample(0, 10, 100.0)
    assert SampleHistory.fade(sample, now=100.0 + age) == pytest.approx(alpha)
