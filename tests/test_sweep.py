from __future__ import annotations

import pytest

from loraradar.sweep import SweepSmoother


def test_moves_ten_percent_per_tick() -> None:
    sweep = SweepSmoother()
    sweep.start()

    assert sweep.tick(100.0) == pytest.approx(10.0)
    assert sweep.tick(100.0) == pytest.approx(19.0)


def test_snaps_when_close() -> None:
    sweep = SweepSmoother(angle=99.6)
    sweep.start()
    assert sweep.tick(100.0) == 100.0


def test_converges() -> None:
    sweep = SweepSmoother()
    sweep.start()
    for _ in range(200):
        sweep.tick(90.0)
    assert sweep.angle == 90.0


def test_stopped_smoother_ignores_ticks_and_stop_is_idempotent() -> None:
    sweep = SweepSmoother(angle=5.0)
    assert sweep.tick(100.0) == 5.0

    sweep.start()
    sweep.stop()
    sweep.stop()
    assert not sweep.running
    assert sweep.tick(100.0) == 5.0
