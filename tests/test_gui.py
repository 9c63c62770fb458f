from __future__ import annotations

import pytest

from loraradar.gui import target_opacity
from loraradar.tracking import DetectedTarget


@pytest.mark.parametrize("age, expected", [(0, 1.0), (15, 0.5), (25, 0.3), (60, 0.3)])
def test_target_opacity(age: float, expected: float) -> None:
    target = DetectedTarget("F0", 10.0, 200.0, 100.0)
    assert target_opacity(target, 100.0 + age) == pytest.approx(expected)
