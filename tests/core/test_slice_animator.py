from __future__ import annotations

import pytest

from engine.core.frame_clock import FrameClock
from engine.core.slice_animator import SliceAnimator
from engine.core.tickable import Tickable


def test_disabled_animator_is_noop() -> None:
    a = SliceAnimator(value=0.2, speed=1.0, enabled=False)
    a.tick(0.05)
    assert a.value == 0.2


def test_advances_and_reflects_at_bounds() -> None:
    a = SliceAnimator(value=0.9, minimum=-1.0, maximum=1.0, speed=2.0, enabled=True)
    a.tick(0.1)  # 0.9 + 0.2 = 1.1 → 0.9 に反射
    assert a.value == pytest.approx(0.9)
    assert a.direction == -1
    a.tick(0.1)
    assert a.value == pytest.approx(0.7)


def test_reflects_at_minimum() -> None:
    a = SliceAnimator(value=-0.95, speed=1.0, direction=-1, enabled=True)
    a.tick(0.1)
    assert a.value == pytest.approx(-0.95)
    assert a.direction == 1


def test_large_delta_is_clamped(env_settings) -> None:
    env_settings(NDP_MAX_TICK_DELTA="0.1")
    a = SliceAnimator(value=0.0, speed=1.0, enabled=True)
    a.tick(5.0)
    assert a.value == pytest.approx(0.1)


def test_invalid_configuration() -> None:
    with pytest.raises(ValueError):
        SliceAnimator(minimum=1.0, maximum=0.0)
    with pytest.raises(ValueError):
        SliceAnimator(speed=-1.0)
    a = SliceAnimator(value=5.0)
    assert a.value == 1.0
    a.set_range(-0.5, 0.5)
    assert a.value == 0.5


def test_frame_clock_drives_tickables_in_order() -> None:
    calls: list[tuple[str, float]] = []

    class Rec:
        def __init__(self, name: str) -> None:
            self.name = name

        def tick(self, dt: float) -> None:
            calls.append((self.name, dt))

    times = iter([10.0, 10.25, 10.5])
    clock = FrameClock([Rec("a")], now=lambda: next(times))
    clock.add(Rec("b"))
    assert clock.tick() == pytest.approx(0.25)
    assert clock.tick(0.01) == 0.01
    assert calls == [("a", 0.25), ("b", 0.25), ("a", 0.01), ("b", 0.01)]
    assert clock.frame_count == 2
    assert isinstance(SliceAnimator(), Tickable)
