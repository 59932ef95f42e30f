from __future__ import annotations

import pytest

from railtrack.logic.animator import PositionAnimator

START = (19.0760, 72.8777)
END = (18.5204, 73.8567)
T0 = 1_000_000.0


def test_no_position_before_first_move() -> None:
    assert PositionAnimator(clock=lambda: T0).position_at() is None


def test_midpoint_and_terminal() -> None:
    animator = PositionAnimator()
    animator.begin(START, END, 4000, started_at_ms=T0)

    mid = animator.position_at(T0 + 2000)
    assert mid == pytest.approx(((START[0] + END[0]) / 2, (START[1] + END[1]) / 2))
    assert animator.position_at(T0 + 5000) == END
    assert animator.position_at(T0 + 4000) == END


def test_clamped_before_start() -> None:
    animator = PositionAnimator()
    animator.begin(START, END, 4000, started_at_ms=T0)

    assert animator.position_at(T0 - 500) == pytest.approx(START)


def test_new_move_supersedes_in_flight_move() -> None:
    animator = PositionAnimator()
    animator.begin(START, END, 4000, started_at_ms=T0)
    animator.begin(END, START, 1000, started_at_ms=T0 + 1000)

    assert animator.current_frame.start == END
    assert animator.position_at(T0 + 1000) == pytest.approx(END)
    assert animator.position_at(T0 + 2000) == START


def test_zero_duration_jumps_to_end() -> None:
    animator = PositionAnimator()
    animator.begin(START, END, 0, started_at_ms=T0)

    assert animator.position_at(T0) == END


def test_uses_clock_by_default() -> None:
    now = [T0]
    animator = PositionAnimator(clock=lambda: now[0])
    animator.begin(START, START, 4000)
    now[0] = T0 + 1000

    assert animator.current_frame.started_at_ms == T0
    assert animator.position_at() == pytest.approx(START)
