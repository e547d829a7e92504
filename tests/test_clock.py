"""Tests for the animation clock."""

import pytest

from beadfield.clock import AnimationClock


class TestAnimationClock:
    def test_not_started_by_default(self):
        assert not AnimationClock().started

    def test_first_timestamp_is_time_zero(self):
        clock = AnimationClock()
        assert clock.elapsed_seconds(12345.0) == 0.0
        assert clock.start_time == 12345.0

    def test_converts_milliseconds_to_seconds(self):
        clock = AnimationClock(start_time=1000.0)
        assert clock.elapsed_seconds(3500.0) == pytest.approx(2.5)

    def test_start_is_captured_once(self):
        clock = AnimationClock()
        clock.start(100.0)
        clock.start(900.0)
        assert clock.start_time == 100.0
        assert clock.elapsed_seconds(1100.0) == pytest.approx(1.0)
