"""Tests for the clock abstraction."""

from datetime import datetime

from muistutin.core.clock import Clock


class TestClock:
    def test_real_clock_reads_source(self):
        ticks = iter([datetime(2024, 1, 1, 8, 0), datetime(2024, 1, 1, 8, 1)])
        clock = Clock(source=lambda: next(ticks))
        assert clock.now() == datetime(2024, 1, 1, 8, 0)
        assert clock.now() == datetime(2024, 1, 1, 8, 1)
        assert clock.is_overridden is False

    def test_override_is_returned_exactly_every_time(self):
        instant = datetime(2024, 1, 10, 9, 0, 12, 345)
        clock = Clock(source=lambda: datetime(1999, 1, 1))
        clock.set_override(instant)
        assert [clock.now() for _ in range(5)] == [instant] * 5
        assert clock.is_overridden is True
        assert clock.override == instant

    def test_changing_override_takes_effect_immediately(self):
        clock = Clock.fixed(datetime(2024, 1, 10, 9, 0))
        clock.set_override(datetime(2024, 1, 11, 7, 0))
        assert clock.now() == datetime(2024, 1, 11, 7, 0)

    def test_clear_returns_to_real_time(self):
        real = datetime(2025, 5, 5, 12, 0)
        clock = Clock(override=datetime(2024, 1, 10, 9, 0), source=lambda: real)
        clock.clear_override()
        assert clock.now() == real
        assert clock.override is None

    def test_default_source_is_wall_clock(self):
        before = datetime.now()
        now = Clock().now()
        assert before <= now <= datetime.now()
