"""Unit tests for chronomark._time: calendar and steady instants.

Test Techniques Used:
    - Example-based Testing: diff/after/before, datetime interop,
      string rendering
    - Error Guessing: mixing calendar and steady instants
    - Dependency Injection: scripted clocks make the calendar-to-steady
      conversion deterministic
    - Log Inspection: read-gap warning via ``caplog``
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import UTC, datetime, timedelta, timezone

import pytest

from chronomark import (
    CalendarClock,
    CalendarTime,
    ConversionSettings,
    Duration,
    SteadyClock,
    SteadyTime,
    Unit,
    microseconds,
    milliseconds,
    minutes,
    nanoseconds,
    seconds,
)
from chronomark.testing import MockClock
from tests.fixtures.clock import ScriptedSteadyClock

NEW_YEAR_2020 = datetime(2020, 1, 1, tzinfo=UTC)


class TestConstruction:
    """Technique: Example-based Testing."""

    def test_number_is_seconds(self) -> None:
        t = SteadyTime(1.5)
        assert t.seconds_since_epoch().unit == Unit.SECONDS
        assert t.seconds_since_epoch().value() == 1.5

    def test_duration_is_kept_as_is(self) -> None:
        offset = milliseconds(250)
        t = CalendarTime(offset)
        assert t.seconds_since_epoch() is offset

    def test_is_immutable(self) -> None:
        t = CalendarTime(1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            t.offset = seconds(2)  # type: ignore[misc]


class TestArithmetic:
    """Technique: Example-based Testing."""

    def test_diff(self) -> None:
        later = SteadyTime(12.5)
        earlier = SteadyTime(10.0)
        assert later.diff(earlier).is_equal(seconds(2.5))
        assert earlier.diff(later).is_equal(seconds(-2.5))

    def test_after_and_before(self) -> None:
        t = CalendarTime(100.0)
        assert t.after(seconds(5)) == CalendarTime(105.0)
        assert t.before(milliseconds(500)) == CalendarTime(99.5)

    def test_after_keeps_variant(self) -> None:
        assert isinstance(SteadyTime(1.0).after(seconds(1)), SteadyTime)
        assert isinstance(CalendarTime(1.0).before(seconds(1)), CalendarTime)

    def test_operators(self) -> None:
        t = SteadyTime(10.0)
        assert t + seconds(1) == SteadyTime(11.0)
        assert t - seconds(1) == SteadyTime(9.0)
        assert t - SteadyTime(4.0) == seconds(6)

    def test_equality_across_offset_units(self) -> None:
        assert CalendarTime(seconds(1)) == CalendarTime(nanoseconds(1e9))
        assert hash(CalendarTime(seconds(1))) == hash(CalendarTime(nanoseconds(1e9)))

    def test_ordering(self) -> None:
        assert SteadyTime(1.0) < SteadyTime(2.0)
        assert SteadyTime(2.0) >= SteadyTime(milliseconds(2000))
        assert max(CalendarTime(3.0), CalendarTime(7.0)) == CalendarTime(7.0)


class TestVariantsDoNotMix:
    """Technique: Error Guessing."""

    def test_diff_across_variants(self) -> None:
        with pytest.raises(TypeError):
            CalendarTime(1.0).diff(SteadyTime(1.0))  # type: ignore[arg-type]

    def test_subtraction_across_variants(self) -> None:
        with pytest.raises(TypeError):
            SteadyTime(1.0) - CalendarTime(1.0)  # type: ignore[operator]

    def test_ordering_across_variants(self) -> None:
        with pytest.raises(TypeError):
            SteadyTime(1.0) < CalendarTime(2.0)  # type: ignore[operator]

    def test_never_equal_across_variants(self) -> None:
        assert SteadyTime(1.0) != CalendarTime(1.0)

    def test_from_time_rejects_steady_time(self) -> None:
        with pytest.raises(TypeError):
            SteadyTime.from_time(SteadyTime(1.0))  # type: ignore[arg-type]


class TestCalendarTimeDatetime:
    """Technique: Example-based Testing of datetime interop."""

    def test_from_aware_datetime(self) -> None:
        t = CalendarTime.from_datetime(NEW_YEAR_2020)
        assert t.seconds_since_epoch().is_equal(seconds(1_577_836_800))

    def test_from_naive_datetime_is_utc(self) -> None:
        naive = datetime(2020, 1, 1)
        assert CalendarTime.from_datetime(naive) == CalendarTime.from_datetime(
            NEW_YEAR_2020
        )

    def test_from_datetime_in_other_timezone(self) -> None:
        plus_two = datetime(2020, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))
        assert CalendarTime.from_datetime(plus_two) == CalendarTime.from_datetime(
            NEW_YEAR_2020
        )

    def test_microseconds_survive(self) -> None:
        moment = datetime(2020, 1, 1, 0, 0, 0, 123456, tzinfo=UTC)
        t = CalendarTime.from_datetime(moment)
        assert t.diff(CalendarTime.from_datetime(NEW_YEAR_2020)) == microseconds(123456)
        assert t.to_datetime() == moment

    def test_to_datetime(self) -> None:
        t = CalendarTime.from_datetime(NEW_YEAR_2020).after(minutes(1.5))
        assert t.to_datetime() == datetime(2020, 1, 1, 0, 1, 30, tzinfo=UTC)

    def test_to_datetime_in_timezone(self) -> None:
        tz = timezone(timedelta(hours=-5))
        local = CalendarTime.from_datetime(NEW_YEAR_2020).to_datetime(tz)
        assert local.tzinfo == tz
        assert local.hour == 19

    def test_str_is_iso_utc(self) -> None:
        assert str(CalendarTime.from_datetime(NEW_YEAR_2020)) == (
            "2020-01-01T00:00:00+00:00"
        )


class TestSteadyTimeStr:
    """Technique: Example-based Testing."""

    @pytest.mark.parametrize(
        ("time", "expected"),
        [
            (SteadyTime(1.0), "1000000000 ns since epoch"),
            (SteadyTime(0.0), "0 ns since epoch"),
            (SteadyTime(milliseconds(1.5)), "1500000 ns since epoch"),
            (SteadyTime(seconds(12345.678)), "12345678000000 ns since epoch"),
        ],
    )
    def test_integer_nanoseconds(self, time: SteadyTime, expected: str) -> None:
        assert str(time) == expected

    @pytest.mark.parametrize(
        ("offset", "expected"),
        [
            (0.5, "1 ns since epoch"),
            (2.5, "3 ns since epoch"),
            (-0.5, "-1 ns since epoch"),
            (1.4, "1 ns since epoch"),
        ],
    )
    def test_half_rounds_away_from_zero(self, offset: float, expected: str) -> None:
        assert str(SteadyTime(nanoseconds(offset))) == expected

    @pytest.mark.parametrize("offset", [-0.4, -0.0, 0.4])
    def test_zero_has_no_sign(self, offset: float) -> None:
        assert str(SteadyTime(nanoseconds(offset))) == "0 ns since epoch"


class TestFromTime:
    """Technique: Dependency Injection of scripted clocks."""

    def test_applies_calendar_offset_to_steady_reading(self) -> None:
        calendar = MockClock()
        calendar.set_datetime(NEW_YEAR_2020)
        steady = ScriptedSteadyClock(readings=[500.0])

        target = CalendarTime.from_datetime(NEW_YEAR_2020).after(seconds(30))
        converted = SteadyTime.from_time(
            target, calendar_clock=calendar, steady_clock=steady
        )

        assert converted == SteadyTime(530.0)

    def test_past_calendar_time_maps_before_now(self) -> None:
        calendar = MockClock()
        calendar.set_datetime(NEW_YEAR_2020)
        steady = ScriptedSteadyClock(readings=[500.0])

        target = CalendarTime.from_datetime(NEW_YEAR_2020).before(seconds(100))
        converted = SteadyTime.from_time(
            target, calendar_clock=calendar, steady_clock=steady
        )

        assert converted == SteadyTime(400.0)

    def test_result_ignores_read_gap(self) -> None:
        """The gap is reported, never folded into the result."""
        calendar = MockClock()
        steady = ScriptedSteadyClock(readings=[10.0, 11.0])

        converted = SteadyTime.from_time(
            CalendarTime(0.0), calendar_clock=calendar, steady_clock=steady
        )

        assert converted == SteadyTime(10.0)
        assert steady.calls == 2

    def test_wide_read_gap_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        calendar = MockClock()
        steady = ScriptedSteadyClock(readings=[10.0, 10.002])

        with caplog.at_level(logging.WARNING, logger="chronomark._time"):
            SteadyTime.from_time(
                CalendarTime(0.0),
                calendar_clock=calendar,
                steady_clock=steady,
                conversion=ConversionSettings(read_gap_warning_us=500),
            )

        assert any("apart" in record.getMessage() for record in caplog.records)

    def test_narrow_read_gap_is_silent(self, caplog: pytest.LogCaptureFixture) -> None:
        calendar = MockClock()
        steady = ScriptedSteadyClock(readings=[10.0, 10.0001])

        with caplog.at_level(logging.WARNING, logger="chronomark._time"):
            SteadyTime.from_time(
                CalendarTime(0.0),
                calendar_clock=calendar,
                steady_clock=steady,
                conversion=ConversionSettings(read_gap_warning_us=500),
            )

        assert caplog.records == []

    def test_real_clocks_agree_within_tolerance(self) -> None:
        """Converting "now" lands close to a direct steady reading."""
        calendar_clock = CalendarClock()
        steady_clock = SteadyClock()

        calendar_now = calendar_clock.now()
        steady_now = steady_clock.now()
        converted = SteadyTime.from_time(calendar_now)

        drift = abs(converted.diff(steady_now))
        assert drift < milliseconds(0.5)

    def test_offset_is_a_duration(self) -> None:
        converted = SteadyTime.from_time(CalendarClock().now())
        assert isinstance(converted.seconds_since_epoch(), Duration)
