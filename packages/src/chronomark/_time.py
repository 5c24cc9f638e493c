"""Instants on the calendar and steady time lines.

An instant is an offset (a :class:`~chronomark.Duration`) from the epoch
of its clock domain:

- :class:`CalendarTime`: the Unix epoch of the wall clock.  Subject to
  NTP corrections and manual clock changes.
- :class:`SteadyTime`: an arbitrary monotonic reference (typically boot
  time).  Only differences are meaningful and values cannot be compared
  across processes or reboots.

The two variants never mix.  ``diff``, ``-`` and the ordering operators
refuse an instant of the other variant with :class:`TypeError`, and the
``Self`` annotations let a type checker flag the mistake earlier.
Crossing domains goes through the explicit, one-off
:meth:`SteadyTime.from_time` conversion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import TYPE_CHECKING, Self

from chronomark._duration import Duration
from chronomark._settings import ConversionSettings
from chronomark._units import Unit

if TYPE_CHECKING:
    from chronomark._clock import Clock

logger = logging.getLogger(__name__)

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Enough digits to quantize any finite float nanosecond count.
_DECIMAL_PRECISION = 340


@dataclass(frozen=True, slots=True, eq=False)
class _Instant:
    """Shared behaviour of both time variants.

    Attributes:
        offset: Time since the variant's epoch.  A plain number is
            taken as seconds.
    """

    offset: Duration

    def __post_init__(self) -> None:
        if not isinstance(self.offset, Duration):
            object.__setattr__(self, "offset", Duration(self.offset, Unit.SECONDS))

    def seconds_since_epoch(self) -> Duration:
        return self.offset

    def diff(self, other: Self) -> Duration:
        """Return the Duration from *other* to this instant.

        Raises:
            TypeError: *other* belongs to the other clock domain.
        """
        self._require_same_variant(other, "diff")
        return self.offset.subtract(other.offset)

    def after(self, duration: Duration) -> Self:
        return type(self)(self.offset.add(duration))

    def before(self, duration: Duration) -> Self:
        return type(self)(self.offset.subtract(duration))

    def _require_same_variant(self, other: object, operation: str) -> None:
        if type(other) is not type(self):
            raise TypeError(
                f"cannot {operation} {type(self).__name__} and "
                f"{type(other).__name__}; convert explicitly first"
            )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.offset.compare(other.offset) == 0

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.offset))

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.offset.compare(other.offset) < 0

    def __le__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.offset.compare(other.offset) <= 0

    def __gt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.offset.compare(other.offset) > 0

    def __ge__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.offset.compare(other.offset) >= 0

    def __add__(self, other: object) -> Self:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.after(other)

    def __sub__(self, other: object) -> Duration | Self:
        if isinstance(other, Duration):
            return self.before(other)
        if isinstance(other, _Instant):
            return self.diff(other)  # type: ignore[arg-type]
        return NotImplemented


class CalendarTime(_Instant):
    """An instant on the wall clock, as an offset from the Unix epoch.

    Interoperates with :class:`datetime.datetime` at microsecond
    resolution.  Naive datetimes are read as UTC; timezone handling is
    left to the caller.

    Example::

        t = CalendarTime.from_datetime(datetime(2020, 1, 1, tzinfo=UTC))
        t.after(seconds(90)).to_datetime()   # 2020-01-01 00:01:30+00:00
    """

    __slots__ = ()

    @classmethod
    def from_datetime(cls, moment: datetime) -> CalendarTime:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=UTC)
        return cls(Duration.from_timedelta(moment - _UNIX_EPOCH))

    def to_datetime(self, tz: tzinfo = UTC) -> datetime:
        return (_UNIX_EPOCH + self.offset.to_timedelta()).astimezone(tz)

    def __str__(self) -> str:
        return self.to_datetime().isoformat()


class SteadyTime(_Instant):
    """An instant on the monotonic clock."""

    __slots__ = ()

    @classmethod
    def from_time(
        cls,
        time: CalendarTime,
        *,
        calendar_clock: Clock[CalendarTime] | None = None,
        steady_clock: Clock[SteadyTime] | None = None,
        conversion: ConversionSettings | None = None,
    ) -> SteadyTime:
        """Map a calendar instant onto the steady time line.

        The two epochs have no algebraic relation, so the mapping is
        measured: the steady clock and then the calendar clock are read
        back to back, and *time*'s distance from that calendar reading
        is applied to the steady reading.

        **Accuracy:** the result is off by up to the gap between the two
        reads (clock-read latency, scheduler preemption).  The steady
        clock is read once more afterwards to measure that gap, and a
        WARNING is logged when it exceeds
        ``conversion.read_gap_warning_us``.  The result is never
        corrected for the gap.

        Args:
            time: Calendar instant to convert.
            calendar_clock: Source of the calendar reading.  Defaults to
                :class:`~chronomark.CalendarClock`.
            steady_clock: Source of the steady reading.  Defaults to
                :class:`~chronomark.SteadyClock`.
            conversion: Read-gap warning threshold.  Defaults to
                :class:`~chronomark.ConversionSettings` defaults.

        Raises:
            TypeError: *time* is not a :class:`CalendarTime`.
        """
        if not isinstance(time, CalendarTime):
            raise TypeError(
                f"from_time expects CalendarTime, got {type(time).__name__}"
            )

        from chronomark._clock import CalendarClock, SteadyClock

        steady = steady_clock if steady_clock is not None else SteadyClock()
        calendar = calendar_clock if calendar_clock is not None else CalendarClock()
        settings = conversion if conversion is not None else ConversionSettings()

        steady_now = steady.now()
        calendar_now = calendar.now()
        read_gap = steady.now().diff(steady_now)

        gap_us = read_gap.value(Unit.MICROSECONDS)
        if gap_us > settings.read_gap_warning_us:
            logger.warning(
                "Steady/calendar clock reads were %.1f us apart "
                "(threshold %.1f us); converted time may be off by as much",
                gap_us,
                settings.read_gap_warning_us,
            )

        return steady_now.after(time.diff(calendar_now))

    def __str__(self) -> str:
        return f"{_whole_nanoseconds(self.offset)} ns since epoch"


def _whole_nanoseconds(offset: Duration) -> Decimal:
    """Round half away from zero; zero never carries a sign."""
    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        exact = Decimal(f"{offset.value(Unit.NANOSECONDS):.6f}")
        rounded = exact.quantize(Decimal(1), rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        return Decimal(0)
    return rounded
