"""Clock port and system adapters.

Provides the :class:`Clock` protocol plus the two production clocks:

- :class:`CalendarClock`: wall-clock time (``time.time_ns()``).
  Follows NTP and manual clock adjustments; use it to *timestamp*.
- :class:`SteadyClock`: monotonic time (``time.monotonic_ns()``).
  Immune to clock adjustments; use it to *measure elapsed time*.  The
  epoch is arbitrary, only differences between readings are
  meaningful (PEP 418).

Both are stateless pass-throughs: every ``now()`` samples the platform
clock afresh, so a single instance can be shared by any number of
threads.  Code under test receives a
:class:`~chronomark.testing.MockClock` through the same protocol.
"""

from __future__ import annotations

import time
from typing import Protocol, TypeVar, runtime_checkable

from chronomark._duration import nanoseconds
from chronomark._time import CalendarTime, SteadyTime

_TimeT_co = TypeVar("_TimeT_co", CalendarTime, SteadyTime, covariant=True)


@runtime_checkable
class Clock(Protocol[_TimeT_co]):
    """Source of "now" for one clock domain.

    Production code depends on ``Clock[CalendarTime]`` or
    ``Clock[SteadyTime]`` rather than on a concrete clock, so tests can
    inject a deterministic double.
    """

    def now(self) -> _TimeT_co:
        """Return the current instant of this clock's domain."""
        ...


class CalendarClock:
    """Production wall clock.

    Satisfies :class:`Clock` via structural subtyping (PEP 544).

    Usage::

        clock = CalendarClock()
        clock.now().to_datetime()
    """

    def now(self) -> CalendarTime:
        return CalendarTime(nanoseconds(time.time_ns()))


class SteadyClock:
    """Production monotonic clock.

    Usage::

        clock = SteadyClock()
        start = clock.now()
        # ... some work ...
        elapsed = clock.now().diff(start)
    """

    def now(self) -> SteadyTime:
        return SteadyTime(nanoseconds(time.monotonic_ns()))
