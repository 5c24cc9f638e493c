"""Exception hierarchy for chronomark.

Every library error derives from :class:`ChronoError` and *also* from
the builtin exception a caller would naturally expect, so both
``except ChronoError`` and ``except ZeroDivisionError`` work:

- :class:`DurationDivisionError`: division-like Duration operation
  with a zero divisor (``ZeroDivisionError``).
- :class:`ClockDirectionError`: a mock clock asked to elapse a
  negative Duration (``ValueError``).
- :class:`InvalidUnitError`: a unit ratio that is zero, negative or
  not finite (``ValueError``).

Mixing calendar and steady instants is reported with the builtin
``TypeError``; it is a programming error, not a library condition.
"""

from __future__ import annotations


class ChronoError(Exception):
    """Base exception for all chronomark errors."""


class DurationDivisionError(ChronoError, ZeroDivisionError):
    """Division of a Duration by zero (or by a zero-magnitude Duration)."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Duration.{operation}: division by zero")
        self.operation = operation


class ClockDirectionError(ChronoError, ValueError):
    """A clock was asked to move backwards by elapsing."""

    def __init__(self, nanoseconds: float) -> None:
        super().__init__(
            f"Clock cannot go backwards (elapse by {nanoseconds:.0f} ns)"
        )
        self.nanoseconds = nanoseconds


class InvalidUnitError(ChronoError, ValueError):
    """A unit ratio that cannot express a time unit."""

    def __init__(self, unit: float) -> None:
        super().__init__(f"Invalid time unit ratio: {unit!r}")
        self.unit = unit
