"""Unit-aware Duration value type.

A :class:`Duration` is a ``float`` amount tagged with a unit ratio
(nanoseconds per unit, see :class:`~chronomark.Unit`).  The tag is what
the named constructors fix::

    seconds(1)            # Duration(1.0, Unit.SECONDS)
    milliseconds(1000)    # Duration(1000.0, Unit.MILLISECONDS)
    Duration(3, Unit.SECONDS / 10)   # three tenths of a second

Every operation returns a new Duration in the *receiver's* unit; the
other operand is converted first.  Durations are immutable and safe to
share between threads.

**Why compare through decimals?**  Magnitudes are kept in binary
floating point, where ``0.1 s`` and ``100 ms`` are not guaranteed to
land on the same nanosecond value bit-for-bit, and subtracting two
large nearly-equal values amplifies the difference.  :meth:`Duration.compare`
therefore renders both magnitudes as fixed-point nanosecond strings
(never exponent notation) and orders them exactly with
:class:`decimal.Decimal`.  Equal magnitudes built from different units
compare equal, and the ordering is transitive whatever units were used.
Six fractional digits keep femtosecond resolution: magnitudes one
femtosecond apart compare unequal, noise below half a femtosecond does
not count.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal, localcontext
from functools import total_ordering

from chronomark._errors import DurationDivisionError, InvalidUnitError
from chronomark._units import Unit, custom_unit_name, unit_name

# Fractional nanosecond digits kept when rendering a magnitude.
_NANOSECOND_SCALE = 6

# Wide enough for any finite float rendered at _NANOSECOND_SCALE.
_DECIMAL_PRECISION = 340


def _check_unit(unit: float) -> float:
    unit = float(unit)
    if not math.isfinite(unit) or unit <= 0.0:
        raise InvalidUnitError(unit)
    return unit


def _render_amount(amount: float) -> str:
    if amount.is_integer() and abs(amount) < 1e16:
        return str(int(amount))
    return repr(amount)


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class Duration:
    """An amount of elapsed time in an explicit unit.

    Attributes:
        amount: Scalar value expressed in :attr:`unit`.
        unit: Nanoseconds per unit.  Any positive finite ratio is
            accepted; :class:`~chronomark.Unit` names the standard ones.

    The amount is a binary float, so ``d.add(e).subtract(e)`` equals
    ``d`` only while the sum keeps ``d``'s significant digits.  Adding a
    fractional nanosecond count to thousands of seconds rounds those
    digits away, e.g.
    ``nanoseconds(-5279.0382).add(seconds(4424.3)).subtract(seconds(4424.3))``
    comes back as ``-5279.0380859375`` nanoseconds.

    Raises:
        InvalidUnitError: *unit* is zero, negative or not finite.
    """

    amount: float
    unit: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", float(self.amount))
        object.__setattr__(self, "unit", _check_unit(self.unit))

    # -- reading ---------------------------------------------------------

    def value(self, unit: float = Unit.UNCHANGED) -> float:
        """Return the magnitude expressed in *unit*.

        With ``Unit.UNCHANGED`` (the default) or the Duration's own
        unit, the stored amount is returned untouched so that repeated
        reads never accumulate conversion error.

        Example::

            d = seconds(10).slice(4)
            d.value()                    # 2.5
            d.value(Unit.MILLISECONDS)   # 2500.0
        """
        if unit == Unit.UNCHANGED or unit == self.unit:
            return self.amount
        return (self.amount * self.unit) / _check_unit(unit)

    def int_value(self, unit: float = Unit.UNCHANGED) -> int:
        """Return :meth:`value` truncated toward zero."""
        return int(self.value(unit))

    def is_zero(self) -> bool:
        return self.compare(Duration(0.0, Unit.NANOSECONDS)) == 0

    # -- arithmetic ------------------------------------------------------

    def add(self, other: Duration) -> Duration:
        """Return ``self + other`` in this Duration's unit."""
        return Duration(self.amount + other.value(self.unit), self.unit)

    def subtract(self, other: Duration) -> Duration:
        """Return ``self - other`` in this Duration's unit."""
        return Duration(self.amount - other.value(self.unit), self.unit)

    def negate(self) -> Duration:
        return Duration(-self.amount, self.unit)

    def slice(self, count: float) -> Duration:
        """Split into *count* equal intervals and return one of them.

        Example::

            seconds(100).slice(4)   # 25 seconds

        Raises:
            DurationDivisionError: *count* is zero.
        """
        if float(count) == 0.0:
            raise DurationDivisionError("slice")
        return Duration(self.amount / float(count), self.unit)

    def divide_int(self, other: Duration) -> int:
        """Return how many whole times *other* fits into this Duration.

        The ratio is truncated toward zero.

        Raises:
            DurationDivisionError: *other* is a zero Duration.
        """
        if other.is_zero():
            raise DurationDivisionError("divide_int")
        return int(self.amount / other.value(self.unit))

    def divide_float(self, other: Duration) -> float:
        """Return the ratio of this magnitude to *other*'s.

        Raises:
            DurationDivisionError: *other* is a zero Duration.
        """
        if other.is_zero():
            raise DurationDivisionError("divide_float")
        return self.amount / other.value(self.unit)

    def modulo(self, other: Duration) -> Duration:
        """Return the remainder of dividing this Duration by *other*.

        Both magnitudes are taken at nanosecond resolution in the same
        decimal form :meth:`compare` uses, so the remainder agrees with
        comparisons (``seconds(0.3).modulo(seconds(0.1))`` is zero).  The
        sign follows the dividend.  The result is expressed in this
        Duration's unit.

        Raises:
            DurationDivisionError: *other* is a zero Duration.
        """
        if other.is_zero():
            raise DurationDivisionError("modulo")
        with localcontext() as ctx:
            ctx.prec = _DECIMAL_PRECISION
            remainder = _nanoseconds(self) % _nanoseconds(other)
        return Duration(float(remainder) / self.unit, self.unit)

    # -- comparison ------------------------------------------------------

    def compare(self, other: Duration) -> int:
        """Order two Durations by magnitude.

        Returns:
            ``-1`` if this is shorter than *other*, ``0`` if equal,
            ``1`` if longer.

        Example::

            seconds(1).compare(milliseconds(1000))   # 0
            seconds(1).compare(seconds(2))           # -1
        """
        mine = _nanoseconds(self)
        theirs = _nanoseconds(other)
        return (mine > theirs) - (mine < theirs)

    def is_equal(self, other: Duration) -> bool:
        return self.compare(other) == 0

    # -- conversion ------------------------------------------------------

    @classmethod
    def create_from(cls, other: Duration, unit: float | None = None) -> Duration:
        """Re-express *other* in *unit* (nanoseconds when omitted).

        Example::

            Duration.create_from(seconds(10), Unit.MICROSECONDS)
            # 10000000 microseconds
        """
        if unit is None or unit == Unit.UNKNOWN:
            unit = Unit.NANOSECONDS
        return cls(other.value(unit), unit)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> Duration:
        """Build a microsecond-tagged Duration from a :class:`~datetime.timedelta`."""
        micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
        return cls(micros, Unit.MICROSECONDS)

    def to_timedelta(self) -> timedelta:
        """Convert to :class:`~datetime.timedelta` (microsecond resolution)."""
        return timedelta(microseconds=self.value(Unit.MICROSECONDS))

    # -- dunder protocol -------------------------------------------------

    def __str__(self) -> str:
        name = unit_name(self.unit, self.amount != 1.0)
        if name is None:
            name = custom_unit_name(self.unit)
        return f"{_render_amount(self.amount)} {name}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(_nanoseconds(self))

    def __add__(self, other: object) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> Duration:
        return self.negate()

    def __abs__(self) -> Duration:
        return Duration(abs(self.amount), self.unit)

    def __mul__(self, factor: object) -> Duration:
        if isinstance(factor, bool) or not isinstance(factor, int | float):
            return NotImplemented
        return Duration(self.amount * factor, self.unit)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Duration | float:
        """``d / n`` slices, ``d / other_duration`` divides magnitudes."""
        if isinstance(other, Duration):
            return self.divide_float(other)
        if isinstance(other, bool) or not isinstance(other, int | float):
            return NotImplemented
        return self.slice(other)


def _nanoseconds(duration: Duration) -> Decimal:
    """Fixed-point decimal rendering of a magnitude in nanoseconds."""
    return Decimal(f"{duration.value(Unit.NANOSECONDS):.{_NANOSECOND_SCALE}f}")


# ---------------------------------------------------------------------------
# Named constructors
# ---------------------------------------------------------------------------


def nanoseconds(value: float) -> Duration:
    return Duration(value, Unit.NANOSECONDS)


def microseconds(value: float) -> Duration:
    return Duration(value, Unit.MICROSECONDS)


def milliseconds(value: float) -> Duration:
    return Duration(value, Unit.MILLISECONDS)


def seconds(value: float) -> Duration:
    return Duration(value, Unit.SECONDS)


def minutes(value: float) -> Duration:
    return Duration(value, Unit.MINUTES)


def hours(value: float) -> Duration:
    return Duration(value, Unit.HOURS)
