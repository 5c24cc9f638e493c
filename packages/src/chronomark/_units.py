"""Time units expressed as nanoseconds-per-unit ratios.

A unit is nothing more than a positive ``float``: the number of
nanoseconds one unit stands for.  The :class:`Unit` namespace names the
standard ratios, but any positive ratio is a valid unit, for example
``Unit.SECONDS / 10`` is a tenth of a second.

Two sentinels are not ratios at all:

- ``Unit.UNKNOWN``: no unit fixed yet.
- ``Unit.UNCHANGED``: "keep the current unit" when reading a value
  via :meth:`~chronomark.Duration.value`.
"""

from __future__ import annotations

from typing import Final


class Unit:
    """Nanoseconds-per-unit ratios of the standard time units."""

    UNKNOWN: Final = 0.0
    UNCHANGED: Final = -1.0

    NANOSECONDS: Final = 1.0
    MICROSECONDS: Final = 1e3
    MILLISECONDS: Final = 1e6
    SECONDS: Final = 1e9
    MINUTES: Final = 60e9
    HOURS: Final = 3600e9


# Ascending by ratio; (singular, plural).
_NAMES: Final[tuple[tuple[float, str, str], ...]] = (
    (Unit.NANOSECONDS, "nanosecond", "nanoseconds"),
    (Unit.MICROSECONDS, "microsecond", "microseconds"),
    (Unit.MILLISECONDS, "millisecond", "milliseconds"),
    (Unit.SECONDS, "second", "seconds"),
    (Unit.MINUTES, "minute", "minutes"),
    (Unit.HOURS, "hour", "hours"),
)


def unit_name(unit: float, plural: bool) -> str | None:
    """Return the canonical name of *unit*, or ``None`` if it has none.

    Args:
        unit: Nanoseconds-per-unit ratio.
        plural: Select ``"seconds"`` over ``"second"``.

    Example::

        unit_name(Unit.SECONDS, plural=False)  # "second"
        unit_name(Unit.SECONDS / 10, plural=True)  # None
    """
    for ratio, singular, plural_name in _NAMES:
        if ratio == unit:
            return plural_name if plural else singular
    return None


def _number(x: float) -> str:
    return f"{x:g}" if not float(x).is_integer() else str(int(x))


def custom_unit_name(unit: float) -> str:
    """Render an arbitrary ratio relative to the standard units.

    Meant for diagnostics (``str()`` of a Duration with a custom unit),
    not for parsing.  Three shapes are produced:

    - ``"1/10 second equivalent"``: *unit* divides the next larger
      standard unit evenly.
    - ``"300 milliseconds equivalent"``: otherwise, a multiple of the
      largest standard unit not exceeding *unit*.
    - ``"1/4 nanosecond equivalent"``: sub-nanosecond ratios.
    """
    larger = [entry for entry in _NAMES if entry[0] > unit]
    if larger:
        ratio, singular, _ = larger[0]
        parts = ratio / unit
        if parts.is_integer():
            return f"1/{int(parts)} {singular} equivalent"

    smaller = [entry for entry in _NAMES if entry[0] <= unit]
    if not smaller:
        # Sub-nanosecond ratio that does not split a nanosecond evenly.
        return f"{_number(unit)} nanoseconds equivalent"

    ratio, singular, plural_name = smaller[-1]
    multiple = unit / ratio
    name = plural_name if multiple != 1.0 else singular
    return f"{_number(multiple)} {name} equivalent"
