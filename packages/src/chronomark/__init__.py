"""chronomark.

Unit-aware durations plus calendar and steady clocks, with a mock clock
for deterministic tests.
"""

from importlib.metadata import PackageNotFoundError, version

from chronomark._clock import CalendarClock, Clock, SteadyClock
from chronomark._duration import (
    Duration,
    hours,
    microseconds,
    milliseconds,
    minutes,
    nanoseconds,
    seconds,
)
from chronomark._errors import (
    ChronoError,
    ClockDirectionError,
    DurationDivisionError,
    InvalidUnitError,
)
from chronomark._settings import ConversionSettings, Settings
from chronomark._time import CalendarTime, SteadyTime
from chronomark._units import Unit, custom_unit_name, unit_name

try:
    __version__ = version("chronomark")
except PackageNotFoundError:
    # Source checkout without installed metadata
    __version__ = "0.0.0+unknown"

__all__ = [
    # Version
    "__version__",
    # Units
    "Unit",
    "custom_unit_name",
    "unit_name",
    # Duration
    "Duration",
    "hours",
    "microseconds",
    "milliseconds",
    "minutes",
    "nanoseconds",
    "seconds",
    # Time
    "CalendarTime",
    "SteadyTime",
    # Clock
    "CalendarClock",
    "Clock",
    "SteadyClock",
    # Errors
    "ChronoError",
    "ClockDirectionError",
    "DurationDivisionError",
    "InvalidUnitError",
    # Settings
    "ConversionSettings",
    "Settings",
]
