"""Public test-support utilities for chronomark.

Provided symbols:

- :class:`MockClock`: deterministic calendar clock for timing tests.
- :func:`make_settings`: factory for ``Settings`` without ``.env`` files
  or environment variables.

The ``mock_clock``, ``calendar_clock`` and ``steady_clock`` pytest
fixtures are registered separately through the ``pytest11`` entry point.
"""

from chronomark.testing._clock import MockClock
from chronomark.testing._settings import make_settings

__all__ = [
    "MockClock",
    "make_settings",
]
