"""Library configuration via pydantic-settings.

Configuration is loaded from environment variables and/or a ``.env``
file, all prefixed with ``CHRONOMARK_``.  Nested models use ``__`` as
the delimiter, e.g. ``CHRONOMARK_CONVERSION__READ_GAP_WARNING_US=250``.

The only section today is **conversion**: tolerances of the
calendar-to-steady conversion (:meth:`~chronomark.SteadyTime.from_time`).
chronomark logs through module-level loggers and leaves handler setup
to the embedding application.

Nothing here is read implicitly at import time.  Callers build a
:class:`Settings` (or just the section they need) and pass it on.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConversionSettings(BaseModel):
    """Calendar-to-steady conversion tolerances.

    The conversion reads two clocks back to back; its error is bounded
    by the gap between the reads.  Gaps wider than
    ``read_gap_warning_us`` are reported at WARNING level.

    Environment variables::

        CHRONOMARK_CONVERSION__READ_GAP_WARNING_US=1000
    """

    read_gap_warning_us: Annotated[float, Field(ge=0)] = Field(
        default=500.0,
        description=(
            "Microseconds between the steady and calendar clock reads "
            "above which a warning is logged."
        ),
    )


class Settings(BaseSettings):
    """Root settings for chronomark.

    Example ``.env``::

        CHRONOMARK_CONVERSION__READ_GAP_WARNING_US=250
    """

    model_config = SettingsConfigDict(
        env_prefix="CHRONOMARK_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    conversion: ConversionSettings = Field(
        default_factory=ConversionSettings,
        description="Calendar-to-steady conversion tolerances.",
    )
