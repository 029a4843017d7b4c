"""Port for sunrise/sunset algorithms.

Any object with these methods can be passed as ``algorithm=`` to the
functions in ``suntimes.compute``.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable

from suntimes.models import RISE_SET, HorizonSpec


@runtime_checkable
class SunriseSunsetProvider(Protocol):
    """Maps (civil date, coordinate) to an optional UTC instant.

    ``year``/``month``/``day`` are the observer's calendar date. Returned
    instants are timezone-aware UTC datetimes, or None when the Sun does not
    cross the horizon on that date.
    """

    name: str

    def sunrise(
        self,
        year: int,
        month: int,
        day: int,
        latitude: float,
        longitude: float,
        horizon: HorizonSpec = RISE_SET,
    ) -> datetime | None:
        """Instant the Sun rises through ``horizon``."""
        ...

    def sunset(
        self,
        year: int,
        month: int,
        day: int,
        latitude: float,
        longitude: float,
        horizon: HorizonSpec = RISE_SET,
    ) -> datetime | None:
        """Instant the Sun sets through ``horizon``."""
        ...

    def day_length(
        self,
        year: int,
        month: int,
        day: int,
        latitude: float,
        longitude: float,
        horizon: HorizonSpec = RISE_SET,
    ) -> float:
        """Hours the Sun spends above ``horizon`` (0..24)."""
        ...
