"""Built-in provider: Paul Schlyter's sunriset algorithm.

Reportedly diverges from other algorithms close to the poles and can
misclassify edge cases there. Released by its author into the public domain.
"""

import logging
from datetime import datetime

from suntimes import sunriset
from suntimes.civil_time import ut_instant
from suntimes.models import RISE_SET, CrossingResult, HorizonSpec

logger = logging.getLogger(__name__)


class SchlyterProvider:
    """Closed-form rise/set times, valid for 1801-2099."""

    name = "schlyter"

    def crossing(
        self,
        year: int,
        month: int,
        day: int,
        latitude: float,
        longitude: float,
        horizon: HorizonSpec = RISE_SET,
    ) -> CrossingResult:
        result = sunriset.solve_crossing(
            year, month, day, latitude, longitude, horizon.altitude, horizon.limb_correction
        )
        if not result.has_events:
            logger.debug(
                "No %s crossing on %04d-%02d-%02d at (%.4f, %.4f): %s",
                horizon.name,
                year,
                month,
                day,
                latitude,
                longitude,
                result.status.name,
            )
        return result

    def sunrise(
        self,
        year: int,
        month: int,
        day: int,
        latitude: float,
        longitude: float,
        horizon: HorizonSpec = RISE_SET,
    ) -> datetime | None:
        result = self.crossing(year, month, day, latitude, longitude, horizon)
        if not result.has_events:
            return None
        return ut_instant(year, month, day, result.rise_hour_ut)

    def sunset(
        self,
        year: int,
        month: int,
        day: int,
        latitude: float,
        longitude: float,
        horizon: HorizonSpec = RISE_SET,
    ) -> datetime | None:
        result = self.crossing(year, month, day, latitude, longitude, horizon)
        if not result.has_events:
            return None
        return ut_instant(year, month, day, result.set_hour_ut)

    def day_length(
        self,
        year: int,
        month: int,
        day: int,
        latitude: float,
        longitude: float,
        horizon: HorizonSpec = RISE_SET,
    ) -> float:
        return sunriset.solve_day_length(
            year, month, day, latitude, longitude, horizon.altitude, horizon.limb_correction
        )
