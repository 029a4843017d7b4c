"""Alternative provider backed by the skyfield almanac and the JPL DE421 ephemeris.

Slower than the closed-form solver but accurate well outside 1801-2099
(DE421 covers 1900-2050). The ephemeris file is loaded on first use.
"""

import logging
import os
from datetime import datetime, timedelta
from pathlib import Path

from skyfield import almanac
from skyfield.api import Loader, wgs84

from suntimes.civil_time import ut_instant
from suntimes.models import RISE_SET, HorizonSpec
from suntimes.sunriset import SUN_RADIUS_1AU

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).parent.parent.parent.parent
EPHEMERIS_FILE = "de421.bsp"


def ephemeris_dir() -> Path:
    """Directory holding ephemeris files. ``SUNTIMES_EPHEMERIS_DIR`` overrides."""
    return Path(os.environ.get("SUNTIMES_EPHEMERIS_DIR", str(_ROOT / "resources")))


def horizon_degrees(horizon: HorizonSpec, distance_au: float) -> float:
    """Altitude of the Sun's centre at the event; the upper limb sits one apparent radius higher."""
    if horizon.limb_correction:
        return horizon.altitude - SUN_RADIUS_1AU / distance_au
    return horizon.altitude


def local_noon(year: int, month: int, day: int, longitude: float) -> datetime:
    """UTC instant of 12h local mean solar time on the date."""
    return ut_instant(year, month, day, 12.0 - longitude / 15.0)


def noon_window(year: int, month: int, day: int, longitude: float) -> tuple[datetime, datetime]:
    """24 h search window centred on local mean noon of the date."""
    noon = local_noon(year, month, day, longitude)
    return noon - timedelta(hours=12), noon + timedelta(hours=12)


class SkyfieldProvider:
    """Rise/set times found numerically with ``skyfield.almanac``."""

    name = "skyfield"

    def __init__(self, directory: Path | None = None) -> None:
        self._loader = Loader(str(directory or ephemeris_dir()))
        self._eph = None
        self._ts = None

    @property
    def directory(self) -> str:
        return self._loader.directory

    def _load(self):
        if self._eph is None:
            logger.info("Loading %s from %s", EPHEMERIS_FILE, self._loader.directory)
            self._eph = self._loader(EPHEMERIS_FILE)
            self._ts = self._loader.timescale()
        return self._eph, self._ts

    def _observer(self, latitude: float, longitude: float):
        eph, _ = self._load()
        return eph["earth"] + wgs84.latlon(
            latitude_degrees=latitude, longitude_degrees=longitude
        )

    def _horizon_at_noon(self, year, month, day, longitude, horizon):
        eph, ts = self._load()
        noon = ts.from_datetime(local_noon(year, month, day, longitude))
        distance = eph["earth"].at(noon).observe(eph["sun"]).distance().au
        return horizon_degrees(horizon, distance)

    def _first_event(self, finder, year, month, day, latitude, longitude, horizon):
        eph, ts = self._load()
        start, end = noon_window(year, month, day, longitude)
        times, crosses = finder(
            self._observer(latitude, longitude),
            eph["sun"],
            ts.from_datetime(start),
            ts.from_datetime(end),
            horizon_degrees=self._horizon_at_noon(year, month, day, longitude, horizon),
        )
        for i, crossed in enumerate(crosses):
            if crossed:
                return times[i].utc_datetime()
        return None

    def sunrise(
        self,
        year: int,
        month: int,
        day: int,
        latitude: float,
        longitude: float,
        horizon: HorizonSpec = RISE_SET,
    ) -> datetime | None:
        return self._first_event(
            almanac.find_risings, year, month, day, latitude, longitude, horizon
        )

    def sunset(
        self,
        year: int,
        month: int,
        day: int,
        latitude: float,
        longitude: float,
        horizon: HorizonSpec = RISE_SET,
    ) -> datetime | None:
        return self._first_event(
            almanac.find_settings, year, month, day, latitude, longitude, horizon
        )

    def day_length(
        self,
        year: int,
        month: int,
        day: int,
        latitude: float,
        longitude: float,
        horizon: HorizonSpec = RISE_SET,
    ) -> float:
        rise = self.sunrise(year, month, day, latitude, longitude, horizon)
        set_ = self.sunset(year, month, day, latitude, longitude, horizon)
        if rise is not None and set_ is not None:
            hours = (set_ - rise).total_seconds() / 3600.0
            return hours % 24.0

        # No crossing: the Sun is up or down all day; sample it at local noon
        eph, ts = self._load()
        noon = ts.from_datetime(local_noon(year, month, day, longitude))
        alt, _, _ = (
            self._observer(latitude, longitude).at(noon).observe(eph["sun"]).apparent().altaz()
        )
        threshold = self._horizon_at_noon(year, month, day, longitude, horizon)
        return 24.0 if alt.degrees > threshold else 0.0
