"""Data model definitions: value types passed between the solver, providers and callers."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


@dataclass(frozen=True)
class CivilDate:
    """Calendar date in the observer's civil zone. Not validated."""

    year: int
    month: int  # 1-12
    day: int  # 1-31


@dataclass(frozen=True)
class GeoCoordinate:
    """Observer position on the WGS84 ellipsoid."""

    latitude: float  # Decimal degrees, north positive
    longitude: float  # Decimal degrees, east positive


@dataclass(frozen=True)
class HorizonSpec:
    """Altitude the Sun must cross for an event to occur."""

    altitude: float  # Degrees relative to the horizon
    limb_correction: bool  # Use the upper limb instead of the centre

    @property
    def name(self) -> str:
        for key, preset in HORIZONS.items():
            if preset == self:
                return key
        return f"{self.altitude:g}deg"


# Upper limb 35 arc minutes below the horizon (atmospheric refraction)
RISE_SET = HorizonSpec(altitude=-35.0 / 60.0, limb_correction=True)
CIVIL_TWILIGHT = HorizonSpec(altitude=-6.0, limb_correction=False)
NAUTICAL_TWILIGHT = HorizonSpec(altitude=-12.0, limb_correction=False)
ASTRONOMICAL_TWILIGHT = HorizonSpec(altitude=-18.0, limb_correction=False)

HORIZONS: dict[str, HorizonSpec] = {
    "rise_set": RISE_SET,
    "civil": CIVIL_TWILIGHT,
    "nautical": NAUTICAL_TWILIGHT,
    "astronomical": ASTRONOMICAL_TWILIGHT,
}


@dataclass(frozen=True)
class SolarEphemeris:
    """Sun position for one instant. Recomputed on every call."""

    days_since_epoch: float  # Days since 2000 Jan 0.0 UT
    ecliptic_longitude: float  # Degrees, 0..360
    distance_au: float  # Sun-Earth distance (astronomical units)
    right_ascension: float  # Degrees
    declination: float  # Degrees
    apparent_radius: float  # Degrees


class CrossingStatus(Enum):
    NORMAL = 0
    SUN_ALWAYS_ABOVE = 1
    SUN_ALWAYS_BELOW = -1


@dataclass(frozen=True)
class CrossingResult:
    """Rise/set solution in hours UT from 00:00 UT of the calendar date.

    When status is not NORMAL the hour fields hold transit ±12 h (always above)
    or the transit time itself (always below) and carry no event.
    """

    rise_hour_ut: float
    set_hour_ut: float
    status: CrossingStatus
    transit_hour_ut: float  # Time the Sun culminates (is at south)

    @property
    def has_events(self) -> bool:
        return self.status is CrossingStatus.NORMAL


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    address: str  # Free-form address string ("Golden Gate Park, San Francisco")
    when: str  # "YYYY-MM-DD" format string; empty means today


@dataclass(frozen=True)
class ObserverContext:
    """Result of geocoding + timezone lookup. Input to the sun-time computation."""

    lat: float  # Latitude (decimal degrees)
    lng: float  # Longitude (decimal degrees)
    tz_name: str  # IANA zone name ("America/Los_Angeles")
    local_date: date  # Calendar date in tz_name
    address_display: str  # Normalized address returned by geocoder (for display)


@dataclass(frozen=True)
class SunTimes:
    """Fully computed sun events for one observer and date. Instants are zone-aware."""

    context: ObserverContext
    algorithm: str  # Provider name
    sunrise: datetime | None
    sunset: datetime | None
    civil_dawn: datetime | None
    civil_dusk: datetime | None
    nautical_dawn: datetime | None
    nautical_dusk: datetime | None
    astronomical_dawn: datetime | None
    astronomical_dusk: datetime | None
    day_length: float  # Hours, 0..24
    civil_day_length: float
    nautical_day_length: float
    astronomical_day_length: float
