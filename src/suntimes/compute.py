"""Sun-time computation layer: geocoding, timezone lookup, and provider dispatch."""

import logging
import os
from datetime import date, datetime, tzinfo

import httpx
from timezonefinder import TimezoneFinder

from suntimes.civil_time import civil_date, resolve_zone
from suntimes.models import (
    ASTRONOMICAL_TWILIGHT,
    CIVIL_TWILIGHT,
    NAUTICAL_TWILIGHT,
    RISE_SET,
    GeoCoordinate,
    HorizonSpec,
    ObserverContext,
    QueryInput,
    SunTimes,
)
from suntimes.providers.base import SunriseSunsetProvider
from suntimes.providers.schlyter import SchlyterProvider

logger = logging.getLogger(__name__)

_DEFAULT_USER_AGENT = "SunTimes/1.0 (python-httpx)"
_tf = TimezoneFinder()

DEFAULT_ALGORITHM: SunriseSunsetProvider = SchlyterProvider()


class GeocodingError(Exception):
    """Geocoder call failure."""


def _coords(
    latitude: float | None, longitude: float | None, at: GeoCoordinate | None
) -> tuple[float, float]:
    if at is not None:
        if latitude is not None or longitude is not None:
            raise TypeError("pass either latitude and longitude or at=, not both")
        return at.latitude, at.longitude
    if latitude is None or longitude is None:
        raise TypeError("latitude and longitude, or at=, are required")
    return latitude, longitude


def sunrise(
    for_date: datetime | date,
    tz: str | tzinfo,
    latitude: float | None = None,
    longitude: float | None = None,
    *,
    at: GeoCoordinate | None = None,
    algorithm: SunriseSunsetProvider | None = None,
    horizon: HorizonSpec = RISE_SET,
) -> datetime | None:
    """Sunrise for a location on the day ``for_date`` falls on in ``tz``.

    Args:
        for_date: Instant (or plain date) whose calendar day is used.
        tz: Zone the calendar day is taken in (IANA name or tzinfo).
        latitude: Observer latitude, north positive.
        longitude: Observer longitude, east positive.
        at: Coordinate to use instead of latitude/longitude.
        algorithm: Provider to use. Defaults to the built-in Schlyter solver.
        horizon: Altitude to cross. Defaults to sunrise/sunset.

    Returns:
        UTC datetime of sunrise, or None if there is no sunrise that day.
    """
    lat, lng = _coords(latitude, longitude, at)
    d = civil_date(for_date, tz)
    provider = algorithm or DEFAULT_ALGORITHM
    return provider.sunrise(d.year, d.month, d.day, lat, lng, horizon)


def sunset(
    for_date: datetime | date,
    tz: str | tzinfo,
    latitude: float | None = None,
    longitude: float | None = None,
    *,
    at: GeoCoordinate | None = None,
    algorithm: SunriseSunsetProvider | None = None,
    horizon: HorizonSpec = RISE_SET,
) -> datetime | None:
    """Sunset for a location on the day ``for_date`` falls on in ``tz``.

    Same arguments as :func:`sunrise`. Returns None if there is no sunset that day.
    """
    lat, lng = _coords(latitude, longitude, at)
    d = civil_date(for_date, tz)
    provider = algorithm or DEFAULT_ALGORITHM
    return provider.sunset(d.year, d.month, d.day, lat, lng, horizon)


def day_length(
    for_date: datetime | date,
    tz: str | tzinfo,
    latitude: float | None = None,
    longitude: float | None = None,
    *,
    at: GeoCoordinate | None = None,
    algorithm: SunriseSunsetProvider | None = None,
    horizon: HorizonSpec = RISE_SET,
) -> float:
    """Hours the Sun spends above ``horizon`` on the day ``for_date`` falls on in ``tz``."""
    lat, lng = _coords(latitude, longitude, at)
    d = civil_date(for_date, tz)
    provider = algorithm or DEFAULT_ALGORITHM
    return provider.day_length(d.year, d.month, d.day, lat, lng, horizon)


def _geocode_nominatim(address: str) -> tuple[float, float, str] | None:
    """Nominatim (OpenStreetMap) geocoder. Returns (lat, lng, display_name) or None."""
    params = {"q": address, "format": "json", "limit": 1}
    headers = {"User-Agent": os.environ.get("SUNTIMES_USER_AGENT", _DEFAULT_USER_AGENT)}
    logger.info("Geocoding %r via Nominatim", address)
    resp = httpx.get(
        "https://nominatim.openstreetmap.org/search",
        params=params,
        headers=headers,
        timeout=10,
    )
    resp.raise_for_status()
    results = resp.json()
    if not results:
        return None
    r = results[0]
    return float(r["lat"]), float(r["lon"]), r["display_name"]


def timezone_at(lat: float, lng: float) -> str:
    """IANA zone name covering a coordinate.

    Raises:
        GeocodingError: When no zone covers the coordinate.
    """
    tz_str = _tf.timezone_at(lat=lat, lng=lng)
    if tz_str is None:
        raise GeocodingError(f"Timezone not found: lat={lat}, lng={lng}")
    return tz_str


def _parse_date(when: str, tz_name: str) -> date:
    if not when:
        return datetime.now(resolve_zone(tz_name)).date()
    return datetime.strptime(when, "%Y-%m-%d").date()


def geocode_address(address: str, when: str) -> ObserverContext:
    """Resolve an address string and date string to an ObserverContext.

    Args:
        address: Address string in any language.
        when: Local date string in "YYYY-MM-DD" format, or "" for today.

    Returns:
        ObserverContext containing lat/lng, zone name, local date, and normalized address.

    Raises:
        GeocodingError: When the address or its time zone cannot be found.
        httpx.HTTPStatusError: On a geocoder HTTP error.
    """
    result = _geocode_nominatim(address)
    if result is None:
        raise GeocodingError(f"Address not found: {address}")
    lat, lng, address_display = result

    tz_name = timezone_at(lat, lng)
    logger.debug("Resolved %r to (%.5f, %.5f) in %s", address, lat, lng, tz_name)
    return ObserverContext(
        lat=lat,
        lng=lng,
        tz_name=tz_name,
        local_date=_parse_date(when, tz_name),
        address_display=address_display,
    )


def observer_context(
    lat: float, lng: float, when: str = "", tz_name: str | None = None
) -> ObserverContext:
    """Build an ObserverContext from known coordinates, skipping the geocoder."""
    tz_name = tz_name or timezone_at(lat, lng)
    return ObserverContext(
        lat=lat,
        lng=lng,
        tz_name=tz_name,
        local_date=_parse_date(when, tz_name),
        address_display=f"{lat:.5f}, {lng:.5f}",
    )


def compute_sun_times(
    context: ObserverContext,
    algorithm: SunriseSunsetProvider | None = None,
) -> SunTimes:
    """Compute every sun event for the observer's local date.

    Args:
        context: Geocoding result (lat/lng, zone, local date).
        algorithm: Provider to use. Defaults to the built-in Schlyter solver.

    Returns:
        SunTimes with instants converted to the observer's zone.
    """
    provider = algorithm or DEFAULT_ALGORITHM
    zone = resolve_zone(context.tz_name)
    y, m, d = context.local_date.year, context.local_date.month, context.local_date.day

    def events(horizon: HorizonSpec) -> tuple[datetime | None, datetime | None]:
        rise = provider.sunrise(y, m, d, context.lat, context.lng, horizon)
        set_ = provider.sunset(y, m, d, context.lat, context.lng, horizon)
        return (
            rise.astimezone(zone) if rise is not None else None,
            set_.astimezone(zone) if set_ is not None else None,
        )

    def length(horizon: HorizonSpec) -> float:
        return provider.day_length(y, m, d, context.lat, context.lng, horizon)

    sunrise_at, sunset_at = events(RISE_SET)
    civil_dawn, civil_dusk = events(CIVIL_TWILIGHT)
    nautical_dawn, nautical_dusk = events(NAUTICAL_TWILIGHT)
    astro_dawn, astro_dusk = events(ASTRONOMICAL_TWILIGHT)

    return SunTimes(
        context=context,
        algorithm=provider.name,
        sunrise=sunrise_at,
        sunset=sunset_at,
        civil_dawn=civil_dawn,
        civil_dusk=civil_dusk,
        nautical_dawn=nautical_dawn,
        nautical_dusk=nautical_dusk,
        astronomical_dawn=astro_dawn,
        astronomical_dusk=astro_dusk,
        day_length=length(RISE_SET),
        civil_day_length=length(CIVIL_TWILIGHT),
        nautical_day_length=length(NAUTICAL_TWILIGHT),
        astronomical_day_length=length(ASTRONOMICAL_TWILIGHT),
    )


def run(query: QueryInput, algorithm: SunriseSunsetProvider | None = None) -> SunTimes:
    """Top-level entry point: takes a QueryInput and returns a SunTimes.

    Args:
        query: User input (address, date string).
        algorithm: Provider to use. Defaults to the built-in Schlyter solver.

    Returns:
        Fully computed SunTimes.
    """
    context = geocode_address(query.address, query.when)
    return compute_sun_times(context, algorithm)
