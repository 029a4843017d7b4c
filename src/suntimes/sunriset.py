"""Closed-form solar ephemeris and rise/set solver (Paul Schlyter's sunriset algorithm).

All functions are pure: plain numbers in, plain numbers or frozen value types out.
Valid for calendar years 1801-2099. Angles are in degrees, times in hours UT.

Sign conventions:
    * Eastern longitude positive, western longitude negative.
    * Northern latitude positive, southern latitude negative.
"""

import math

from suntimes.models import (
    ASTRONOMICAL_TWILIGHT,
    CIVIL_TWILIGHT,
    NAUTICAL_TWILIGHT,
    RISE_SET,
    CrossingResult,
    CrossingStatus,
    HorizonSpec,
    SolarEphemeris,
)

RAD_DEG = 180.0 / math.pi
DEG_RAD = math.pi / 180.0
INV360 = 1.0 / 360.0

# Sun's apparent radius at 1 AU, degrees
SUN_RADIUS_1AU = 0.2666


def sind(x: float) -> float:
    return math.sin(x * DEG_RAD)


def cosd(x: float) -> float:
    return math.cos(x * DEG_RAD)


def acosd(x: float) -> float:
    return RAD_DEG * math.acos(x)


def atan2d(y: float, x: float) -> float:
    return RAD_DEG * math.atan2(y, x)


def revolution(x: float) -> float:
    """Reduce angle to within [0, 360) degrees."""
    return x - 360.0 * math.floor(x * INV360)


def rev180(x: float) -> float:
    """Reduce angle to within [-180, 180) degrees."""
    return x - 360.0 * math.floor(x * INV360 + 0.5)


def days_since_2000_jan0(year: int, month: int, day: int) -> int:
    """Days elapsed since 2000 Jan 0.0 (1999 Dec 31, 0h UT). Negative before."""
    return (
        367 * year
        - (7 * (year + (month + 9) // 12)) // 4
        + (275 * month) // 9
        + day
        - 730530
    )


def local_noon_day(year: int, month: int, day: int, longitude: float) -> float:
    """Fractional day number of 12h local mean solar time."""
    return days_since_2000_jan0(year, month, day) + 0.5 - longitude / 360.0


def obliquity(d: float) -> float:
    """Obliquity of the ecliptic (inclination of Earth's axis), degrees."""
    return 23.4393 - 3.563e-7 * d


def sun_position(d: float) -> tuple[float, float]:
    """Sun's ecliptic longitude and distance at day number d.

    The ecliptic latitude is always very near 0 and is not computed. Kepler's
    equation gets a single first-order correction, not an iterative solution.

    Returns:
        (true longitude in degrees [0, 360), distance in AU).
    """
    # Mean anomaly, longitude of perihelion, eccentricity
    M = revolution(356.0470 + 0.9856002585 * d)
    w = 282.9404 + 4.70935e-5 * d
    e = 0.016709 - 1.151e-9 * d

    E = M + e * RAD_DEG * sind(M) * (1.0 + e * cosd(M))
    x = cosd(E) - e
    y = math.sqrt(1.0 - e * e) * sind(E)
    r = math.sqrt(x * x + y * y)
    v = atan2d(y, x)
    lon = v + w
    if lon >= 360.0:
        lon -= 360.0
    return lon, r


def equatorial(d: float, lon: float, r: float) -> tuple[float, float]:
    """Right ascension and declination (degrees) of ecliptic longitude ``lon`` at distance ``r``."""
    # Ecliptic rectangular coordinates, z = 0
    x = r * cosd(lon)
    y = r * sind(lon)

    # Rotate about the x axis into the equatorial frame
    obl_ecl = obliquity(d)
    z = y * sind(obl_ecl)
    y = y * cosd(obl_ecl)

    ra = atan2d(y, x)
    dec = atan2d(z, math.sqrt(x * x + y * y))
    return ra, dec


def sun_ra_dec(d: float) -> tuple[float, float, float]:
    """Sun's right ascension, declination (degrees) and distance (AU) at day number d."""
    lon, r = sun_position(d)
    ra, dec = equatorial(d, lon, r)
    return ra, dec, r


def gmst0(d: float) -> float:
    """Greenwich Mean Sidereal Time "at 0h UT" of the current moment, degrees.

    Defined as GMST0 = GMST - UT, so sidereal time at any hour is simply
    GMST0 + UT (in degrees, 1 h = 15 deg). This equals the Sun's mean
    longitude plus 180 degrees, ignoring aberration.
    """
    return revolution((180.0 + 356.0470 + 282.9404) + (0.9856002585 + 4.70935e-5) * d)


def solar_ephemeris(d: float) -> SolarEphemeris:
    """Everything the solvers need about the Sun at day number d."""
    lon, r = sun_position(d)
    ra, dec = equatorial(d, lon, r)
    return SolarEphemeris(
        days_since_epoch=d,
        ecliptic_longitude=lon,
        distance_au=r,
        right_ascension=ra,
        declination=dec,
        apparent_radius=SUN_RADIUS_1AU / r,
    )


def _normalize_longitude(longitude: float) -> float:
    # L and L + 360k share one day number
    return rev180(longitude)


def solve_crossing(
    year: int,
    month: int,
    day: int,
    latitude: float,
    longitude: float,
    altitude: float = RISE_SET.altitude,
    limb_correction: bool = RISE_SET.limb_correction,
) -> CrossingResult:
    """Times the Sun crosses ``altitude`` on a calendar date, in hours UT.

    Both times are relative to 00:00 UT of the given date and may fall
    outside 0..24. The longitude is critical here.

    Args:
        year, month, day: Calendar date, 1801-2099 only.
        latitude: Degrees, north positive.
        longitude: Degrees, east positive.
        altitude: Altitude the Sun should cross. -35/60 for rise/set, -6 for
            civil, -12 for nautical and -18 for astronomical twilight.
        limb_correction: Use the Sun's upper limb instead of its centre.
            True for rise/set, False for twilight.

    Returns:
        CrossingResult. SUN_ALWAYS_ABOVE returns transit -12 h / +12 h,
        SUN_ALWAYS_BELOW returns the transit time for both fields.
    """
    longitude = _normalize_longitude(longitude)
    d = local_noon_day(year, month, day, longitude)

    sid_time = revolution(gmst0(d) + 180.0 + longitude)
    eph = solar_ephemeris(d)
    t_south = 12.0 - rev180(sid_time - eph.right_ascension) / 15.0

    if limb_correction:
        altitude -= eph.apparent_radius

    cost = (sind(altitude) - sind(latitude) * sind(eph.declination)) / (
        cosd(latitude) * cosd(eph.declination)
    )
    if cost >= 1.0:
        status = CrossingStatus.SUN_ALWAYS_BELOW
        t = 0.0
    elif cost <= -1.0:
        status = CrossingStatus.SUN_ALWAYS_ABOVE
        t = 12.0
    else:
        status = CrossingStatus.NORMAL
        t = acosd(cost) / 15.0

    return CrossingResult(
        rise_hour_ut=t_south - t,
        set_hour_ut=t_south + t,
        status=status,
        transit_hour_ut=t_south,
    )


def solve_day_length(
    year: int,
    month: int,
    day: int,
    latitude: float,
    longitude: float,
    altitude: float = RISE_SET.altitude,
    limb_correction: bool = RISE_SET.limb_correction,
) -> float:
    """Hours the Sun spends above ``altitude`` on a calendar date (0..24).

    The longitude is not critical here; the latitude is.
    """
    longitude = _normalize_longitude(longitude)
    d = local_noon_day(year, month, day, longitude)

    eph = solar_ephemeris(d)
    sin_s_decl = sind(obliquity(d)) * sind(eph.ecliptic_longitude)
    cos_s_decl = math.sqrt(1.0 - sin_s_decl * sin_s_decl)

    if limb_correction:
        altitude -= eph.apparent_radius

    cost = (sind(altitude) - sind(latitude) * sin_s_decl) / (cosd(latitude) * cos_s_decl)
    if cost >= 1.0:
        return 0.0
    if cost <= -1.0:
        return 24.0
    return (2.0 / 15.0) * acosd(cost)


def _crossing_for(
    horizon: HorizonSpec, year: int, month: int, day: int, latitude: float, longitude: float
) -> CrossingResult:
    return solve_crossing(
        year, month, day, latitude, longitude, horizon.altitude, horizon.limb_correction
    )


def _day_length_for(
    horizon: HorizonSpec, year: int, month: int, day: int, latitude: float, longitude: float
) -> float:
    return solve_day_length(
        year, month, day, latitude, longitude, horizon.altitude, horizon.limb_correction
    )


def sun_rise_set(year: int, month: int, day: int, latitude: float, longitude: float) -> CrossingResult:
    """Sunrise/sunset: upper limb 35 arc minutes below the horizon."""
    return _crossing_for(RISE_SET, year, month, day, latitude, longitude)


def civil_twilight(year: int, month: int, day: int, latitude: float, longitude: float) -> CrossingResult:
    """Start/end of civil twilight: centre 6 degrees below the horizon."""
    return _crossing_for(CIVIL_TWILIGHT, year, month, day, latitude, longitude)


def nautical_twilight(year: int, month: int, day: int, latitude: float, longitude: float) -> CrossingResult:
    """Start/end of nautical twilight: centre 12 degrees below the horizon."""
    return _crossing_for(NAUTICAL_TWILIGHT, year, month, day, latitude, longitude)


def astronomical_twilight(
    year: int, month: int, day: int, latitude: float, longitude: float
) -> CrossingResult:
    """Start/end of astronomical twilight: centre 18 degrees below the horizon."""
    return _crossing_for(ASTRONOMICAL_TWILIGHT, year, month, day, latitude, longitude)


def day_length(year: int, month: int, day: int, latitude: float, longitude: float) -> float:
    return _day_length_for(RISE_SET, year, month, day, latitude, longitude)


def day_civil_twilight_length(
    year: int, month: int, day: int, latitude: float, longitude: float
) -> float:
    return _day_length_for(CIVIL_TWILIGHT, year, month, day, latitude, longitude)


def day_nautical_twilight_length(
    year: int, month: int, day: int, latitude: float, longitude: float
) -> float:
    return _day_length_for(NAUTICAL_TWILIGHT, year, month, day, latitude, longitude)


def day_astronomical_twilight_length(
    year: int, month: int, day: int, latitude: float, longitude: float
) -> float:
    return _day_length_for(ASTRONOMICAL_TWILIGHT, year, month, day, latitude, longitude)
