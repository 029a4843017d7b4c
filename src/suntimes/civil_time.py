"""Civil-time boundary: zoned instants to calendar fields and UT hour offsets back to instants.

The solver only ever sees plain (year, month, day) integers and reasons in UT.
This module is the one place that touches time zones.
"""

from datetime import date, datetime, timedelta, tzinfo

from pytz import timezone, utc

from suntimes.models import CivilDate


def resolve_zone(tz: str | tzinfo) -> tzinfo:
    """Return a tzinfo for an IANA name or pass a tzinfo through.

    Raises:
        pytz.UnknownTimeZoneError: If ``tz`` is not a known zone name.
    """
    if isinstance(tz, str):
        return timezone(tz)
    return tz


def localize(dt: datetime, tz: str | tzinfo) -> datetime:
    """Attach ``tz`` to ``dt``, or convert ``dt`` into ``tz`` if it is already aware.

    Naive datetimes are wall-clock time in ``tz``.
    """
    zone = resolve_zone(tz)
    if dt.tzinfo is None:
        if hasattr(zone, "localize"):
            return zone.localize(dt)
        return dt.replace(tzinfo=zone)
    return dt.astimezone(zone)


def civil_date(instant: datetime | date, tz: str | tzinfo) -> CivilDate:
    """Calendar fields of ``instant`` as seen in ``tz`` ("today" where the observer is)."""
    if not isinstance(instant, datetime):
        return CivilDate(year=instant.year, month=instant.month, day=instant.day)
    local = localize(instant, tz)
    return CivilDate(year=local.year, month=local.month, day=local.day)


def ut_instant(year: int, month: int, day: int, hours_ut: float) -> datetime:
    """UTC instant ``hours_ut`` hours after 00:00 UT of the calendar date.

    ``hours_ut`` may be negative or exceed 24; the result then lands on the
    previous or next UTC day.
    """
    midnight = utc.localize(datetime(year, month, day))
    return midnight + timedelta(seconds=hours_ut * 3600.0)
