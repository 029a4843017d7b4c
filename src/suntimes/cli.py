"""CLI entry point for sun-time reports.

    uv run suntimes "Golden Gate Park, San Francisco" --date 2024-06-20
    uv run suntimes --lat 37.773972 --lng -122.431297 --tz America/Los_Angeles
"""

import argparse
import logging
import os
import sys
from dataclasses import replace
from datetime import datetime

import httpx
from dotenv import load_dotenv

load_dotenv()

from pytz import UnknownTimeZoneError  # noqa: E402

from suntimes.compute import (  # noqa: E402
    GeocodingError,
    compute_sun_times,
    geocode_address,
    observer_context,
)
from suntimes.i18n import t  # noqa: E402
from suntimes.models import SunTimes  # noqa: E402
from suntimes.providers.base import SunriseSunsetProvider  # noqa: E402
from suntimes.providers.schlyter import SchlyterProvider  # noqa: E402

logger = logging.getLogger(__name__)


def _make_provider(name: str) -> SunriseSunsetProvider:
    if name == "skyfield":
        from suntimes.providers.skyfield_almanac import SkyfieldProvider

        return SkyfieldProvider()
    return SchlyterProvider()


def _fmt_time(value: datetime | None, lang: str) -> str:
    if value is None:
        return t("no_event", lang)
    return value.strftime("%H:%M:%S %Z")


def _fmt_hours(hours: float) -> str:
    minutes = round(hours * 60)
    return f"{minutes // 60}h {minutes % 60:02d}m"


def format_report(sun_times: SunTimes, lang: str = "en") -> str:
    """Render SunTimes as aligned plain-text lines."""
    ctx = sun_times.context
    rows = [
        (t("label_place", lang), ctx.address_display),
        (t("label_date", lang), ctx.local_date.isoformat()),
        (t("label_timezone", lang), ctx.tz_name),
        (t("label_algorithm", lang), sun_times.algorithm),
        ("", ""),
    ]
    for key in (
        "astronomical_dawn",
        "nautical_dawn",
        "civil_dawn",
        "sunrise",
        "sunset",
        "civil_dusk",
        "nautical_dusk",
        "astronomical_dusk",
    ):
        rows.append((t(key, lang), _fmt_time(getattr(sun_times, key), lang)))
    rows.append(("", ""))
    for key in (
        "day_length",
        "civil_day_length",
        "nautical_day_length",
        "astronomical_day_length",
    ):
        rows.append((t(key, lang), _fmt_hours(getattr(sun_times, key))))

    width = max(len(label) for label, _ in rows)
    lines = [t("report_title", lang)]
    lines.extend(f"{label:<{width}}  {value}".rstrip() for label, value in rows)
    return "\n".join(lines)


def _iso_date(value: str) -> str:
    if not value:
        return value
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from None
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sunrise, sunset and twilight times for a place and date"
    )
    parser.add_argument("address", nargs="?", help="Address to geocode (skipped with --lat/--lng)")
    parser.add_argument(
        "--date", type=_iso_date, default="", help="Local date YYYY-MM-DD (default: today)"
    )
    parser.add_argument("--lat", type=float, help="Latitude, north positive")
    parser.add_argument("--lng", type=float, help="Longitude, east positive")
    parser.add_argument("--tz", help="IANA time zone (default: looked up from coordinates)")
    parser.add_argument(
        "--algorithm",
        choices=("schlyter", "skyfield"),
        default="schlyter",
        help="Rise/set algorithm (default: schlyter)",
    )
    parser.add_argument("--lang", choices=("en", "ko"), default="en", help="Output language")
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=False, help="Enable debug logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = "DEBUG" if args.verbose else os.environ.get("SUNTIMES_LOG_LEVEL", "WARNING")
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if (args.lat is None) != (args.lng is None):
        parser.error("--lat and --lng must be given together")
    if args.lat is None and not args.address:
        parser.error("an address or --lat/--lng is required")

    try:
        if args.lat is not None:
            context = observer_context(args.lat, args.lng, args.date, args.tz)
        else:
            context = geocode_address(args.address, args.date)
            if args.tz:
                override = observer_context(context.lat, context.lng, args.date, args.tz)
                context = replace(override, address_display=context.address_display)
        logger.debug("Computing %s sun times for %s", args.algorithm, context)
        sun_times = compute_sun_times(context, _make_provider(args.algorithm))
    except GeocodingError as e:
        print(t("error_address", args.lang).format(error=e), file=sys.stderr)
        return 1
    except UnknownTimeZoneError as e:
        print(t("error_timezone", args.lang).format(error=e), file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        print(t("error_network", args.lang).format(error=e), file=sys.stderr)
        return 1

    print(format_report(sun_times, args.lang))
    return 0


if __name__ == "__main__":
    sys.exit(main())
