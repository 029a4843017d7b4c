"""Tests for the closed-form solar ephemeris and rise/set solver."""

import math

import pytest

from suntimes import sunriset
from suntimes.models import (
    ASTRONOMICAL_TWILIGHT,
    CIVIL_TWILIGHT,
    NAUTICAL_TWILIGHT,
    RISE_SET,
    CrossingStatus,
    SolarEphemeris,
)

SF_LAT, SF_LNG = 37.773972, -122.431297


class TestAngleReduction:
    @pytest.mark.parametrize("x", [-1000.5, -360.0, -0.25, 0.0, 45.0, 359.999, 360.0, 721.3, 1e6])
    def test_revolution_range(self, x):
        r = sunriset.revolution(x)
        assert 0.0 <= r < 360.0

    @pytest.mark.parametrize("x", [-1000.5, -180.0, -0.25, 0.0, 179.9, 180.0, 540.0, 1e6])
    def test_rev180_range(self, x):
        r = sunriset.rev180(x)
        assert -180.0 <= r < 180.0

    @pytest.mark.parametrize("x", [-725.75, -12.0, 0.0, 33.3, 359.0, 1234.5])
    def test_idempotent(self, x):
        once = sunriset.revolution(x)
        assert sunriset.revolution(once) == once
        once180 = sunriset.rev180(x)
        assert sunriset.rev180(once180) == once180

    @pytest.mark.parametrize("k", [-3, -1, 1, 2, 10])
    def test_revolution_invariant_under_full_turns(self, k):
        x = 123.456
        assert sunriset.revolution(x + 360.0 * k) == pytest.approx(sunriset.revolution(x), abs=1e-9)

    def test_known_values(self):
        assert sunriset.revolution(-90.0) == 270.0
        assert sunriset.revolution(450.0) == 90.0
        assert sunriset.rev180(270.0) == -90.0
        assert sunriset.rev180(-190.0) == 170.0


class TestDayNumber:
    def test_epoch(self):
        assert sunriset.days_since_2000_jan0(1999, 12, 31) == 0
        assert sunriset.days_since_2000_jan0(2000, 1, 1) == 1

    def test_leap_february(self):
        # Jan (31) + Feb (29) precede 2000 Mar 1
        assert sunriset.days_since_2000_jan0(2000, 3, 1) == 61

    def test_summer_solstice_2024(self):
        assert sunriset.days_since_2000_jan0(2024, 6, 20) == 8938

    def test_before_epoch_is_negative(self):
        assert sunriset.days_since_2000_jan0(1999, 12, 1) == -30

    def test_consecutive_days(self):
        a = sunriset.days_since_2000_jan0(2023, 12, 31)
        b = sunriset.days_since_2000_jan0(2024, 1, 1)
        assert b - a == 1

    def test_local_noon_day(self):
        d = sunriset.local_noon_day(2000, 1, 1, 90.0)
        assert d == pytest.approx(1.25)


class TestSolarPosition:
    def test_perihelion_distance(self):
        d = sunriset.local_noon_day(2024, 1, 3, 0.0)
        _, r = sunriset.sun_position(d)
        assert r == pytest.approx(0.9833, abs=1e-3)

    def test_aphelion_distance(self):
        d = sunriset.local_noon_day(2024, 7, 5, 0.0)
        _, r = sunriset.sun_position(d)
        assert r == pytest.approx(1.0167, abs=1e-3)

    def test_longitude_at_june_solstice(self):
        d = sunriset.local_noon_day(2024, 6, 20, 0.0)
        lon, _ = sunriset.sun_position(d)
        assert abs(lon - 90.0) < 1.0

    def test_longitude_range(self):
        for day in range(1, 366, 7):
            lon, _ = sunriset.sun_position(float(day))
            assert 0.0 <= lon < 360.0

    def test_declination_at_solstice(self):
        d = sunriset.local_noon_day(2024, 6, 20, 0.0)
        _, dec, _ = sunriset.sun_ra_dec(d)
        assert dec == pytest.approx(23.44, abs=0.1)

    def test_declination_at_equinox(self):
        d = sunriset.local_noon_day(2024, 3, 20, 0.0)
        _, dec, _ = sunriset.sun_ra_dec(d)
        assert abs(dec) < 0.5

    def test_ra_dec_distance_matches_position(self):
        d = 8938.5
        _, r = sunriset.sun_position(d)
        _, _, r2 = sunriset.sun_ra_dec(d)
        assert r2 == r

    def test_ephemeris_record(self):
        eph = sunriset.solar_ephemeris(8938.5)
        assert eph.days_since_epoch == 8938.5
        assert eph.apparent_radius == pytest.approx(sunriset.SUN_RADIUS_1AU / eph.distance_au)
        assert eph.apparent_radius == pytest.approx(0.2622, abs=1e-3)

    def test_ephemeris_matches_ra_dec(self):
        eph = sunriset.solar_ephemeris(8938.5)
        lon, r = sunriset.sun_position(8938.5)
        ra, dec, _ = sunriset.sun_ra_dec(8938.5)
        assert (eph.ecliptic_longitude, eph.distance_au) == (lon, r)
        assert (eph.right_ascension, eph.declination) == (ra, dec)

    def test_ephemeris_computes_position_once(self, monkeypatch):
        calls = []
        real = sunriset.sun_position

        def counting(d):
            calls.append(d)
            return real(d)

        monkeypatch.setattr(sunriset, "sun_position", counting)
        sunriset.solar_ephemeris(8938.5)
        assert calls == [8938.5]

    def test_gmst0_epoch(self):
        assert sunriset.gmst0(0.0) == pytest.approx(98.9874)

    def test_gmst0_range(self):
        for d in (-5000.0, -1.0, 0.0, 8938.5, 36500.0):
            assert 0.0 <= sunriset.gmst0(d) < 360.0


class TestSolveCrossing:
    def test_san_francisco_summer_solstice(self):
        # 05:48:01.35 PDT / 20:34:59.96 PDT
        result = sunriset.sun_rise_set(2024, 6, 20, SF_LAT, SF_LNG)
        assert result.status is CrossingStatus.NORMAL
        assert result.rise_hour_ut == pytest.approx(12 + 48 / 60 + 1.35 / 3600, abs=0.01 / 3600)
        assert result.set_hour_ut == pytest.approx(24 + 3 + 34 / 60 + 59.96 / 3600, abs=0.01 / 3600)

    @pytest.mark.parametrize("lat", [-60.0, -33.9, 0.0, 12.5, 45.0, 60.0])
    @pytest.mark.parametrize("lng", [-170.0, -75.0, 0.0, 2.35, 139.7])
    @pytest.mark.parametrize("date", [(2024, 1, 15), (2024, 6, 21), (1999, 9, 23), (2050, 12, 21)])
    def test_moderate_latitudes_have_events(self, lat, lng, date):
        result = sunriset.solve_crossing(*date, lat, lng)
        assert result.status is CrossingStatus.NORMAL
        assert result.rise_hour_ut < result.transit_hour_ut < result.set_hour_ut

    def test_transit_near_local_noon(self):
        result = sunriset.solve_crossing(2024, 6, 20, 51.5, 0.0)
        # Equation of time stays within about 17 minutes
        assert abs(result.transit_hour_ut - 12.0) < 0.3

    def test_north_pole_summer_always_above(self):
        result = sunriset.solve_crossing(2024, 6, 20, 90.0, 0.0)
        assert result.status is CrossingStatus.SUN_ALWAYS_ABOVE
        assert not result.has_events

    def test_north_pole_winter_always_below(self):
        result = sunriset.solve_crossing(2024, 12, 21, 90.0, 0.0)
        assert result.status is CrossingStatus.SUN_ALWAYS_BELOW

    def test_south_pole_june_always_below(self):
        result = sunriset.solve_crossing(2024, 6, 20, -90.0, 0.0)
        assert result.status is CrossingStatus.SUN_ALWAYS_BELOW

    def test_south_pole_december_always_above(self):
        result = sunriset.solve_crossing(2024, 12, 21, -90.0, 0.0)
        assert result.status is CrossingStatus.SUN_ALWAYS_ABOVE

    def test_always_above_spans_transit_plus_minus_twelve(self):
        result = sunriset.solve_crossing(2024, 6, 20, 90.0, 0.0)
        assert result.rise_hour_ut == pytest.approx(result.transit_hour_ut - 12.0)
        assert result.set_hour_ut == pytest.approx(result.transit_hour_ut + 12.0)
        assert result.set_hour_ut - result.rise_hour_ut == pytest.approx(24.0)

    def test_always_below_collapses_to_transit(self):
        result = sunriset.solve_crossing(2024, 12, 21, 90.0, 0.0)
        assert result.rise_hour_ut == result.transit_hour_ut
        assert result.set_hour_ut == result.transit_hour_ut

    def test_arctic_summer_night_has_no_astronomical_twilight(self):
        result = sunriset.astronomical_twilight(2024, 6, 21, 60.0, 25.0)
        assert result.status is CrossingStatus.SUN_ALWAYS_ABOVE

    @pytest.mark.parametrize("lng", [SF_LNG, 179.5, 180.0, -180.0])
    def test_longitude_full_turn_invariance(self, lng):
        a = sunriset.solve_crossing(2024, 6, 20, SF_LAT, lng)
        b = sunriset.solve_crossing(2024, 6, 20, SF_LAT, lng + 360.0)
        c = sunriset.solve_crossing(2024, 6, 20, SF_LAT, lng - 720.0)
        for other in (b, c):
            assert other.status is a.status
            assert other.rise_hour_ut == pytest.approx(a.rise_hour_ut, abs=1e-9)
            assert other.set_hour_ut == pytest.approx(a.set_hour_ut, abs=1e-9)

    def test_antimeridian_sides_agree(self):
        east = sunriset.solve_crossing(2024, 6, 20, -17.7, 180.0)
        west = sunriset.solve_crossing(2024, 6, 20, -17.7, -180.0)
        assert east == west
        assert sunriset.solve_day_length(2024, 6, 20, -17.7, 180.0) == sunriset.solve_day_length(
            2024, 6, 20, -17.7, -180.0
        )

    def test_in_range_longitude_unchanged(self):
        for lng in (SF_LNG, -179.999, 0.0, 2.35, 179.999):
            assert sunriset.rev180(lng) == lng

    def test_uses_ephemeris_record(self, monkeypatch):
        seen = []
        real = sunriset.solar_ephemeris

        def spy(d):
            seen.append(d)
            return real(d)

        monkeypatch.setattr(sunriset, "solar_ephemeris", spy)
        sunriset.solve_crossing(2024, 6, 20, SF_LAT, SF_LNG)
        sunriset.solve_day_length(2024, 6, 20, SF_LAT, SF_LNG)
        d = sunriset.local_noon_day(2024, 6, 20, SF_LNG)
        assert seen == [d, d]

    def test_limb_correction_lengthens_day(self):
        with_limb = sunriset.solve_crossing(2024, 3, 1, 40.0, 0.0, RISE_SET.altitude, True)
        center = sunriset.solve_crossing(2024, 3, 1, 40.0, 0.0, RISE_SET.altitude, False)
        assert with_limb.rise_hour_ut < center.rise_hour_ut
        assert with_limb.set_hour_ut > center.set_hour_ut

    def test_presets_match_explicit_horizons(self):
        args = (2024, 3, 1, 48.85, 2.35)
        for fn, horizon in (
            (sunriset.sun_rise_set, RISE_SET),
            (sunriset.civil_twilight, CIVIL_TWILIGHT),
            (sunriset.nautical_twilight, NAUTICAL_TWILIGHT),
            (sunriset.astronomical_twilight, ASTRONOMICAL_TWILIGHT),
        ):
            assert fn(*args) == sunriset.solve_crossing(
                *args, horizon.altitude, horizon.limb_correction
            )

    def test_twilight_brackets_sunrise(self):
        args = (2024, 3, 1, 48.85, 2.35)
        rs = sunriset.sun_rise_set(*args)
        civil = sunriset.civil_twilight(*args)
        nautical = sunriset.nautical_twilight(*args)
        astro = sunriset.astronomical_twilight(*args)
        assert astro.rise_hour_ut < nautical.rise_hour_ut < civil.rise_hour_ut < rs.rise_hour_ut
        assert rs.set_hour_ut < civil.set_hour_ut < nautical.set_hour_ut < astro.set_hour_ut


class TestSolveDayLength:
    def test_matches_crossing_arc(self):
        for lat in (-45.0, 0.0, 37.77, 59.0):
            crossing = sunriset.solve_crossing(2024, 6, 20, lat, SF_LNG)
            length = sunriset.solve_day_length(2024, 6, 20, lat, SF_LNG)
            assert length == pytest.approx(crossing.set_hour_ut - crossing.rise_hour_ut, abs=1e-6)

    def test_polar_day_is_full_day(self):
        # Always-above is 24 h here and transit ±12 h in the crossing solver
        assert sunriset.solve_day_length(2024, 6, 20, 90.0, 0.0) == 24.0
        crossing = sunriset.solve_crossing(2024, 6, 20, 90.0, 0.0)
        assert crossing.set_hour_ut - crossing.rise_hour_ut == pytest.approx(24.0)

    def test_polar_night_is_zero(self):
        assert sunriset.solve_day_length(2024, 6, 20, -90.0, 0.0) == 0.0
        assert sunriset.solve_day_length(2024, 12, 21, 90.0, 0.0) == 0.0

    def test_range(self):
        for lat in range(-90, 91, 15):
            for month in (1, 4, 7, 10):
                hours = sunriset.solve_day_length(2024, month, 15, float(lat), 0.0)
                assert 0.0 <= hours <= 24.0

    def test_equator_close_to_twelve_hours(self):
        hours = sunriset.day_length(2024, 3, 20, 0.0, 0.0)
        assert hours == pytest.approx(12.1, abs=0.1)

    @pytest.mark.parametrize("lat", [-50.0, -20.0, 0.0, 37.77, 48.85])
    def test_twilight_ordering(self, lat):
        args = (2024, 3, 1, lat, 10.0)
        rise_set = sunriset.day_length(*args)
        civil = sunriset.day_civil_twilight_length(*args)
        nautical = sunriset.day_nautical_twilight_length(*args)
        astro = sunriset.day_astronomical_twilight_length(*args)
        assert rise_set < civil < nautical < astro

    def test_longitude_not_critical(self):
        a = sunriset.solve_day_length(2024, 6, 20, 45.0, 0.0)
        b = sunriset.solve_day_length(2024, 6, 20, 45.0, 179.0)
        # Half a day of declination change moves day length by seconds
        assert a == pytest.approx(b, abs=2.0 / 60.0)

    def test_arc_never_receives_out_of_domain_cosine(self):
        for lat in (89.0, 89.9, 90.0, -89.9, -90.0):
            for month in range(1, 13):
                hours = sunriset.solve_day_length(2024, month, 1, lat, 0.0)
                assert not math.isnan(hours)


def _equinox_sun(d):
    return SolarEphemeris(
        days_since_epoch=d,
        ecliptic_longitude=0.0,
        distance_au=1.0,
        right_ascension=0.0,
        declination=0.0,
        apparent_radius=sunriset.SUN_RADIUS_1AU,
    )


class TestTangentHorizon:
    """Sun on the equator seen from the equator: the zenith and nadir give cost of exactly +1 and -1."""

    @pytest.fixture(autouse=True)
    def equinox_sun(self, monkeypatch):
        monkeypatch.setattr(sunriset, "solar_ephemeris", _equinox_sun)

    def test_zenith_altitude_is_always_below(self):
        result = sunriset.solve_crossing(2024, 3, 20, 0.0, 0.0, 90.0, False)
        assert result.status is CrossingStatus.SUN_ALWAYS_BELOW
        assert result.rise_hour_ut == result.set_hour_ut == result.transit_hour_ut

    def test_nadir_altitude_is_always_above(self):
        result = sunriset.solve_crossing(2024, 3, 20, 0.0, 0.0, -90.0, False)
        assert result.status is CrossingStatus.SUN_ALWAYS_ABOVE
        assert result.set_hour_ut - result.rise_hour_ut == pytest.approx(24.0)

    def test_day_length_bounds(self):
        assert sunriset.solve_day_length(2024, 3, 20, 0.0, 0.0, 90.0, False) == 0.0
        assert sunriset.solve_day_length(2024, 3, 20, 0.0, 0.0, -90.0, False) == 24.0
