"""Tests for the pipeline stages and the orchestrator."""

import pytest

from solpos.compute import (
    air_mass,
    calculate,
    extraterrestrial,
    prime,
    refraction,
    renew_date,
    solar_azimuth,
    sunrise_sunset,
    sunset_hour_angle,
    tilt,
    true_solar_time,
)
from solpos.errors import NoFunctionError, ValidationError
from solpos.functions import ALL, DEFAULT, SPFunction
from solpos.models import (
    AMASS_UNDEFINED,
    NO_SUNRISE_SUNSET,
    SolposRequest,
    SolposResult,
    TrigCache,
)

F = SPFunction


def _request(**kwargs) -> SolposRequest:
    base = dict(
        year=1999, month=7, day=22, daynum=-999, hour=9, minute=45, second=37,
        latitude=33.65, longitude=-84.43, timezone=-5.0, press=1006.0, temp=27.0,
        tilt=33.65, aspect=135.0,
    )
    base.update(kwargs)
    return SolposRequest(**base)


def _run(req: SolposRequest) -> SolposResult:
    return calculate(req, SolposResult(), TrigCache())


class TestStages:
    """Edge-case policies of individual stages."""

    def test_refraction_is_zero_near_zenith(self):
        res = SolposResult(elevetr=88.0)
        refraction(SolposRequest(), res, TrigCache())
        assert res.elevref == 88.0
        assert res.zenref == pytest.approx(2.0)

    def test_refracted_elevation_floor(self):
        res = SolposResult(elevetr=-20.0)
        refraction(SolposRequest(), res, TrigCache())
        assert res.elevref == -9.0
        assert res.zenref == 99.0
        assert res.coszen < 0.0

    def test_refraction_lifts_sun_at_horizon(self):
        res = SolposResult(elevetr=0.0)
        refraction(SolposRequest(press=1013.0, temp=10.0), res, TrigCache())
        # ~34 arc minutes at standard conditions
        assert res.elevref == pytest.approx(1735.0 / 3600.0, rel=1e-9)

    def test_air_mass_undefined_below_93_degrees(self):
        res = SolposResult(zenref=95.0)
        air_mass(SolposRequest(), res, TrigCache())
        assert res.amass == AMASS_UNDEFINED
        assert res.ampress == AMASS_UNDEFINED
        assert not res.has_airmass

    def test_air_mass_at_zenith_and_pressure_correction(self):
        res = SolposResult(zenref=0.0)
        air_mass(SolposRequest(press=506.5), res, TrigCache())
        assert res.amass == pytest.approx(1.0, abs=1e-3)
        assert res.ampress == pytest.approx(res.amass / 2.0)

    def test_prime_is_inverse_of_unprime(self):
        res = SolposResult(amass=1.5)
        prime(SolposRequest(), res, TrigCache())
        assert res.prime * res.unprime == pytest.approx(1.0)

    def test_etr_zero_when_sun_below_horizon(self):
        res = SolposResult(coszen=-0.2, erv=1.0, etr=5.0, etrn=5.0)
        extraterrestrial(SolposRequest(), res, TrigCache())
        assert res.etr == 0.0
        assert res.etrn == 0.0

    @pytest.mark.parametrize("ssha,sretr,ssetr", [
        (0.5, NO_SUNRISE_SUNSET, -NO_SUNRISE_SUNSET),
        (1.0, NO_SUNRISE_SUNSET, -NO_SUNRISE_SUNSET),
        (179.0, -NO_SUNRISE_SUNSET, NO_SUNRISE_SUNSET),
        (180.0, -NO_SUNRISE_SUNSET, NO_SUNRISE_SUNSET),
    ])
    def test_sunrise_sunset_sentinels(self, ssha, sretr, ssetr):
        res = SolposResult(ssha=ssha, tstfix=-7.0)
        sunrise_sunset(SolposRequest(), res, TrigCache())
        assert (res.sretr, res.ssetr) == (sretr, ssetr)
        assert not res.has_sunrise_sunset

    def test_sunrise_sunset_symmetric_about_solar_noon(self):
        res = SolposResult(ssha=90.0, tstfix=-10.0)
        sunrise_sunset(SolposRequest(), res, TrigCache())
        assert res.sretr == 370.0
        assert res.ssetr == 1090.0

    def test_azimuth_defaults_to_south_at_the_pole(self):
        req = SolposRequest(latitude=90.0, function=DEFAULT)
        res = SolposResult(elevetr=23.0, declin=23.0, hrang=-60.0)
        solar_azimuth(req, res, TrigCache())
        assert res.azim == 180.0

    @pytest.mark.parametrize("hrang,expected", [(-45.0, 90.0), (45.0, 270.0)])
    def test_azimuth_mirrors_in_the_afternoon(self, hrang, expected):
        req = SolposRequest(latitude=0.0, function=DEFAULT)
        res = SolposResult(elevetr=45.0, declin=0.0, hrang=hrang)
        solar_azimuth(req, res, TrigCache())
        assert res.azim == pytest.approx(expected)

    @pytest.mark.parametrize("hour,hrang,tstfix", [(23, -170.0, 100.0), (0, 170.0, -40.0)])
    def test_true_solar_time_correction_folds_into_half_day(self, hour, hrang, tstfix):
        req = SolposRequest(hour=hour, minute=0, second=0, interval=0,
                            timezone=0.0, longitude=0.0)
        res = SolposResult(hrang=hrang)
        true_solar_time(req, res, TrigCache())
        assert res.tst == pytest.approx((180.0 + hrang) * 4.0)
        assert res.tstfix == pytest.approx(tstfix)
        assert -720.0 <= res.tstfix <= 720.0

    def test_tilted_etr_zero_when_panel_faces_away(self):
        # vertical panel facing north, sun due south and well up
        req = SolposRequest(tilt=90.0, aspect=0.0)
        res = SolposResult(azim=180.0, zenref=60.0, coszen=0.5, etrn=1300.0, etrtilt=5.0)
        tilt(req, res, TrigCache())
        assert res.cosinc < 0.0
        assert res.etrn > 0.0
        assert res.etrtilt == 0.0

    @pytest.mark.parametrize("declin,latitude,expected", [
        (10.0, 90.0, 180.0), (-10.0, -90.0, 180.0), (-10.0, 90.0, 0.0), (10.0, -90.0, 0.0),
    ])
    def test_sunset_hour_angle_at_the_poles(self, declin, latitude, expected):
        req = SolposRequest(latitude=latitude, function=DEFAULT)
        res = SolposResult(declin=declin)
        sunset_hour_angle(req, res, TrigCache())
        assert res.ssha == expected


class TestOrchestrator:
    """Stage selection, ordering, and error handling."""

    def test_zero_function_mask(self):
        with pytest.raises(NoFunctionError, match="No function"):
            _run(_request(function=SPFunction(0)))

    def test_validation_runs_before_anything(self):
        res = SolposResult()
        with pytest.raises(ValidationError):
            calculate(_request(latitude=91.0), res, TrigCache())
        assert res == SolposResult()

    def test_month_day_mode_derives_daynum(self):
        req = _request()
        _run(req)
        assert req.daynum == 203

    def test_day_of_year_mode_derives_month_and_day(self):
        req = _request(function=ALL, month=-99, day=-99, daynum=60, year=2000)
        _run(req)
        assert (req.month, req.day) == (2, 29)

    def test_only_selected_stages_run(self):
        res = _run(_request(function=F.GEOM))
        assert res.julday != 0.0
        assert res.zenetr == 0.0
        assert res.azim == 0.0
        assert res.etr == 0.0

    def test_airmass_only_reads_seeded_zenith(self):
        req = SolposRequest(year=1999, daynum=203, function=F.AMASS | F.DOY)
        res = SolposResult(zenref=60.0)
        calculate(req, res, TrigCache())
        assert res.amass == pytest.approx(1.99, abs=0.01)
        assert res.julday == 0.0

    def test_trig_cache_reset_and_filled_once_per_call(self):
        cache = TrigCache(sd=0.5, cd=0.5)
        res = SolposResult()
        calculate(_request(), res, cache)
        assert cache.filled
        assert cache.sd == pytest.approx(0.345, abs=0.01)  # sin(declin ~ 20.2 deg)
        assert cache.cl == pytest.approx(0.8324, abs=1e-3)

    def test_trig_cache_untouched_when_no_stage_reads_it(self):
        cache = TrigCache()
        calculate(_request(function=F.GEOM | F.TST), SolposResult(), cache)
        assert not cache.filled

    def test_repeated_calculation_is_bit_identical(self):
        req, res, cache = _request(), SolposResult(), TrigCache()
        first = calculate(req, res, cache).as_dict()
        second = calculate(req, res, cache).as_dict()
        assert first == second

    def test_polar_summer_has_no_sunrise_or_sunset(self):
        res = _run(_request(month=6, day=21, latitude=89.9, longitude=0.0, timezone=0.0))
        assert res.declin == pytest.approx(23.4, abs=0.1)
        assert res.ssha == 180.0
        assert res.sretr == -NO_SUNRISE_SUNSET
        assert res.ssetr == NO_SUNRISE_SUNSET
        assert res.is_polar_day

    def test_polar_winter_night(self):
        res = _run(_request(month=12, day=21, hour=12, latitude=89.9, longitude=0.0,
                            timezone=0.0))
        assert res.ssha == 0.0
        assert res.is_polar_night
        assert res.amass == AMASS_UNDEFINED
        assert res.etr == 0.0
        assert res.zenetr == 99.0

    def test_night_caps_zenith(self):
        res = _run(_request(hour=0, minute=30, second=0))
        assert res.zenetr == 99.0
        assert res.elevetr == -9.0
        assert res.etrtilt == 0.0


class TestRenewDate:
    """Calendar overflow is normalised in month/day mode."""

    def test_day_overflow_rolls_into_next_month(self):
        req = _request(month=6, day=31)
        renew_date(req)
        assert (req.month, req.day) == (7, 1)

    def test_hour_24_is_next_midnight(self):
        req = _request(month=12, day=31, hour=24, minute=0, second=0)
        renew_date(req)
        assert (req.year, req.month, req.day, req.hour) == (2000, 1, 1, 0)

    def test_out_of_range_fields_left_for_validation(self):
        req = _request(month=13)
        renew_date(req)
        assert req.month == 13
        with pytest.raises(ValidationError):
            _run(req)

    def test_day_of_year_mode_is_not_renewed(self):
        req = _request(function=ALL, month=6, day=31)
        renew_date(req)
        assert (req.month, req.day) == (6, 31)
