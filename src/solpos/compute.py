"""Solar angle and irradiance pipeline, plus the orchestrator that runs it.

``calculate()`` is stateless: everything it reads and writes lives in the
request, result and trig cache passed in by the caller.
"""

import logging
import math
from collections.abc import Callable
from datetime import datetime, timedelta

from solpos.config import DEGRAD, RADDEG
from solpos.dates import day_of_month_to_day_of_year, day_of_year_to_day_of_month
from solpos.errors import NoFunctionError
from solpos.functions import SPFunction, has_flag
from solpos.geometry import compute_geometry
from solpos.models import (
    AMASS_UNDEFINED,
    ELEVREF_LIMIT,
    NO_SUNRISE_SUNSET,
    ZENETR_LIMIT,
    SolposRequest,
    SolposResult,
    TrigCache,
)
from solpos.trig import fill_trig_cache
from solpos.validate import validate_request

logger = logging.getLogger(__name__)

Stage = Callable[[SolposRequest, SolposResult, TrigCache], None]


def _trig(req: SolposRequest, res: SolposResult, cache: TrigCache) -> TrigCache:
    return fill_trig_cache(cache, res, req.latitude, req.function)


def geometry(req: SolposRequest, res: SolposResult, cache: TrigCache) -> None:
    compute_geometry(req, res)


def zenith_no_refraction(req: SolposRequest, res: SolposResult, cache: TrigCache) -> None:
    """ETR solar zenith angle (Iqbal 1983, p. 15)."""
    t = _trig(req, res, cache)
    cz = t.sd * t.sl + t.cd * t.cl * t.ch
    # roundoff
    cz = max(-1.0, min(1.0, cz))
    res.zenetr = min(math.acos(cz) * DEGRAD, ZENETR_LIMIT)
    res.elevetr = 90.0 - res.zenetr


def sunset_hour_angle(req: SolposRequest, res: SolposResult, cache: TrigCache) -> None:
    """Sunset hour angle (Iqbal 1983, p. 16)."""
    t = _trig(req, res, cache)
    cdcl = t.cd * t.cl
    if abs(cdcl) >= 0.001:
        cssha = -t.sl * t.sd / cdcl
        if cssha < -1.0:
            res.ssha = 180.0
        elif cssha > 1.0:
            res.ssha = 0.0
        else:
            res.ssha = DEGRAD * math.acos(cssha)
    elif (res.declin >= 0.0 and req.latitude > 0.0) or (
        res.declin < 0.0 and req.latitude < 0.0
    ):
        res.ssha = 180.0
    else:
        res.ssha = 0.0


def shadowband(req: SolposRequest, res: SolposResult, cache: TrigCache) -> None:
    """Shadowband correction factor (Drummond 1956)."""
    t = _trig(req, res, cache)
    p = 0.6366198 * req.sbwid / req.sbrad * t.cd**3
    t1 = t.sl * t.sd * res.ssha * RADDEG
    t2 = t.cl * t.cd * math.sin(res.ssha * RADDEG)
    res.sbcf = req.sbsky + 1.0 / (1.0 - p * (t1 + t2))


def true_solar_time(req: SolposRequest, res: SolposResult, cache: TrigCache) -> None:
    """True solar time in minutes from midnight (Iqbal 1983, p. 13)."""
    res.tst = (180.0 + res.hrang) * 4.0
    # add back half of the interval
    res.tstfix = (
        res.tst
        - req.hour * 60.0
        - req.minute
        - req.second / 60.0
        + req.interval / 120.0
    )
    while res.tstfix > 720.0:
        res.tstfix -= 1440.0
    while res.tstfix < -720.0:
        res.tstfix += 1440.0
    res.eqntim = res.tstfix + 60.0 * req.timezone - 4.0 * req.longitude


def sunrise_sunset(req: SolposRequest, res: SolposResult, cache: TrigCache) -> None:
    """Sunrise and sunset, local minutes from midnight, without refraction."""
    if res.ssha <= 1.0:
        res.sretr = NO_SUNRISE_SUNSET
        res.ssetr = -NO_SUNRISE_SUNSET
    elif res.ssha >= 179.0:
        res.sretr = -NO_SUNRISE_SUNSET
        res.ssetr = NO_SUNRISE_SUNSET
    else:
        res.sretr = 720.0 - 4.0 * res.ssha - res.tstfix
        res.ssetr = 720.0 + 4.0 * res.ssha - res.tstfix


def solar_azimuth(req: SolposRequest, res: SolposResult, cache: TrigCache) -> None:
    """Solar azimuth, N=0 E=90 (Iqbal 1983, p. 15)."""
    t = _trig(req, res, cache)
    ce = math.cos(RADDEG * res.elevetr)
    se = math.sin(RADDEG * res.elevetr)
    res.azim = 180.0
    cecl = ce * t.cl
    if abs(cecl) >= 0.001:
        ca = (se * t.sl - t.sd) / cecl
        ca = max(-1.0, min(1.0, ca))
        res.azim = 180.0 - math.acos(ca) * DEGRAD
        if res.hrang > 0:
            res.azim = 360.0 - res.azim


def refraction(req: SolposRequest, res: SolposResult, cache: TrigCache) -> None:
    """Refraction correction (Zimmerman 1981, SAND81-0761)."""
    elev = res.elevetr
    if elev > 85.0:
        # near zenith the fit blows up; refraction is ~0
        refcor = 0.0
    else:
        tanelev = math.tan(RADDEG * elev)
        if elev >= 5.0:
            refcor = 58.1 / tanelev - 0.07 / tanelev**3 + 0.000086 / tanelev**5
        elif elev >= -0.575:
            refcor = 1735.0 + elev * (-518.2 + elev * (103.4 + elev * (-12.79 + elev * 0.711)))
        else:
            refcor = -20.774 / tanelev
        prestemp = (req.press * 283.0) / (1013.0 * (273.0 + req.temp))
        refcor *= prestemp / 3600.0

    res.elevref = max(elev + refcor, ELEVREF_LIMIT)
    res.zenref = 90.0 - res.elevref
    res.coszen = math.cos(RADDEG * res.zenref)


def air_mass(req: SolposRequest, res: SolposResult, cache: TrigCache) -> None:
    """Relative and pressure-corrected optical air mass."""
    if res.zenref > 93.0:
        res.amass = AMASS_UNDEFINED
        res.ampress = AMASS_UNDEFINED
    else:
        res.amass = 1.0 / (
            math.cos(RADDEG * res.zenref) + 0.50572 * (96.07995 - res.zenref) ** -1.6364
        )
        res.ampress = res.amass * req.press / 1013.0


def prime(req: SolposRequest, res: SolposResult, cache: TrigCache) -> None:
    """Kt prime/unprime factors (Perez et al. 1990)."""
    res.unprime = 1.031 * math.exp(-1.4 / (0.9 + 9.4 / res.amass)) + 0.1
    res.prime = 1.0 / res.unprime


def extraterrestrial(req: SolposRequest, res: SolposResult, cache: TrigCache) -> None:
    """Top-of-atmosphere normal and horizontal irradiance."""
    if res.coszen > 0.0:
        res.etrn = req.solcon * res.erv
        res.etr = res.etrn * res.coszen
    else:
        res.etrn = 0.0
        res.etr = 0.0


def tilt(req: SolposRequest, res: SolposResult, cache: TrigCache) -> None:
    """Top-of-atmosphere irradiance on the tilted panel."""
    ca = math.cos(RADDEG * res.azim)
    cp = math.cos(RADDEG * req.aspect)
    ct = math.cos(RADDEG * req.tilt)
    sa = math.sin(RADDEG * res.azim)
    sp = math.sin(RADDEG * req.aspect)
    st = math.sin(RADDEG * req.tilt)
    sz = math.sin(RADDEG * res.zenref)
    res.cosinc = res.coszen * ct + sz * st * (ca * cp + sa * sp)
    res.etrtilt = res.etrn * res.cosinc if res.cosinc > 0.0 else 0.0


# Fixed execution order; each stage runs only when its own bit is set.
PIPELINE: tuple[tuple[SPFunction, Stage], ...] = (
    (SPFunction.GEOM, geometry),
    (SPFunction.ZENETR, zenith_no_refraction),
    (SPFunction.SSHA, sunset_hour_angle),
    (SPFunction.SBCF, shadowband),
    (SPFunction.TST, true_solar_time),
    (SPFunction.SRSS, sunrise_sunset),
    (SPFunction.SOLAZM, solar_azimuth),
    (SPFunction.REFRAC, refraction),
    (SPFunction.AMASS, air_mass),
    (SPFunction.PRIME, prime),
    (SPFunction.ETR, extraterrestrial),
    (SPFunction.TILT, tilt),
)


def renew_date(req: SolposRequest) -> None:
    """Re-derive the calendar fields from the current date/time inputs.

    In month/day mode, fields that are individually in range but overflow
    the calendar roll over (31 June -> 1 July, hour 24 -> next day 00:00).
    Out-of-range fields are left for validation to report.
    """
    if has_flag(req.function, SPFunction.DOY):
        return
    if not (
        1 <= req.month <= 12
        and 1 <= req.day <= 31
        and 0 <= req.hour <= 24
        and 0 <= req.minute <= 59
        and 0 <= req.second <= 59
        and 1 <= req.year <= 9998
    ):
        return
    dt = datetime(req.year, req.month, 1) + timedelta(
        days=req.day - 1, hours=req.hour, minutes=req.minute, seconds=req.second
    )
    req.year, req.month, req.day = dt.year, dt.month, dt.day
    req.hour, req.minute, req.second = dt.hour, dt.minute, dt.second


def calculate(req: SolposRequest, res: SolposResult, cache: TrigCache) -> SolposResult:
    """Run every stage selected by ``req.function``, in dependency order.

    Args:
        req: Inputs. Date fields are normalised and the derived date form
            (daynum, or month/day in DOY mode) is written back.
        res: Output record, updated in place. Fields of unselected stages
            keep their previous values.
        cache: Trig cache for this calculation context; reset on entry.

    Returns:
        ``res``.

    Raises:
        ValidationError: An input is out of range for the active functions.
        NoFunctionError: ``req.function`` is zero.
    """
    cache.reset()
    renew_date(req)
    validate_request(req)
    if req.function == 0:
        raise NoFunctionError()

    if has_flag(req.function, SPFunction.DOY):
        req.month, req.day = day_of_year_to_day_of_month(req.year, req.daynum)
    else:
        req.daynum = day_of_month_to_day_of_year(req.year, req.month, req.day)

    for flag, stage in PIPELINE:
        if has_flag(req.function, flag):
            logger.debug("running %s", flag.name)
            stage(req, res, cache)
    return res
