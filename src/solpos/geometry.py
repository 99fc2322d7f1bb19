"""Base astronomical geometry for one instant and place.

Day angle and earth radius vector follow Iqbal (1983) and Spencer (1971);
everything from universal time to the hour angle is Michalsky's (1988)
Astronomical Almanac algorithm, valid for 1950-2050.
"""

import math

from solpos.config import DEGRAD, RADDEG
from solpos.models import SolposRequest, SolposResult


def _wrap(value: float, period: float) -> float:
    """Drop whole multiples of ``period`` so the result is in [0, period)."""
    value -= period * int(value / period)
    if value < 0.0:
        value += period
    return value


def compute_geometry(req: SolposRequest, res: SolposResult) -> None:
    """Fill the geometry fields of ``res`` (dayang through hrang).

    Args:
        req: Validated request; ``daynum`` must already be resolved.
        res: Result record, updated in place.
    """
    # Day angle
    res.dayang = 360.0 * (req.daynum - 1) / 365.0

    # Earth radius vector * solar constant = solar energy
    sd = math.sin(RADDEG * res.dayang)
    cd = math.cos(RADDEG * res.dayang)
    d2 = 2.0 * res.dayang
    c2 = math.cos(RADDEG * d2)
    s2 = math.sin(RADDEG * d2)
    res.erv = 1.000110 + 0.034221 * cd + 0.001280 * sd
    res.erv += 0.000719 * c2 + 0.000077 * s2

    # Universal time at the midpoint of the measurement interval
    res.utime = (req.hour * 3600.0 + req.minute * 60.0 + req.second - req.interval / 2.0)
    res.utime = res.utime / 3600.0 - req.timezone

    # Julian day minus 2,400,000; no century leap-year rule needed for 1950-2050
    delta = req.year - 1949
    leap = int(delta / 4.0)
    res.julday = 32916.5 + delta * 365.0 + leap + req.daynum + res.utime / 24.0

    # Days from noon 1 JAN 2000 (JD 2,451,545)
    res.ectime = res.julday - 51545.0

    res.mnlong = _wrap(280.460 + 0.9856474 * res.ectime, 360.0)
    res.mnanom = _wrap(357.528 + 0.9856003 * res.ectime, 360.0)

    res.eclong = _wrap(
        res.mnlong
        + 1.915 * math.sin(res.mnanom * RADDEG)
        + 0.020 * math.sin(2.0 * res.mnanom * RADDEG),
        360.0,
    )

    res.ecobli = 23.439 - 4.0e-07 * res.ectime

    res.declin = DEGRAD * math.asin(
        math.sin(res.ecobli * RADDEG) * math.sin(res.eclong * RADDEG)
    )

    top = math.cos(RADDEG * res.ecobli) * math.sin(RADDEG * res.eclong)
    bottom = math.cos(RADDEG * res.eclong)
    res.rascen = DEGRAD * math.atan2(top, bottom)
    if res.rascen < 0.0:
        res.rascen += 360.0

    res.gmst = _wrap(6.697375 + 0.0657098242 * res.ectime + res.utime, 24.0)
    res.lmst = _wrap(res.gmst * 15.0 + req.longitude, 360.0)

    # Hour angle, forced between -180 and 180 degrees
    res.hrang = res.lmst - res.rascen
    if res.hrang < -180.0:
        res.hrang += 360.0
    if res.hrang > 180.0:
        res.hrang -= 360.0
