"""Range checks on a request, limited to what the active functions read."""

import logging

from solpos import config
from solpos.errors import ValidationError
from solpos.functions import SPFunction, has_flag
from solpos.models import SolposRequest

logger = logging.getLogger(__name__)


def _fail(field: str, value: object, valid_range: str) -> ValidationError:
    logger.debug("validation failed: %s=%r, valid %s", field, value, valid_range)
    return ValidationError(field, value, valid_range)


def validate_request(req: SolposRequest) -> None:
    """Raise on the first input that is out of range for ``req.function``.

    Checks run in groups (geometry, refraction, tilt, shadowband) and
    only for the groups whose function bit is set.

    Raises:
        ValidationError: Identifies the field and its valid range.
    """
    fn = req.function

    if has_flag(fn, SPFunction.GEOM):
        _validate_geometry(req)

    if has_flag(fn, SPFunction.REFRAC):
        if abs(req.temp) > 100.0:
            raise _fail("temperature", req.temp, "[-100 - +100]")
        if req.press < 0.0 or req.press > 2000.0:
            raise _fail("pressure", req.press, "[0 - 2000]")

    if has_flag(fn, SPFunction.TILT):
        # documented as -90..90, bounded at 180
        if abs(req.tilt) > 180.0:
            raise _fail("tilt", req.tilt, "[-180 - 180]")
        if abs(req.aspect) > 360.0:
            raise _fail("aspect", req.aspect, "[-360 - 360]")

    if has_flag(fn, SPFunction.SBCF):
        if req.sbwid < 1.0 or req.sbwid > 100.0:
            raise _fail("shadow band width", req.sbwid, "(cm) [1 - 100]")
        if req.sbrad < 1.0 or req.sbrad > 100.0:
            raise _fail("shadow band radius", req.sbrad, "(cm) [1 - 100]")
        if abs(req.sbsky) > 1.0:
            raise _fail("shadow band sky factor", req.sbsky, "[-1 - +1]")


def _validate_geometry(req: SolposRequest) -> None:
    doy_mode = has_flag(req.function, SPFunction.DOY)

    # No absurd dates
    if req.year < config.MIN_YEAR or req.year > config.MAX_YEAR:
        raise _fail("year", req.year, f"[{config.MIN_YEAR}-{config.MAX_YEAR}]")
    if not doy_mode and (req.month < 1 or req.month > 12):
        raise _fail("month", req.month, "[1-12]")
    if not doy_mode and (req.day < 1 or req.day > 31):
        raise _fail("day", req.day, "[1-31]")
    if doy_mode and (req.daynum < 1 or req.daynum > 366):
        raise _fail("day of year", req.daynum, "[1-366]")

    # No absurd times
    if req.hour < 0 or req.hour > 24:
        raise _fail("hour", req.hour, "[0-24]")
    if req.minute < 0 or req.minute > 59:
        raise _fail("minute", req.minute, "[0-59]")
    if req.second < 0 or req.second > 59:
        raise _fail("second", req.second, "[0-59]")
    if req.hour == 24 and req.minute > 0:
        raise _fail("minute", req.minute, "[0] at hour 24")
    if req.hour == 24 and req.second > 0:
        raise _fail("second", req.second, "[0] at hour 24")
    if abs(req.timezone) > 12.0:
        raise _fail("timezone", req.timezone, "[-12 - +12]")
    if req.interval < 0 or req.interval > 28800:
        raise _fail("interval", req.interval, "(seconds) [0 - 28800]")

    # No absurd locations
    if abs(req.longitude) > 180.0:
        raise _fail("longitude", req.longitude, "[-180 - +180]")
    if abs(req.latitude) > 90.0:
        raise _fail("latitude", req.latitude, "[-90 - +90]")
