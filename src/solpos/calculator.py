"""Calculation context built from a timestamp, plus derived sunrise and sunset times."""

import logging
from collections.abc import Mapping
from datetime import date, datetime, timedelta, tzinfo
from numbers import Real
from typing import Any

from pytz import FixedOffset, utc

from solpos.compute import calculate
from solpos.errors import ParameterTypeError
from solpos.functions import SPFunction
from solpos.models import (
    NO_SUNRISE_SUNSET,
    SolposRequest,
    SolposResult,
    SunPathPoint,
    TrigCache,
)

logger = logging.getLogger(__name__)

_FLOAT_OPTIONS = ("press", "temp", "tilt", "aspect", "sbwid", "sbrad", "sbsky", "solcon")
_INT_OPTIONS = ("month", "day", "interval")


def _apply_options(req: SolposRequest, options: Mapping[str, Any]) -> None:
    """Copy recognised options onto the request; unknown keys are ignored.

    Raises:
        ParameterTypeError: A recognised key holds a value of the wrong type.
    """
    for key, value in options.items():
        if key in _FLOAT_OPTIONS:
            if isinstance(value, bool) or not isinstance(value, Real):
                raise ParameterTypeError(key, "float")
            setattr(req, key, float(value))
        elif key in _INT_OPTIONS:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ParameterTypeError(key, "int")
            setattr(req, key, value)
        elif key == "function":
            if isinstance(value, bool) or not isinstance(value, int):
                raise ParameterTypeError(key, "SPFunction")
            req.function = SPFunction(value)
        else:
            logger.debug("ignoring unknown option %r", key)


def _minutes_to_time(day_start: datetime, minutes: float) -> datetime | None:
    if abs(minutes) >= NO_SUNRISE_SUNSET:
        return None
    return day_start + timedelta(seconds=int(minutes * 60.0))


class Solpos:
    """One solar position calculation context.

    Owns its request, result and trig cache; nothing is shared between
    instances. Mutate ``request`` (or seed ``result`` fields read by a
    partial pipeline, e.g. ``zenref`` for AMASS only) and call
    ``calculate()`` again.

    Example:
        >>> sp = Solpos(dt, 33.65, -84.43, {"press": 1006.0, "temp": 27.0})
        >>> sp.result.zenref, sp.sunrise()
    """

    def __init__(
        self,
        dt: datetime,
        latitude: float,
        longitude: float,
        options: Mapping[str, Any] | None = None,
    ):
        """Build the request from ``dt`` and run the first calculation.

        Args:
            dt: Local timestamp. Its UTC offset becomes the time zone; a naive
                datetime is taken as UTC.
            latitude: Degrees north (south negative).
            longitude: Degrees east (west negative).
            options: Optional inputs: press, temp, tilt, aspect, sbwid, sbrad,
                sbsky, solcon (numbers), month, day, interval (int),
                function (SPFunction).

        Raises:
            ParameterTypeError: An option has the wrong type.
            ValidationError: An input is out of range.
            NoFunctionError: The function mask is zero.
        """
        self.request = SolposRequest()
        self.result = SolposResult()
        self._trig = TrigCache()
        self.request.latitude = latitude
        self.request.longitude = longitude
        self.set_date(dt)
        if options:
            _apply_options(self.request, options)
        self.calculate()

    def calculate(self) -> SolposResult:
        return calculate(self.request, self.result, self._trig)

    @property
    def function(self) -> SPFunction:
        return self.request.function

    @function.setter
    def function(self, value: int) -> None:
        self.request.function = SPFunction(value)

    @property
    def tzinfo(self) -> tzinfo:
        """Fixed-offset zone of the request's time zone."""
        return FixedOffset(int(round(self.request.timezone * 60)))

    @property
    def date(self) -> datetime:
        """Request time as an aware datetime; day 32 of December rolls into the next year."""
        req = self.request
        return self._midnight() + timedelta(hours=req.hour, minutes=req.minute, seconds=req.second)

    def set_date(self, dt: datetime) -> None:
        """Take year through second and the time zone from ``dt``."""
        if dt.tzinfo is None:
            dt = utc.localize(dt)
        offset = dt.utcoffset()
        req = self.request
        req.year, req.month, req.day = dt.year, dt.month, dt.day
        req.daynum = dt.timetuple().tm_yday
        req.hour, req.minute, req.second = dt.hour, dt.minute, dt.second
        req.timezone = offset.total_seconds() / 3600.0 if offset is not None else 0.0

    def _midnight(self) -> datetime:
        # day counted from the 1st so that DOY 366 of a common year gives Jan 1
        req = self.request
        first = datetime(req.year, req.month, 1, tzinfo=self.tzinfo)
        return first + timedelta(days=req.day - 1)

    def sunrise(self) -> datetime | None:
        """Sunrise (without refraction) on the request's date, None during 24-hour day or night."""
        return _minutes_to_time(self._midnight(), self.result.sretr)

    def sunset(self) -> datetime | None:
        """Sunset (without refraction) on the request's date, None during 24-hour day or night."""
        return _minutes_to_time(self._midnight(), self.result.ssetr)

    def __repr__(self) -> str:
        req = self.request
        return (
            f"Solpos({req.year:04d}-{req.month:02d}-{req.day:02d} "
            f"{req.hour:02d}:{req.minute:02d}:{req.second:02d} UTC{req.timezone:+g}, "
            f"lat={req.latitude}, lon={req.longitude}, function={int(req.function):#x})"
        )


def sun_path(
    day: date,
    latitude: float,
    longitude: float,
    tz: tzinfo,
    step_minutes: int = 10,
    options: Mapping[str, Any] | None = None,
) -> tuple[SunPathPoint, ...]:
    """Sample the solar position through one local day.

    Args:
        day: Local calendar date.
        latitude: Degrees north.
        longitude: Degrees east.
        tz: pytz time zone; the offset in effect at midnight is used all day.
        step_minutes: Sampling step.
        options: Forwarded to ``Solpos``.

    Returns:
        One SunPathPoint per sample from 00:00 up to, not including, 24:00.
    """
    start = datetime(day.year, day.month, day.day)
    start = tz.localize(start) if hasattr(tz, "localize") else start.replace(tzinfo=tz)
    fixed = FixedOffset(int(start.utcoffset().total_seconds() // 60))
    start = start.replace(tzinfo=fixed)

    sp = Solpos(start, latitude, longitude, options)
    points: list[SunPathPoint] = []
    for minutes in range(0, 24 * 60, step_minutes):
        sp.set_date(start + timedelta(minutes=minutes))
        res = sp.calculate()
        points.append(
            SunPathPoint(
                minutes=float(minutes),
                azim=res.azim,
                elevref=res.elevref,
                etr=res.etr,
                etrtilt=res.etrtilt,
            )
        )
    return tuple(points)
