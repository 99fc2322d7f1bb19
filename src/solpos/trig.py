"""Lazily filled trig values shared by the zenith, sunset and shadowband stages."""

import math

from solpos.config import RADDEG
from solpos.functions import TRIG_MASK, has_flag
from solpos.models import SolposResult, TrigCache


def fill_trig_cache(
    cache: TrigCache, res: SolposResult, latitude: float, function: int
) -> TrigCache:
    """Compute the cache on first use within a calculation; no-op afterwards.

    Values are only computed when a stage that reads them is selected,
    since declination and hour angle are undefined otherwise.
    """
    if cache.filled:
        return cache
    cache.sd = 1.0
    if has_flag(function, TRIG_MASK):
        cache.cd = math.cos(RADDEG * res.declin)
        cache.ch = math.cos(RADDEG * res.hrang)
        cache.cl = math.cos(RADDEG * latitude)
        cache.sd = math.sin(RADDEG * res.declin)
        cache.sl = math.sin(RADDEG * latitude)
    return cache
