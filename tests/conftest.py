"""Shared fixtures: the NREL Atlanta reference case."""

from datetime import datetime

import pytest
from pytz import FixedOffset

from solpos.calculator import Solpos

EST = FixedOffset(-5 * 60)
ATLANTA_LAT = 33.65
ATLANTA_LON = -84.43
ATLANTA_OPTIONS = {"press": 1006.0, "temp": 27.0, "tilt": 33.65, "aspect": 135.0}


def atlanta_dt() -> datetime:
    return datetime(1999, 7, 22, 9, 45, 37, tzinfo=EST)


@pytest.fixture
def atlanta() -> Solpos:
    """Fully calculated context for the reference case."""
    return Solpos(atlanta_dt(), ATLANTA_LAT, ATLANTA_LON, dict(ATLANTA_OPTIONS))
