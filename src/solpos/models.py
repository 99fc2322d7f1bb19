"""Data model for the request, the computed result, and the trig cache."""

from dataclasses import dataclass, field, fields

from solpos import config
from solpos.functions import DEFAULT, SPFunction

# Named sentinel outputs. They are valid results for degenerate geometry, not errors.
AMASS_UNDEFINED = -1.0  # amass/ampress when zenref > 93 degrees
NO_SUNRISE_SUNSET = 2999.0  # |sretr|/|ssetr| during 24-hour sun up or down
ZENETR_LIMIT = 99.0  # unrefracted zenith is capped here at night
ELEVREF_LIMIT = -9.0  # refracted elevation floor

TRIG_UNSET = -999.0


@dataclass
class SolposRequest:
    """Inputs of one calculation. Mutable until ``calculate()`` reads them.

    Required fields default to out-of-range values so that validation
    fails until the caller supplies them.
    """

    year: int = -99  # 4-digit year
    month: int = -99  # Jan = 1 (input in month/day mode, output in DOY mode)
    day: int = -99  # Day of month (input in month/day mode, output in DOY mode)
    daynum: int = -999  # Day of year, Feb 1 = 32 (input in DOY mode)
    hour: int = -99  # 0 - 24
    minute: int = -99  # 0 - 59
    second: int = -99  # 0 - 59
    interval: int = config.DEFAULT_INTERVAL  # Measurement interval (s); time given is its END
    latitude: float = -99.0  # Degrees north (south negative)
    longitude: float = -999.0  # Degrees east (west negative)
    timezone: float = -99.0  # Hours east of UTC (west negative)
    press: float = config.DEFAULT_PRESS  # Surface pressure, millibars
    temp: float = config.DEFAULT_TEMP  # Ambient dry-bulb temperature, degrees C
    tilt: float = config.DEFAULT_TILT  # Degrees tilt from horizontal of panel
    aspect: float = config.DEFAULT_ASPECT  # Panel azimuth: N=0, E=90, S=180, W=270
    sbwid: float = config.DEFAULT_SBWID  # Shadow-band width (cm)
    sbrad: float = config.DEFAULT_SBRAD  # Shadow-band radius (cm)
    sbsky: float = config.DEFAULT_SBSKY  # Shadow-band sky factor
    solcon: float = config.DEFAULT_SOLCON  # Solar constant (W/sq m)
    function: SPFunction = field(default=DEFAULT)  # Which outputs to compute


@dataclass
class SolposResult:
    """Outputs of one calculation, in degrees unless noted.

    Stages that are not selected leave their fields untouched.

    Sentinel outputs:
        amass, ampress: AMASS_UNDEFINED when zenref > 93.
        sretr, ssetr: +/-NO_SUNRISE_SUNSET during 24-hour day or night.
        zenetr: capped at 99 (elevetr floored at -9) at night.
        elevref: floored at -9.
        etr, etrn: 0 at night. etrtilt: 0 when cosinc <= 0.
        azim: meaningless at zenith, at the poles, or at night.
        prime, unprime: meaningless when zenref > 93.
    """

    amass: float = 0.0  # Relative optical airmass
    ampress: float = 0.0  # Pressure-corrected airmass
    azim: float = 0.0  # Solar azimuth: N=0, E=90, S=180, W=270
    cosinc: float = 0.0  # Cosine of solar incidence angle on panel
    coszen: float = 0.0  # Cosine of refraction corrected zenith angle
    dayang: float = 0.0  # Day angle (daynum*360/year-length)
    declin: float = 0.0  # Declination, degrees north
    eclong: float = 0.0  # Ecliptic longitude
    ecobli: float = 0.0  # Obliquity of ecliptic
    ectime: float = 0.0  # Time of ecliptic calculations (days from J2000)
    elevetr: float = 0.0  # Solar elevation, no atmospheric correction
    elevref: float = 0.0  # Solar elevation, refracted
    eqntim: float = 0.0  # Equation of time (TST - LMT), minutes
    erv: float = 0.0  # Earth radius vector (multiplied to solar constant)
    etr: float = 0.0  # Extraterrestrial global horizontal irradiance, W/sq m
    etrn: float = 0.0  # Extraterrestrial direct normal irradiance, W/sq m
    etrtilt: float = 0.0  # Extraterrestrial irradiance on the tilted panel, W/sq m
    gmst: float = 0.0  # Greenwich mean sidereal time, hours
    hrang: float = 0.0  # Hour angle, degrees west of solar noon
    julday: float = 0.0  # Julian day minus 2,400,000
    lmst: float = 0.0  # Local mean sidereal time
    mnanom: float = 0.0  # Mean anomaly
    mnlong: float = 0.0  # Mean longitude
    rascen: float = 0.0  # Right ascension
    prime: float = 0.0  # Factor that normalizes Kt, Kn, etc.
    sbcf: float = 0.0  # Shadow-band correction factor
    ssha: float = 0.0  # Sunset(/rise) hour angle
    sretr: float = 0.0  # Sunrise, minutes from local midnight, without refraction
    ssetr: float = 0.0  # Sunset, minutes from local midnight, without refraction
    tst: float = 0.0  # True solar time, minutes from midnight
    tstfix: float = 0.0  # True solar time - local standard time, minutes
    unprime: float = 0.0  # Factor that denormalizes Kt', Kn', etc.
    utime: float = 0.0  # Universal time, hours
    zenetr: float = 0.0  # Solar zenith, no atmospheric correction
    zenref: float = 0.0  # Solar zenith, refracted

    @property
    def has_airmass(self) -> bool:
        return self.amass != AMASS_UNDEFINED

    @property
    def has_sunrise_sunset(self) -> bool:
        return abs(self.sretr) != NO_SUNRISE_SUNSET

    @property
    def is_polar_day(self) -> bool:
        """Sun stays up all day (sunrise flagged before midnight)."""
        return self.sretr == -NO_SUNRISE_SUNSET

    @property
    def is_polar_night(self) -> bool:
        """Sun stays down all day."""
        return self.sretr == NO_SUNRISE_SUNSET

    def as_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class TrigCache:
    """Trig values shared by several stages of one calculation.

    ``sd`` below -900 marks the cache as not yet filled.
    """

    cd: float = 1.0  # cosine of the declination
    ch: float = 1.0  # cosine of the hour angle
    cl: float = 1.0  # cosine of the latitude
    sd: float = TRIG_UNSET  # sine of the declination
    sl: float = 1.0  # sine of the latitude

    @property
    def filled(self) -> bool:
        return self.sd >= -900.0

    def reset(self) -> None:
        self.cd = self.ch = self.cl = self.sl = 1.0
        self.sd = TRIG_UNSET


@dataclass(frozen=True)
class SunPathPoint:
    """Solar position at one sample of a day."""

    minutes: float  # Local standard time, minutes from midnight
    azim: float  # Solar azimuth (0=N, 90=E, 180=S, 270=W)
    elevref: float  # Refracted elevation (degrees)
    etr: float  # Extraterrestrial horizontal irradiance (W/sq m)
    etrtilt: float  # Extraterrestrial irradiance on the panel (W/sq m)
