"""Function selector: which outputs to compute and what each one needs first."""

from enum import IntFlag


class SPFunction(IntFlag):
    """Bitmask of solpos sub-calculations.

    DOY is a toggle rather than a calculation: when set, the request's
    ``daynum`` is the date input and month/day are derived from it; when
    clear, month/day are the input and ``daynum`` is derived.
    """

    NON_FUNCTION = 1 << 0
    DOY = 1 << 1  # day-of-year input mode
    GEOM = 1 << 2  # base geometry
    ZENETR = 1 << 3  # unrefracted zenith
    SSHA = 1 << 4  # sunset hour angle
    SBCF = 1 << 5  # shadowband correction factor
    TST = 1 << 6  # true solar time
    SRSS = 1 << 7  # sunrise/sunset
    SOLAZM = 1 << 8  # solar azimuth
    REFRAC = 1 << 9  # refraction
    AMASS = 1 << 10  # air mass
    PRIME = 1 << 11  # prime/unprime
    TILT = 1 << 12  # tilted surface irradiance
    ETR = 1 << 13  # extraterrestrial irradiance


F = SPFunction

ALL = (
    F.DOY | F.GEOM | F.ZENETR | F.SSHA | F.SBCF | F.TST | F.SRSS
    | F.SOLAZM | F.REFRAC | F.AMASS | F.PRIME | F.TILT | F.ETR
)
DEFAULT = SPFunction(ALL & ~int(F.DOY))

# leaf -> direct prerequisites
PREREQUISITES: dict[SPFunction, SPFunction] = {
    F.DOY: SPFunction(0),
    F.GEOM: F.DOY,
    F.ZENETR: F.GEOM,
    F.SSHA: F.GEOM,
    F.SBCF: F.SSHA,
    F.TST: F.GEOM,
    F.SRSS: F.SSHA | F.TST,
    F.SOLAZM: F.ZENETR,
    F.REFRAC: F.ZENETR,
    F.AMASS: F.REFRAC,
    F.PRIME: F.AMASS,
    F.ETR: F.REFRAC,
    F.TILT: F.SOLAZM | F.REFRAC | F.ETR,
}


def with_prerequisites(flags: SPFunction) -> SPFunction:
    """Return ``flags`` OR'd with every bit it transitively depends on."""
    resolved = SPFunction(0)
    pending = [leaf for leaf in PREREQUISITES if leaf & flags]
    while pending:
        leaf = pending.pop()
        if leaf & resolved:
            continue
        resolved |= leaf
        pending.extend(p for p in PREREQUISITES if p & PREREQUISITES[leaf])
    return resolved


S_DOY = with_prerequisites(F.DOY)
S_GEOM = with_prerequisites(F.GEOM)
S_ZENETR = with_prerequisites(F.ZENETR)
S_SSHA = with_prerequisites(F.SSHA)
S_SBCF = with_prerequisites(F.SBCF)
S_TST = with_prerequisites(F.TST)
S_SRSS = with_prerequisites(F.SRSS)
S_SOLAZM = with_prerequisites(F.SOLAZM)
S_REFRAC = with_prerequisites(F.REFRAC)
S_AMASS = with_prerequisites(F.AMASS)
S_PRIME = with_prerequisites(F.PRIME)
S_ETR = with_prerequisites(F.ETR)
S_TILT = with_prerequisites(F.TILT)
S_ALL = ALL

# Any of these bits means the shared trig values will be read.
TRIG_MASK = F.ZENETR | F.SSHA | S_SBCF


def has_flag(mask: int, flag: int) -> bool:
    """True if any bit of ``flag`` is set in ``mask``."""
    return mask & flag != 0


def add_flag(mask: int, flag: int) -> SPFunction:
    return SPFunction(mask | flag)


def clear_flag(mask: int, flag: int) -> SPFunction:
    return SPFunction(int(mask) & ~int(flag))


def toggle_flag(mask: int, flag: int) -> SPFunction:
    return SPFunction(mask ^ flag)
