"""Comparison against the NREL reference run and the air-mass sweep."""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from solpos.calculator import Solpos
from solpos.functions import SPFunction

# NREL solpos output for Atlanta (33.65, -84.43), 1999-07-22 09:45:37 UTC-5,
# press 1006 mb, temp 27 C, tilt 33.65, aspect 135.
NREL_REFERENCE: Mapping[str, float] = MappingProxyType({
    "year": 1999,
    "month": 7,
    "day": 22,
    "daynum": 203,
    "amass": 1.335752,
    "ampress": 1.326522,
    "azim": 97.032875,
    "cosinc": 0.912569,
    "elevref": 48.409931,
    "etr": 989.668518,
    "etrn": 1323.239868,
    "etrtilt": 1207.547363,
    "prime": 1.037040,
    "sbcf": 1.201910,
    "sretr": 347.173431,
    "ssetr": 1181.111206,
    "unprime": 0.964283,
    "zenref": 41.590069,
})

# NREL air mass at zenref = 90, 80, ..., 0 degrees
NREL_AIRMASS_SWEEP: tuple[float, ...] = (
    37.92, 5.59, 2.90, 1.99, 1.55, 1.30, 1.15, 1.06, 1.02, 1.00,
)


@dataclass(frozen=True)
class ComparisonRow:
    """One output compared with its reference value."""

    name: str
    reference: float
    computed: float

    @property
    def diff(self) -> float:
        return self.reference - self.computed


def _lookup(sp: Solpos, name: str) -> float:
    if hasattr(sp.result, name):
        return getattr(sp.result, name)
    return getattr(sp.request, name)


def compare_with_reference(
    sp: Solpos, reference: Mapping[str, float] = NREL_REFERENCE
) -> tuple[ComparisonRow, ...]:
    """Pair each reference value with the calculated one."""
    return tuple(
        ComparisonRow(name=name, reference=float(ref), computed=float(_lookup(sp, name)))
        for name, ref in reference.items()
    )


def format_comparison(rows: tuple[ComparisonRow, ...]) -> str:
    """Render rows as a right-aligned text table."""
    header = ("-", "NREL", "SOLPOS", "Diff")
    body = [
        (r.name, f"{r.reference:.6f}", f"{r.computed:.6f}", f"{r.diff:.6f}")
        for r in rows
    ]
    widths = [max(len(cells[i]) for cells in [header, *body]) for i in range(4)]
    lines = ["  ".join(c.rjust(w) for c, w in zip(cells, widths)) for cells in [header, *body]]
    return "\n".join(lines)


def airmass_sweep(sp: Solpos, press: float = 1013.0) -> tuple[float, ...]:
    """Air mass for zenref 90, 80, ..., 0 using only the AMASS stage.

    Switches ``sp`` to the AMASS | DOY function and seeds ``result.zenref``
    directly, so the context is left in that state afterwards.
    """
    sp.function = SPFunction.AMASS | SPFunction.DOY
    sp.request.press = press
    values: list[float] = []
    for zenref in range(90, -1, -10):
        sp.result.zenref = float(zenref)
        values.append(sp.calculate().amass)
    return tuple(values)
