"""Tests for the NREL comparison table and air-mass sweep."""

import pytest

from solpos.functions import SPFunction
from solpos.report import (
    NREL_AIRMASS_SWEEP,
    NREL_REFERENCE,
    ComparisonRow,
    airmass_sweep,
    compare_with_reference,
    format_comparison,
)


def test_every_reference_value_is_compared(atlanta):
    rows = compare_with_reference(atlanta)
    assert [r.name for r in rows] == list(NREL_REFERENCE)


def test_reference_values_agree(atlanta):
    for row in compare_with_reference(atlanta):
        assert row.computed == pytest.approx(row.reference, rel=1e-3), row.name


def test_date_rows_come_from_the_request(atlanta):
    rows = {r.name: r for r in compare_with_reference(atlanta)}
    assert rows["daynum"].computed == 203.0
    assert rows["year"].diff == 0.0


def test_format_comparison():
    table = format_comparison((ComparisonRow("azim", 97.032875, 97.03),
                               ComparisonRow("etr", 989.668518, 989.7)))
    lines = table.splitlines()
    assert len(lines) == 3
    assert lines[0].split() == ["-", "NREL", "SOLPOS", "Diff"]
    assert lines[1].split()[0] == "azim"
    assert "989.668518" in lines[2]
    # right-aligned columns share their end positions
    assert len({len(line) for line in lines}) == 1


def test_airmass_sweep(atlanta):
    values = airmass_sweep(atlanta)
    assert values == pytest.approx(NREL_AIRMASS_SWEEP, abs=0.01)
    assert atlanta.function == SPFunction.AMASS | SPFunction.DOY
    assert atlanta.request.press == 1013.0


def test_reference_table_is_read_only():
    with pytest.raises(TypeError):
        NREL_REFERENCE["azim"] = 0.0
    assert NREL_REFERENCE["azim"] == 97.032875


def test_custom_reference_mapping(atlanta):
    rows = compare_with_reference(atlanta, {"zenref": 41.590069})
    assert len(rows) == 1
    assert rows[0].computed == pytest.approx(41.590069, rel=1e-3)
