import pytest

from recharge_basin.errors import NoSoilDataError, ValidationError
from recharge_basin.soils import (
    DEFAULT_RATE,
    INFILTRATION_RATES,
    SoilUnit,
    infiltration_rate,
    match_soil,
    primary_soil,
    rank_soil_units,
)


def test_sicl_beats_its_shorter_substrings():
    m = match_soil("SiCl2")
    assert m.key == "sicl"
    assert m.rate == 0.4
    assert not m.fallback


def test_unknown_symbol_falls_back():
    m = match_soil("unknown")
    assert m.rate == DEFAULT_RATE == 0.6
    assert m.fallback
    assert m.key is None


def test_fallback_distinguishable_from_loam_match():
    loam = match_soil("l")
    other = match_soil("xyz")
    assert loam.rate == other.rate
    assert not loam.fallback and other.fallback


@pytest.mark.parametrize(
    "symbol, rate",
    # A plain first-hit scan would give "sandy loam" 1.0 and "SiL", "Cl", "Clay" 0.6
    # (via "sand" and the one-letter "l"); longer keys win here.
    [
        ("Sa", 1.0),
        ("SAND", 1.0),
        ("sandy loam", 0.7),
        ("SL", 0.7),
        ("Loam", 0.6),
        ("SiL", 0.5),
        ("Cl", 0.4),
        ("Si2", 0.3),
        ("Clay", 0.05),
        ("Cb", 0.05),
    ],
)
def test_rates(symbol, rate):
    assert infiltration_rate(symbol) == rate


def test_table_is_ordered_sequence():
    keys = [k for k, _ in INFILTRATION_RATES]
    assert keys[:2] == ["sand", "sa"]
    assert keys.index("sicl") < keys.index("cl") < keys.index("c")


def test_order_breaks_ties_between_unrelated_keys():
    # "sa" and "cl" are unrelated; "sa" comes first in the table
    assert match_soil("SaCl").key == "sa"


def test_non_string_symbol_rejected():
    with pytest.raises(ValidationError):
        match_soil(None)


def test_rank_by_acres_descending_from_survey_rows():
    rows = [
        {"symbol": "A", "desc": "first", "acres": "1.5"},
        {"symbol": "B", "desc": "second", "acres": "1,204.2"},
        {"symbol": "C", "desc": "third", "acres": ""},
    ]
    ranked = rank_soil_units(rows)
    assert [u.symbol for u in ranked] == ["B", "A", "C"]
    assert ranked[0].acres == pytest.approx(1204.2)
    assert primary_soil(rows) == SoilUnit("B", "second", 1204.2)


def test_rank_is_stable_for_ties():
    rows = [SoilUnit("X", acres=2.0), SoilUnit("Y", acres=2.0)]
    assert [u.symbol for u in rank_soil_units(rows)] == ["X", "Y"]


def test_no_soil_data():
    with pytest.raises(NoSoilDataError) as ei:
        primary_soil([])
    assert "no soil data found" in str(ei.value)
    assert ei.value.to_dict()["error"] == "no_soil_data"
