import pandas as pd
import pytest

from ccfrp.cleaning import prepare_trips, prepare_drifts, prepare_catch, prepare_species


def test_prepare_trips_projects_and_types(raw_trips):
    t = prepare_trips(raw_trips)
    assert list(t.columns) == ["trip_id", "area", "month", "day", "year"]
    assert str(t["year"].dtype) == "Int64"
    assert t["year"].tolist() == [2019, 2020, 2020]


def test_prepare_drifts_renames_and_coerces(raw_drifts):
    d = prepare_drifts(raw_drifts)
    assert {"drift_id", "cell_trip_id", "drift_hours", "angler_hours", "anglers", "excluded_comment"} <= set(d.columns)
    assert d["drift_hours"].dtype == "float64"
    assert str(d["anglers"].dtype) == "Int64"
    # blank comment reads as missing
    assert d.loc[d["drift_id"] == "D2", "excluded_comment"].isna().all()


def test_comment_column_is_optional(raw_drifts):
    d = prepare_drifts(raw_drifts.drop(columns="Excluded Drift Comment"))
    assert d["excluded_comment"].isna().all()


def test_missing_required_header_raises(raw_trips):
    with pytest.raises(ValueError, match="Year Automatic"):
        prepare_trips(raw_trips.drop(columns="Year Automatic"))


def test_non_numeric_effort_raises(raw_drifts):
    bad = raw_drifts.copy()
    bad.loc[0, "Total Angler Hrs"] = "two"
    with pytest.raises(ValueError, match="non-numeric"):
        prepare_drifts(bad)


def test_negative_anglers_raise(raw_drifts):
    bad = raw_drifts.copy()
    bad.loc[0, "Total # Anglers Fishing"] = "-1"
    with pytest.raises(ValueError, match="negative"):
        prepare_drifts(bad)


def test_fractional_anglers_raise(raw_drifts):
    bad = raw_drifts.copy()
    bad.loc[0, "Total # Anglers Fishing"] = "2.5"
    with pytest.raises(ValueError, match="whole numbers"):
        prepare_drifts(bad)


def test_out_of_range_year_raises(raw_trips):
    bad = raw_trips.copy()
    bad.loc[0, "Year Automatic"] = "1850"
    with pytest.raises(ValueError, match="out-of-range"):
        prepare_trips(bad)


def test_catch_species_codes_upper_cased(raw_catch):
    raw = raw_catch.copy()
    raw.loc[0, "Species Code"] = " klb "
    c = prepare_catch(raw)
    assert c.loc[0, "species_code"] == "KLB"
    assert c["length_cm"].dtype == "float64"


def test_conflicting_species_codes_raise(raw_species):
    bad = pd.concat([raw_species, pd.DataFrame({"Species Code": ["KLB"], "Common Name": ["Calico Bass"]})])
    with pytest.raises(ValueError, match="KLB"):
        prepare_species(bad)


def test_repeated_species_code_collapses(raw_species):
    dup = pd.concat([raw_species, pd.DataFrame({"Species Code": ["klb "], "Common Name": ["Kelp Bass"]})])
    s = prepare_species(dup)
    assert len(s) == 3
    assert s["species_code"].is_unique
