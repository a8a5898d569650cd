import numpy as np
import pandas as pd
import pytest

from ccfrp.config import TOTAL_COL
from ccfrp.queries.metrics import (
    angler_comparison,
    catch_by_anglers,
    gear_summary,
    species_totals,
    total_consistency,
    summarize,
)


def _cpue():
    return pd.DataFrame({
        "area": ["Point Lobos"] * 4,
        "site": ["MPA", "MPA", "REF", "REF"],
        "year": [2020, 2020, 2021, 2021],
        "drift_id": ["A", "B", "C", "D"],
        "anglers": [6, 6, 8, 8],
        "fish_caught": [3, 0, 4, 2],
        "angler_hours": [1.5, 1.5, 2.0, 2.0],
        "grid_cell_id": ["PL01", "PL02", "PL03", "PL04"],
        "Blue Rockfish": [2 / 1.5, 0.0, 1.0, 0.5],
        "Kelp Bass": [1 / 1.5, 0.0, 1.0, 0.5],
        TOTAL_COL: [2.0, 0.0, 2.0, 1.0],
    })


def test_angler_comparison():
    total = _cpue()[["site", "anglers", "drift_id", TOTAL_COL]].rename(columns={TOTAL_COL: "cpue"})
    comp = angler_comparison(total)
    assert comp["anglers"].tolist() == [6, 8]
    assert comp["mean_cpue"].tolist() == pytest.approx([1.0, 1.5])
    assert comp["drifts"].tolist() == [2, 2]

    by_site = angler_comparison(total, by=("site",))
    assert list(by_site.columns[:2]) == ["site", "anglers"]


def test_angler_comparison_skips_nan_cpue():
    total = pd.DataFrame({"anglers": [6, 6], "cpue": [1.0, np.nan]})
    comp = angler_comparison(total)
    assert comp["drifts"].tolist() == [1]


def test_catch_by_anglers():
    out = catch_by_anglers(_cpue())
    assert out["total_fish"].tolist() == [3, 6]
    assert out["mean_angler_hours"].tolist() == pytest.approx([1.5, 2.0])


def test_gear_summary_shares():
    catch = pd.DataFrame({
        "gear": ["Bait", "Bait", "Lure", "Bait"],
        "common_name": ["Kelp Bass", "Kelp Bass", "Blue Rockfish", "Blue Rockfish"],
    })
    g = gear_summary(catch)
    assert g.groupby("gear")["share"].sum().tolist() == pytest.approx([1.0, 1.0])
    bait = g[g["gear"] == "Bait"].iloc[0]
    assert (bait["common_name"], bait["n"]) == ("Kelp Bass", 2)


def test_gear_summary_without_gear_column():
    g = gear_summary(pd.DataFrame({"common_name": ["Kelp Bass"]}))
    assert g.empty
    assert list(g.columns) == ["gear", "common_name", "n", "share"]


def test_species_totals_order():
    sp = species_totals(_cpue())
    assert sp["species"].tolist() == ["Blue Rockfish", "Kelp Bass"]


def test_total_consistency_flags_bad_rows():
    cpue = _cpue()
    assert total_consistency(cpue).all()
    cpue.loc[1, TOTAL_COL] = 0.7
    assert total_consistency(cpue).tolist() == [True, False, True, True]


def test_summarize():
    s = summarize(_cpue())
    assert s["rows"] == 4
    assert s["years_span"] == (2020, 2021)
    assert s["species_count"] == 2
    assert s["zero_catch_drifts"] == 1
    assert summarize(_cpue().iloc[0:0]) == {"rows": 0}
