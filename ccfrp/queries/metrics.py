from __future__ import annotations
import numpy as np
import pandas as pd

from ccfrp.config import TOTAL_COL
from ccfrp.queries.cpue import species_columns


def angler_comparison(total_long: pd.DataFrame, by=()) -> pd.DataFrame:
    """
    Total CPUE summarized by number of anglers on the drift (and optional
    groupers such as site or area). Expects the Total-only long table.
    """
    group_cols = [*by, "anglers"]
    agg = (
        total_long.dropna(subset=["cpue"])
        .groupby(group_cols, dropna=True)
        .agg(mean_cpue=("cpue", "mean"),
             median_cpue=("cpue", "median"),
             sd_cpue=("cpue", "std"),
             drifts=("cpue", "size"))
        .reset_index()
        .sort_values(group_cols)
        .reset_index(drop=True)
    )
    return agg


def catch_by_anglers(effort: pd.DataFrame, by=()) -> pd.DataFrame:
    """Raw fish caught and angler-hours per drift, by angler count."""
    group_cols = [*by, "anglers"]
    return (
        effort.groupby(group_cols, dropna=True)
        .agg(mean_fish=("fish_caught", "mean"),
             total_fish=("fish_caught", "sum"),
             mean_angler_hours=("angler_hours", "mean"),
             drifts=("drift_id", "nunique"))
        .reset_index()
        .sort_values(group_cols)
        .reset_index(drop=True)
    )


def gear_summary(catch: pd.DataFrame) -> pd.DataFrame:
    """Catch counts by gear type and species (all-catch table, no protocol filters)."""
    cols = ["gear", "common_name", "n", "share"]
    if "gear" not in catch.columns or catch["gear"].isna().all():
        return pd.DataFrame(columns=cols)
    gp = (
        catch.dropna(subset=["gear"])
        .groupby(["gear", "common_name"], dropna=True)
        .size()
        .reset_index(name="n")
    )
    gp["share"] = gp["n"] / gp.groupby("gear")["n"].transform("sum")
    return gp.sort_values(["gear", "n"], ascending=[True, False]).reset_index(drop=True)[cols]


def species_totals(cpue: pd.DataFrame) -> pd.DataFrame:
    """Mean CPUE per species across drifts, highest first."""
    sp = species_columns(cpue)
    if not sp:
        return pd.DataFrame(columns=["species", "mean_cpue"])
    means = cpue[sp].mean(axis=0, skipna=True)
    return (
        means.rename("mean_cpue")
        .rename_axis("species")
        .reset_index()
        .sort_values(["mean_cpue", "species"], ascending=[False, True])
        .reset_index(drop=True)
    )


def total_consistency(cpue: pd.DataFrame, rtol: float = 1e-9, atol: float = 1e-9) -> pd.Series:
    """
    Per row: Total × angler-hours equals the summed species counts.
    Rows without usable effort are reported as consistent when Total is NaN.
    """
    sp = species_columns(cpue)
    hours = cpue["angler_hours"]
    counts = (cpue[sp].mul(hours, axis=0)).sum(axis=1, min_count=1) if sp else pd.Series(0.0, index=cpue.index)
    total = cpue[TOTAL_COL] * hours
    ok = np.isclose(total.to_numpy(dtype=float), counts.fillna(0).to_numpy(dtype=float), rtol=rtol, atol=atol)
    return pd.Series(ok | cpue[TOTAL_COL].isna().to_numpy(), index=cpue.index)


def summarize(cpue: pd.DataFrame) -> dict:
    if cpue.empty:
        return {"rows": 0}
    return {
        "rows": int(len(cpue)),
        "years_span": (int(cpue["year"].min()), int(cpue["year"].max())) if cpue["year"].notna().any() else None,
        "areas": int(cpue["area"].nunique()),
        "drifts": int(cpue["drift_id"].nunique()),
        "species_count": len(species_columns(cpue)),
        "zero_catch_drifts": int((cpue[TOTAL_COL] == 0).sum()),
        "mean_total_cpue": float(cpue[TOTAL_COL].mean()) if cpue[TOTAL_COL].notna().any() else None,
    }
