# ccfrp/queries/cpue.py
"""
Catch per unit effort (fish per angler-hour) by drift and species.

The wide CPUE table has the key columns in CPUE_KEYS, one column per species
common name and a Total column. Species columns are found by name (anything
that is not a key or Total), never by position.
"""
from __future__ import annotations
import logging
import pandas as pd

from ccfrp.config import CPUE_KEYS, TOTAL_COL

PIVOT_KEYS = ["drift_id", "grid_cell_id"]
_RESERVED = set(CPUE_KEYS) | {TOTAL_COL}


def species_columns(df: pd.DataFrame) -> list[str]:
    return [c for c in df.columns if c not in _RESERVED]


def species_pivot(catch: pd.DataFrame) -> pd.DataFrame:
    """
    Count catch records per (drift_id, grid_cell_id) and species common name.
    Species a drift never caught get an explicit 0.
    """
    if catch.empty:
        return pd.DataFrame(columns=PIVOT_KEYS)

    counts = catch.groupby([*PIVOT_KEYS, "common_name"], dropna=False).size()
    pivot = counts.unstack("common_name", fill_value=0)
    pivot.columns = [str(c) for c in pivot.columns]

    clashes = [c for c in pivot.columns if c in _RESERVED]
    if clashes:
        logging.warning(f"Species names clash with table columns, suffixing: {clashes}")
        pivot = pivot.rename(columns={c: f"{c} (species)" for c in clashes})

    return pivot.reset_index()


def cpue_table(
    catch: pd.DataFrame,
    effort: pd.DataFrame,
    drifts: pd.DataFrame | None = None,
) -> pd.DataFrame:
    """
    One row per effort row (so per drift), one CPUE column per species seen in
    `catch`, plus Total.

    Steps: pivot catch counts, left-join effort onto them (drifts that caught
    nothing keep their row), fill absent counts with 0, sum counts into Total,
    then divide counts and Total by angler-hours.

    Drifts with zero or missing angler-hours get NaN CPUE; the rows are kept.
    If `drifts` is given, it supplies the grid cell for drifts with no catch.
    """
    pivot = species_pivot(catch)
    species = species_columns(pivot)

    out = effort.merge(pivot, on="drift_id", how="left")
    if species:
        out[species] = out[species].fillna(0)
        out[TOTAL_COL] = out[species].sum(axis=1)
    else:
        out[TOTAL_COL] = 0.0

    if drifts is not None and not drifts.empty:
        cells = drifts.drop_duplicates(subset=["drift_id"]).set_index("drift_id")["grid_cell_id"]
        out["grid_cell_id"] = out["grid_cell_id"].fillna(out["drift_id"].map(cells))

    hours = out["angler_hours"].where(out["angler_hours"] > 0)
    no_effort = int(hours.isna().sum())
    if no_effort:
        logging.warning(f"{no_effort:,} drifts have no positive angler-hours; their CPUE is NaN")

    values = [*species, TOTAL_COL]
    out[values] = out[values].astype("float64").div(hours, axis=0)
    return out[[*CPUE_KEYS, *species, TOTAL_COL]].reset_index(drop=True)


def to_long(cpue: pd.DataFrame) -> pd.DataFrame:
    """Wide CPUE table -> one row per drift and species (Total included)."""
    ids = [c for c in CPUE_KEYS if c in cpue.columns]
    return cpue.melt(
        id_vars=ids,
        value_vars=[c for c in cpue.columns if c not in ids],
        var_name="species",
        value_name="cpue",
    )


def total_only(long: pd.DataFrame) -> pd.DataFrame:
    return long[long["species"] == TOTAL_COL].reset_index(drop=True)
