# ccfrp/queries/filters.py
from __future__ import annotations
import logging
from typing import Iterable, Mapping, Optional
import pandas as pd

from ccfrp.config import AREA_NAMES, EXCLUDED_CELLS, MIN_DRIFT_HOURS

TRIP_KEEP = ["trip_id", "area", "month", "day", "year"]
DRIFT_KEEP = [
    "drift_id", "trip_id", "cell_trip_id", "grid_cell_id", "site",
    "drift_hours", "fish_caught", "angler_hours", "anglers", "excluded_comment",
]
# Drift attributes carried onto each catch record
CATCH_DRIFT_COLS = [
    "drift_id", "trip_id", "cell_trip_id", "grid_cell_id", "site",
    "drift_hours", "anglers", "excluded_comment",
]


def _count(audit: Optional[dict], key: str, n: int) -> None:
    if audit is not None:
        audit[key] = int(n)


# -------- trips --------
def clean_trips(
    trips: pd.DataFrame,
    area_names: Mapping[str, str] = AREA_NAMES,
    audit: Optional[dict] = None,
) -> pd.DataFrame:
    """
    Keep trips from monitored areas and swap the area code for its full name.
    Unknown codes are dropped, not raised.
    """
    out = trips[TRIP_KEEP].copy()
    codes = out["area"].astype("string").str.strip().str.upper()
    out["area"] = codes.map(dict(area_names)).astype("string")

    unknown = out["area"].isna()
    if unknown.any():
        labels = sorted(str(c) for c in codes[unknown].dropna().unique())
        logging.info(f"Dropped {int(unknown.sum()):,} trips outside monitored areas: {labels}")
    _count(audit, "trips_unknown_area", unknown.sum())
    return out[~unknown].reset_index(drop=True)


# -------- drift validity (shared by drift and catch filters) --------
def has_exclusion_comment(df: pd.DataFrame) -> pd.Series:
    if "excluded_comment" not in df.columns:
        return pd.Series(False, index=df.index)
    c = df["excluded_comment"].astype("string").str.strip()
    return (c.notna() & (c != "")).fillna(False).astype(bool)


def exclusion_reasons(
    df: pd.DataFrame,
    excluded_cells: Iterable[str] = EXCLUDED_CELLS,
    min_drift_hours: float = MIN_DRIFT_HOURS,
) -> pd.DataFrame:
    """
    One boolean column per protocol rule, True where the rule rejects the drift:
      - comment:       a non-empty exclusion comment was recorded
      - excluded_cell: the cell-trip ID is on the excluded list
      - short_drift:   drift time is not strictly above min_drift_hours
                       (missing drift time counts as short)
    """
    hours = pd.to_numeric(df["drift_hours"], errors="coerce").astype("float64")
    cells = df["cell_trip_id"].astype("string").isin(list(excluded_cells)).fillna(False).astype(bool)
    return pd.DataFrame(
        {
            "comment": has_exclusion_comment(df),
            "excluded_cell": cells,
            "short_drift": ~(hours > min_drift_hours),
        },
        index=df.index,
    )


def valid_drift_mask(
    df: pd.DataFrame,
    excluded_cells: Iterable[str] = EXCLUDED_CELLS,
    min_drift_hours: float = MIN_DRIFT_HOURS,
) -> pd.Series:
    """True for rows whose drift passes every exclusion rule."""
    return ~exclusion_reasons(df, excluded_cells, min_drift_hours).any(axis=1)


def drift_level_reasons(reasons: pd.DataFrame, drift_ids: pd.Series) -> pd.DataFrame:
    """
    Spread each rule across all sub-drift rows of a drift ID: a rule that
    rejects any one row rejects the whole drift.
    """
    if reasons.empty:
        return reasons
    return reasons.groupby(drift_ids.fillna("")).transform("any").astype(bool)


def _log_reasons(reasons: pd.DataFrame, what: str, audit: Optional[dict], prefix: str) -> None:
    for rule in reasons.columns:
        n = int(reasons[rule].sum())
        if n:
            logging.info(f"{what}: {n:,} rows rejected by rule '{rule}'")
        _count(audit, f"{prefix}_{rule}", n)


# -------- drifts --------
def clean_drifts(
    drifts: pd.DataFrame,
    trips: pd.DataFrame,
    excluded_cells: Iterable[str] = EXCLUDED_CELLS,
    min_drift_hours: float = MIN_DRIFT_HOURS,
    audit: Optional[dict] = None,
) -> pd.DataFrame:
    """
    Drifts belonging to clean trips that pass every exclusion rule.
    A drift ID is kept only when all of its sub-drift rows pass.
    Drifts with zero fish caught stay in; they carry effort.
    """
    out = drifts[DRIFT_KEEP].merge(trips[TRIP_KEEP], on="trip_id", how="inner")
    orphans = len(drifts) - len(out)
    if orphans:
        logging.info(f"Dropped {orphans:,} drifts whose trip is missing or outside monitored areas")
    _count(audit, "drifts_without_trip", orphans)

    reasons = drift_level_reasons(exclusion_reasons(out, excluded_cells, min_drift_hours), out["drift_id"])
    _log_reasons(reasons, "Drift filter", audit, "drifts")
    out = out[~reasons.any(axis=1)]
    return out.drop(columns="excluded_comment").reset_index(drop=True)


# -------- catch --------
def all_catch(
    catch: pd.DataFrame,
    drifts: pd.DataFrame,
    species: pd.DataFrame,
    audit: Optional[dict] = None,
) -> pd.DataFrame:
    """
    Every catch record with a known drift and a known species code, carrying
    the drift's attributes and the species common name. No protocol filters.
    """
    # Sub-drift rows repeat the drift ID; one row per drift keeps catch counts intact.
    per_drift = drifts[CATCH_DRIFT_COLS].drop_duplicates(subset=["drift_id"])
    out = catch.merge(per_drift, on="drift_id", how="inner")
    no_drift = len(catch) - len(out)
    if no_drift:
        logging.info(f"Dropped {no_drift:,} catch records with no matching drift")
    _count(audit, "catch_without_drift", no_drift)

    n = len(out)
    out = out.merge(species[["species_code", "common_name"]], on="species_code", how="inner")
    unknown = n - len(out)
    if unknown:
        logging.info(f"Dropped {unknown:,} catch records with an unknown species code")
    _count(audit, "catch_unknown_species", unknown)
    return out.reset_index(drop=True)


def catch_for_cpue(
    catch: pd.DataFrame,
    clean_drifts: pd.DataFrame,
    excluded_cells: Iterable[str] = EXCLUDED_CELLS,
    min_drift_hours: float = MIN_DRIFT_HOURS,
    audit: Optional[dict] = None,
) -> pd.DataFrame:
    """
    Catch records eligible for CPUE: the all-catch table passed through the
    same drift-validity rules as the drift filter, then limited to the drift
    IDs of the clean drift table. Validity is settled per drift ID by
    `clean_drifts`, so a drift is either in both numerator and denominator
    or in neither.
    """
    reasons = exclusion_reasons(catch, excluded_cells, min_drift_hours)
    _log_reasons(reasons, "Catch filter", audit, "catch")
    out = catch[~reasons.any(axis=1)]

    keep = out["drift_id"].isin(clean_drifts["drift_id"])
    n = int((~keep).sum())
    if n:
        logging.info(f"Catch filter: {n:,} rows from drifts outside the clean drift table")
    _count(audit, "catch_outside_clean_drifts", n)
    return out[keep].reset_index(drop=True)


# -------- simple reusable slicers --------
def apply_selection(
    df: pd.DataFrame,
    areas: list[str] | None = None,
    sites: list[str] | None = None,
    years: tuple[int, int] | None = None,
) -> pd.DataFrame:
    """Dashboard slicer; safe on frames that lack any of the columns."""
    f = df.copy()
    if areas and "area" in f.columns:
        f = f[f["area"].isin(areas)]
    if sites and "site" in f.columns:
        f = f[f["site"].isin(sites)]
    if years and "year" in f.columns:
        start, end = years
        f = f[(f["year"] >= start) & (f["year"] <= end)]
    return f
