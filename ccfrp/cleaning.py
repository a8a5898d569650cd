# ccfrp/cleaning.py
from __future__ import annotations
import logging
import pandas as pd

from ccfrp.config import (
    TRIP_COLUMNS,
    DRIFT_COLUMNS,
    OPTIONAL_DRIFT_COLUMNS,
    CATCH_COLUMNS,
    OPTIONAL_CATCH_COLUMNS,
    SPECIES_COLUMNS,
)
from ccfrp.validators.schema import (
    require_columns,
    validate_trips,
    validate_drifts,
    validate_catch,
    validate_species,
)


def standardize_headers(
    df: pd.DataFrame,
    columns: dict[str, str],
    optional: dict[str, str] | None = None,
    table: str = "table",
) -> pd.DataFrame:
    """
    Project a raw table to the columns the pipeline uses and rename them
    to internal names. Optional columns that are absent come back as all-NA.
    """
    require_columns(df, columns, table)
    optional = optional or {}
    present = {**columns, **{k: v for k, v in optional.items() if k in df.columns}}
    out = df[list(present)].rename(columns=present).copy()
    for raw, name in optional.items():
        if name not in out.columns:
            out[name] = pd.NA
    return out


def _strip(df: pd.DataFrame, cols) -> pd.DataFrame:
    for c in cols:
        if c in df.columns:
            df[c] = df[c].astype("string").str.strip().replace("", pd.NA)
    return df


def _numeric(df: pd.DataFrame, cols, integer: bool = False) -> pd.DataFrame:
    for c in cols:
        if c in df.columns:
            s = pd.to_numeric(df[c], errors="coerce")
            df[c] = s.astype("Int64") if integer else s.astype("float64")
    return df


def prepare_trips(raw: pd.DataFrame) -> pd.DataFrame:
    out = standardize_headers(raw, TRIP_COLUMNS, table="trips")
    out = _strip(out, ["trip_id", "area"])
    validate_trips(out)
    out = _numeric(out, ["month", "day", "year"], integer=True)
    out["area"] = out["area"].str.upper()
    return out


def prepare_drifts(raw: pd.DataFrame) -> pd.DataFrame:
    out = standardize_headers(raw, DRIFT_COLUMNS, OPTIONAL_DRIFT_COLUMNS, table="drifts")
    out = _strip(out, ["drift_id", "trip_id", "cell_trip_id", "grid_cell_id", "site", "excluded_comment"])
    validate_drifts(out)
    out = _numeric(out, ["drift_hours", "angler_hours"])
    out = _numeric(out, ["fish_caught", "anglers"], integer=True)
    out["site"] = out["site"].str.upper()
    return out


def prepare_catch(raw: pd.DataFrame) -> pd.DataFrame:
    out = standardize_headers(raw, CATCH_COLUMNS, OPTIONAL_CATCH_COLUMNS, table="catch")
    out = _strip(out, ["species_code", "drift_id", "station", "gear"])
    validate_catch(out)
    out = _numeric(out, ["length_cm"])
    out["species_code"] = out["species_code"].str.upper()
    return out


def prepare_species(raw: pd.DataFrame) -> pd.DataFrame:
    out = standardize_headers(raw, SPECIES_COLUMNS, table="species")
    out = _strip(out, ["species_code", "common_name"])
    out["species_code"] = out["species_code"].str.upper()
    validate_species(out)

    nameless = out["common_name"].isna()
    if nameless.any():
        logging.warning(f"Ignoring {int(nameless.sum())} species codes without a common name")
    out = out[~nameless & out["species_code"].notna()]
    return out.drop_duplicates(subset=["species_code"]).reset_index(drop=True)
