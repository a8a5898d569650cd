from __future__ import annotations
from typing import Iterable
import pandas as pd


def require_columns(df: pd.DataFrame, required: Iterable[str], table: str = "table") -> None:
    miss = set(required) - set(df.columns)
    if miss:
        raise ValueError(f"{table}: missing expected columns: {sorted(miss)}")


def _check_numeric(df: pd.DataFrame, cols: Iterable[str], table: str) -> None:
    for c in cols:
        if c not in df.columns:
            continue
        raw = df[c].dropna()
        coerced = pd.to_numeric(raw, errors="coerce")
        bad = raw[coerced.isna()]
        if not bad.empty:
            raise ValueError(f"{table}: non-numeric values in {c}: {list(bad.unique())[:5]}")
        if (coerced < 0).any():
            raise ValueError(f"{table}: negative values in {c}")


def _check_whole(df: pd.DataFrame, cols: Iterable[str], table: str) -> None:
    for c in cols:
        if c not in df.columns:
            continue
        s = pd.to_numeric(df[c], errors="coerce").dropna()
        if (s % 1 != 0).any():
            raise ValueError(f"{table}: expected whole numbers in {c}")


def validate_trips(df: pd.DataFrame) -> None:
    _check_numeric(df, ["month", "day", "year"], "trips")
    _check_whole(df, ["month", "day", "year"], "trips")
    years = pd.to_numeric(df["year"], errors="coerce").dropna()
    if not years.between(1900, 2100).all():
        bad = list(years[~years.between(1900, 2100)].unique())
        raise ValueError(f"trips: out-of-range years: {bad}")


def validate_drifts(df: pd.DataFrame) -> None:
    _check_numeric(df, ["drift_hours", "fish_caught", "angler_hours", "anglers"], "drifts")
    _check_whole(df, ["fish_caught", "anglers"], "drifts")


def validate_catch(df: pd.DataFrame) -> None:
    _check_numeric(df, ["length_cm"], "catch")


def validate_species(df: pd.DataFrame) -> None:
    """A species code may repeat only if every row agrees on the common name."""
    names = df.dropna(subset=["species_code"]).groupby("species_code")["common_name"].nunique()
    conflicts = names[names > 1].index.tolist()
    if conflicts:
        raise ValueError(f"species: codes mapped to more than one common name: {conflicts}")
