# ccfrp/etl/cpue_transform.py
"""
ETL for CCFRP hook-and-line survey data: trips, drifts, catches and species
codes in, one CPUE table (fish per angler-hour, per drift and species) out.

Usage examples:
  # 1) Default layout (data/raw/Trip.csv, Drift.csv, Catch.csv, Species_Codes.csv):
  python -m ccfrp.etl.cpue_transform

  # 2) Explicit folders and a replacement excluded-cell list:
  python -m ccfrp.etl.cpue_transform \
    --data-dir data/raw \
    --outdir data/processed \
    --excluded-cells data/raw/excluded_cells.csv

Notes:
- Output is written only after every stage succeeds:
    data/processed/ccfrp_cpue.csv
- Missing or malformed inputs abort the run with a non-zero exit code.
"""

from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import Iterable, Mapping

import pandas as pd

from ccfrp.config import (
    RAW_DIR,
    PROC_DIR,
    AREA_NAMES,
    EXCLUDED_CELLS,
    MIN_DRIFT_HOURS,
    LOG_FORMAT,
)
from ccfrp.cleaning import prepare_trips, prepare_drifts, prepare_catch, prepare_species
from ccfrp.io import load_sources, read_id_list, write_cpue
from ccfrp.queries.filters import clean_trips, clean_drifts, all_catch, catch_for_cpue
from ccfrp.queries.effort import effort_by_drift
from ccfrp.queries.cpue import cpue_table
from ccfrp.queries.metrics import summarize


def _setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )


def run_pipeline(
    sources: Mapping[str, pd.DataFrame],
    area_names: Mapping[str, str] = AREA_NAMES,
    excluded_cells: Iterable[str] = EXCLUDED_CELLS,
    min_drift_hours: float = MIN_DRIFT_HOURS,
) -> dict:
    """
    Run every stage on raw source tables (keys: trips, drifts, catch, species).

    Returns a dict with the intermediate frames (trips, drifts, effort,
    all_catch, cpue_catch), the final `cpue` table and an `audit` dict of
    row counts per stage and per exclusion rule.
    """
    audit: dict[str, int] = {}
    excluded_cells = frozenset(excluded_cells)

    logging.info("Normalizing column types…")
    trips_raw = prepare_trips(sources["trips"])
    drifts_raw = prepare_drifts(sources["drifts"])
    catch_raw = prepare_catch(sources["catch"])
    species = prepare_species(sources["species"])
    audit.update(
        trips_in=len(trips_raw),
        drifts_in=len(drifts_raw),
        catch_in=len(catch_raw),
        species_codes=len(species),
    )

    logging.info("Filtering trips and drifts…")
    trips = clean_trips(trips_raw, area_names, audit=audit)
    drifts = clean_drifts(drifts_raw, trips, excluded_cells, min_drift_hours, audit=audit)
    audit.update(trips_kept=len(trips), drifts_kept=len(drifts))

    logging.info("Aggregating effort…")
    effort = effort_by_drift(drifts)
    audit["effort_rows"] = len(effort)

    logging.info("Filtering catch…")
    catch_all = all_catch(catch_raw, drifts_raw, species, audit=audit)
    catch_cpue = catch_for_cpue(catch_all, drifts, excluded_cells, min_drift_hours, audit=audit)
    audit.update(catch_all=len(catch_all), catch_cpue=len(catch_cpue))

    logging.info("Computing CPUE…")
    cpue = cpue_table(catch_cpue, effort, drifts)
    audit["cpue_rows"] = len(cpue)
    audit["zero_effort_drifts"] = int((~(cpue["angler_hours"] > 0)).sum())

    return {
        "trips": trips,
        "drifts": drifts,
        "effort": effort,
        "all_catch": catch_all,
        "cpue_catch": catch_cpue,
        "cpue": cpue,
        "audit": audit,
    }


def run_from_files(
    data_dir: str | Path = RAW_DIR,
    outdir: str | Path | None = PROC_DIR,
    excluded_cells: Iterable[str] = EXCLUDED_CELLS,
    min_drift_hours: float = MIN_DRIFT_HOURS,
) -> dict:
    """Load sources from `data_dir`, run the pipeline, write the CPUE table to `outdir` (if given)."""
    logging.info(f"Reading source tables from {data_dir}…")
    sources = load_sources(data_dir)
    result = run_pipeline(sources, excluded_cells=excluded_cells, min_drift_hours=min_drift_hours)
    if outdir is not None:
        result["path"] = write_cpue(result["cpue"], outdir)
    return result


def main(argv=None):
    parser = argparse.ArgumentParser(description="ETL: CCFRP catch per unit effort by drift.")
    parser.add_argument("--data-dir", type=Path, default=RAW_DIR, help="Folder holding the four source CSVs")
    parser.add_argument("--outdir", type=Path, default=PROC_DIR, help="Destination directory for the CPUE CSV")
    parser.add_argument("--excluded-cells", type=Path, help="One-column CSV of ID-Cell per Trip values to exclude (replaces the built-in list)")
    parser.add_argument("--min-drift-minutes", type=float, default=MIN_DRIFT_HOURS * 60,
                        help="Drifts must last strictly longer than this (default: 2)")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    try:
        cells = read_id_list(args.excluded_cells) if args.excluded_cells else EXCLUDED_CELLS
        logging.info(f"Excluding {len(cells)} cell-trip IDs; minimum drift {args.min_drift_minutes:g} min")
        result = run_from_files(
            args.data_dir,
            args.outdir,
            excluded_cells=cells,
            min_drift_hours=args.min_drift_minutes / 60,
        )
    except (FileNotFoundError, ValueError) as e:
        logging.error(str(e))
        raise SystemExit(1)

    logging.info(f"[Audit] {result['audit']}")
    logging.info(f"[Summary] {summarize(result['cpue'])} -> {result['path']}")


if __name__ == "__main__":
    main()
