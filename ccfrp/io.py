from __future__ import annotations
import logging
from pathlib import Path
import pandas as pd

from ccfrp.config import (
    RAW_DIR,
    PROC_DIR,
    SOURCE_FILES,
    OUTPUT_FILE,
    OUTPUT_LABELS,
    CPUE_KEYS,
    TOTAL_COL,
)

# Raw tables are read as text; cleaning does the type coercion.
READERS = {
    ".csv": lambda p: pd.read_csv(p, dtype=str),
    ".txt": lambda p: pd.read_csv(p, dtype=str),
}


def read_table(path: str | Path) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    reader = READERS.get(path.suffix.lower())
    if reader is None:
        raise ValueError(f"Unsupported file type for {path.name}; expected one of {sorted(READERS)}")
    try:
        df = reader(path)
    except pd.errors.ParserError as e:
        raise ValueError(f"Could not parse {path}: {e}") from e
    except pd.errors.EmptyDataError as e:
        raise ValueError(f"Input file is empty: {path}") from e
    # Excel exports sometimes pad headers
    df.columns = [str(c).strip() for c in df.columns]
    logging.debug(f"Read {path.name}: {df.shape[0]:,} rows × {df.shape[1]} cols")
    return df


def source_paths(data_dir: str | Path = RAW_DIR, files: dict[str, str] | None = None) -> dict[str, Path]:
    base = Path(data_dir)
    names = {**SOURCE_FILES, **(files or {})}
    return {table: base / name for table, name in names.items()}


def load_sources(data_dir: str | Path = RAW_DIR, files: dict[str, str] | None = None) -> dict[str, pd.DataFrame]:
    """
    Read the four source tables (trips, drifts, catch, species).
    Every file is checked before any is parsed so a missing table fails fast.
    """
    paths = source_paths(data_dir, files)
    missing = [str(p) for p in paths.values() if not p.exists()]
    if missing:
        raise FileNotFoundError(f"Input files not found: {missing}")
    return {table: read_table(p) for table, p in paths.items()}


def read_id_list(path: str | Path) -> frozenset[str]:
    """Read a one-column CSV of identifiers (e.g. excluded cell-trip IDs)."""
    df = read_table(path)
    if df.shape[1] == 0:
        raise ValueError(f"No columns found in {path}")
    ids = df.iloc[:, 0].dropna().astype(str).str.strip()
    return frozenset(ids[ids != ""])


def write_cpue(cpue: pd.DataFrame, outdir: str | Path = PROC_DIR, name: str = OUTPUT_FILE) -> Path:
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / name
    cpue.rename(columns=OUTPUT_LABELS).to_csv(path, index=False)
    logging.info(f"Wrote CPUE table -> {path} ({len(cpue):,} rows)")
    return path


def read_cpue(path: str | Path = PROC_DIR / OUTPUT_FILE) -> pd.DataFrame:
    """Read a written CPUE table back into internal column names."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"CPUE table not found: {path}")
    df = pd.read_csv(path, dtype={"Drift ID": "string", "Grid Cell ID": "string", "Area": "string", "Site": "string"})
    df = df.rename(columns={v: k for k, v in OUTPUT_LABELS.items()})
    missing = (set(CPUE_KEYS) | {TOTAL_COL}) - set(df.columns)
    if missing:
        raise ValueError(f"CPUE table missing expected columns: {sorted(missing)}")
    for c in ("year", "anglers", "fish_caught"):
        df[c] = pd.to_numeric(df[c], errors="coerce").astype("Int64")
    return df
