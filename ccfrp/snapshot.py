from __future__ import annotations
from pathlib import Path
from datetime import datetime
import hashlib
import logging
import shutil

from ccfrp.config import SNAP_DIR, PROC_DIR


def sha256(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def same_output(a: Path, b: Path) -> bool:
    """True when two output files are byte-identical."""
    return sha256(Path(a)) == sha256(Path(b))


def snapshot(paths=None, snap_dir: Path = SNAP_DIR, stamp: str | None = None) -> Path:
    """
    Copy processed outputs into snap_dir/<timestamp>/ with a MANIFEST.csv
    (file, bytes, sha256). Defaults to every CSV in data/processed.
    """
    paths = sorted(Path(PROC_DIR).glob("*.csv")) if paths is None else [Path(p) for p in paths]
    if not paths:
        raise FileNotFoundError(f"Nothing to snapshot in {PROC_DIR}")

    ts = stamp or datetime.now().strftime("%Y-%m-%d_%H%M%S")
    out_dir = Path(snap_dir) / ts
    out_dir.mkdir(parents=True, exist_ok=True)

    manifest_lines = ["file,bytes,sha256"]
    for p in paths:
        dest = out_dir / p.name
        shutil.copy2(p, dest)
        manifest_lines.append(f"{p.name},{dest.stat().st_size},{sha256(dest)}")

    (out_dir / "MANIFEST.csv").write_text("\n".join(manifest_lines), encoding="utf-8")
    logging.info(f"Wrote snapshot -> {out_dir}")
    return out_dir


def main():
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    snapshot()


if __name__ == "__main__":
    main()
