from __future__ import annotations
import logging
import pandas as pd

from ccfrp.config import EFFORT_KEYS


def effort_by_drift(drifts: pd.DataFrame) -> pd.DataFrame:
    """
    Total angler-hours per drift.

    Grouped by (area, site, year, drift_id, anglers, fish_caught). The keys
    already identify a drift, so this is a per-drift passthrough except that
    repeated rows for the same drift (sub-drift entries) are summed together.
    A drift whose angler-hours are all missing keeps NaN rather than 0.
    """
    if drifts.empty:
        return pd.DataFrame(columns=[*EFFORT_KEYS, "angler_hours"])

    effort = (
        drifts.groupby(EFFORT_KEYS, dropna=False, sort=True)["angler_hours"]
        .sum(min_count=1)
        .reset_index()
    )
    collapsed = len(drifts) - len(effort)
    if collapsed:
        logging.info(f"Effort: merged {collapsed:,} repeated drift rows into their drift totals")
    return effort
