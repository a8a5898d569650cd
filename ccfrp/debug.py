# ccfrp/debug.py
from __future__ import annotations
import pandas as pd
import streamlit as st

from ccfrp.config import TOTAL_COL
from ccfrp.queries.metrics import total_consistency


def audit_frame(audit: dict) -> pd.DataFrame:
    """Audit counts as a two-column table, in pipeline order."""
    return pd.DataFrame({"step": list(audit), "rows": [int(v) for v in audit.values()]})


def filter_doctor(audit: dict):
    with st.expander("🩺 Debug: filter audit"):
        st.caption("Rows in and out of each stage, and rows rejected per exclusion rule.")
        st.dataframe(audit_frame(audit), use_container_width=True, hide_index=True)


def cpue_doctor(cpue: pd.DataFrame, effort: pd.DataFrame, cpue_catch: pd.DataFrame):
    st.markdown("### 🧪 CPUE Doctor")
    st.caption("Sanity checks between catch, effort and the CPUE table.")

    c1, c2, c3 = st.columns(3)
    with c1:
        st.write("Drifts (effort / CPUE)", len(effort), "/", len(cpue))
    with c2:
        st.write("Zero-catch drifts:", int((cpue[TOTAL_COL] == 0).sum()))
    with c3:
        st.write("Drifts without effort:", int(cpue[TOTAL_COL].isna().sum()))

    # 1) every drift in the catch numerator has an effort row
    orphan = sorted(set(cpue_catch["drift_id"]) - set(effort["drift_id"]))
    if orphan:
        st.error(f"⚠️ {len(orphan)} catch drifts have no effort row.")
        st.write(orphan[:20])
    else:
        st.write("- Catch drifts ⊆ effort drifts: **ok**")

    # 2) Total × hours == sum of species counts
    ok = total_consistency(cpue)
    if ok.all():
        st.write("- Total equals the sum of species counts: **ok**")
    else:
        st.error(f"⚠️ Total does not match species counts on {int((~ok).sum())} rows.")
        st.dataframe(cpue.loc[~ok].head(20), use_container_width=True)
