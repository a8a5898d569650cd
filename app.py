# app.py
from __future__ import annotations

import streamlit as st
from pathlib import Path
import plotly.express as px

from ccfrp.config import RAW_DIR, OUTPUT_LABELS
from ccfrp.etl.cpue_transform import run_from_files
from ccfrp.queries.filters import apply_selection
from ccfrp.queries.cpue import to_long, total_only
from ccfrp.queries.metrics import angler_comparison, catch_by_anglers, gear_summary, species_totals, summarize
from ccfrp.viz.charts import box_cpue_by_anglers, scatter_catch_by_anglers, bar_species_cpue, bar_gear_mix
from ccfrp.debug import filter_doctor, cpue_doctor

# -----------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# -----------------------------------------------------------------------------
st.set_page_config(page_title="CCFRP Catch per Unit Effort", layout="wide")

# -----------------------------------------------------------------------------
# Data loading
# -----------------------------------------------------------------------------
@st.cache_data(show_spinner=False)
def load_results(raw_dir: Path) -> dict:
    """Run the CPUE pipeline over the raw exports (nothing is written)."""
    return run_from_files(raw_dir, outdir=None)


try:
    results = load_results(RAW_DIR)
except (FileNotFoundError, ValueError) as e:
    st.error(f"Could not build the CPUE table from {RAW_DIR}: {e}")
    st.stop()

cpue = results["cpue"]
effort = results["effort"]

st.title("CCFRP Catch per Unit Effort")

if cpue.empty:
    st.warning("No drifts survived the protocol filters.")
    st.stop()

# -----------------------------------------------------------------------------
# Sidebar filters (shared)
# -----------------------------------------------------------------------------
with st.sidebar:
    st.header("Filters")

    areas_all = sorted(cpue["area"].dropna().unique().tolist())
    sites_all = sorted(cpue["site"].dropna().unique().tolist())
    years_all = sorted(int(y) for y in cpue["year"].dropna().unique())

    sb_areas = st.multiselect("Areas", areas_all, default=[])
    sb_sites = st.multiselect("Site (MPA/REF)", sites_all, default=[])
    if years_all and years_all[0] < years_all[-1]:
        sb_years = st.slider("Year range", min_value=years_all[0], max_value=years_all[-1],
                             value=(years_all[0], years_all[-1]))
    else:
        sb_years = None

f_cpue = apply_selection(cpue, sb_areas, sb_sites, sb_years)
f_effort = apply_selection(effort, sb_areas, sb_sites, sb_years)
f_total = total_only(to_long(f_cpue))

# -----------------------------------------------------------------------------
# Tabs
# -----------------------------------------------------------------------------
tabs = st.tabs(["Anglers", "Species", "Gear", "Report"])

with tabs[0]:
    st.subheader("Catch and CPUE by Number of Anglers")

    s = summarize(f_cpue)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Drifts", f"{s.get('drifts', 0):,}")
    c2.metric("Species", f"{s.get('species_count', 0):,}")
    c3.metric("Zero-catch drifts", f"{s.get('zero_catch_drifts', 0):,}")
    mean_cpue = s.get("mean_total_cpue")
    c4.metric("Mean Total CPUE", "—" if mean_cpue is None else f"{mean_cpue:.2f}")

    st.altair_chart(box_cpue_by_anglers(f_total), use_container_width=True)

    comp = angler_comparison(f_total, by=("site",))
    if not comp.empty:
        line = px.line(
            comp,
            x="anglers",
            y="mean_cpue",
            color="site",
            markers=True,
            title="Mean Total CPUE by Anglers Fishing",
            labels={"anglers": "Anglers fishing", "mean_cpue": "Mean CPUE (fish / angler-hr)"},
        )
        st.plotly_chart(line, use_container_width=True)

    st.altair_chart(scatter_catch_by_anglers(f_effort), use_container_width=True)
    st.dataframe(catch_by_anglers(f_effort), use_container_width=True, hide_index=True)

with tabs[1]:
    st.subheader("Species CPUE")
    sp = species_totals(f_cpue)
    st.altair_chart(bar_species_cpue(sp), use_container_width=True)
    st.dataframe(sp, use_container_width=True, hide_index=True)

with tabs[2]:
    st.subheader("Gear Types (all catch, no protocol filters)")
    gear = gear_summary(apply_selection(results["all_catch"], sites=sb_sites))
    if gear.empty:
        st.info("The catch table has no gear type column.")
    else:
        st.altair_chart(bar_gear_mix(gear), use_container_width=True)
        st.dataframe(gear, use_container_width=True, hide_index=True)

with tabs[3]:
    st.subheader("Report")
    st.dataframe(f_cpue, use_container_width=True, hide_index=True)
    st.download_button(
        "Download CPUE table (CSV)",
        data=f_cpue.rename(columns=OUTPUT_LABELS).to_csv(index=False).encode("utf-8"),
        file_name="ccfrp_cpue_selection.csv",
        mime="text/csv",
    )
    filter_doctor(results["audit"])
    cpue_doctor(cpue, effort, results["cpue_catch"])
