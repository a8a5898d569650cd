# ccfrp/viz/charts.py
from __future__ import annotations
import altair as alt
import pandas as pd


def _no_data() -> alt.Chart:
    return alt.Chart(pd.DataFrame({"note": ["No data"]})).mark_text(size=16).encode(text="note")


def box_cpue_by_anglers(total_long: pd.DataFrame, color: str | None = "site") -> alt.Chart:
    """Distribution of Total CPUE per drift by number of anglers fishing."""
    df = total_long.dropna(subset=["cpue", "anglers"])
    if df.empty:
        return _no_data()
    enc = dict(
        x=alt.X("anglers:O", title="Anglers fishing"),
        y=alt.Y("cpue:Q", title="CPUE (fish / angler-hr)"),
    )
    if color and color in df.columns:
        enc["color"] = alt.Color(f"{color}:N", title=color.title())
        enc["xOffset"] = f"{color}:N"
    return (
        alt.Chart(df)
        .mark_boxplot(extent="min-max")
        .encode(**enc)
        .properties(height=300, title="Total CPUE by Number of Anglers")
    )


def scatter_catch_by_anglers(effort: pd.DataFrame) -> alt.Chart:
    """Fish caught per drift against anglers fishing, with the per-count mean."""
    df = effort.dropna(subset=["anglers", "fish_caught"])
    if df.empty:
        return _no_data()
    df = df.assign(anglers=df["anglers"].astype(float), fish_caught=df["fish_caught"].astype(float))
    points = (
        alt.Chart(df)
        .mark_circle(opacity=0.35, size=40)
        .encode(
            x=alt.X("anglers:Q", title="Anglers fishing", scale=alt.Scale(zero=False)),
            y=alt.Y("fish_caught:Q", title="Fish caught per drift"),
            tooltip=["area:N", "site:N", "year:O", "drift_id:N", "fish_caught:Q", "angler_hours:Q"],
        )
    )
    means = (
        alt.Chart(df)
        .mark_line(point=True, color="black")
        .encode(x="anglers:Q", y=alt.Y("mean(fish_caught):Q"))
    )
    return (points + means).properties(height=300, title="Catch by Number of Anglers").interactive()


def bar_species_cpue(species_means: pd.DataFrame, top_n: int = 12) -> alt.Chart:
    """Mean CPUE per species (expects species_totals output)."""
    if species_means.empty:
        return _no_data()
    df = species_means.head(top_n)
    return (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("mean_cpue:Q", title="Mean CPUE (fish / angler-hr)"),
            y=alt.Y("species:N", sort="-x", title=None),
            tooltip=["species:N", alt.Tooltip("mean_cpue:Q", title="Mean CPUE", format=".3f")],
        )
        .properties(height=max(120, 22 * len(df)), title=f"Top {len(df)} Species by Mean CPUE")
    )


def bar_gear_mix(gear: pd.DataFrame) -> alt.Chart:
    """Species share of catch within each gear type (expects gear_summary output)."""
    if gear.empty:
        return _no_data()
    return (
        alt.Chart(gear)
        .mark_bar()
        .encode(
            x=alt.X("sum(share):Q", title="Share of catch", axis=alt.Axis(format="%")),
            y=alt.Y("gear:N", title="Gear type"),
            color=alt.Color("common_name:N", legend=alt.Legend(title="Species")),
            tooltip=[
                "gear:N",
                "common_name:N",
                alt.Tooltip("n:Q", title="Fish"),
                alt.Tooltip("share:Q", title="Share", format=".1%"),
            ],
        )
        .properties(height=200, title="Species Mix by Gear Type")
    )
