from .filters import clean_trips, clean_drifts, all_catch, catch_for_cpue, valid_drift_mask, exclusion_reasons, drift_level_reasons
from .effort import effort_by_drift
from .cpue import species_pivot, cpue_table, to_long, total_only, species_columns

__all__ = [
    "clean_trips",
    "clean_drifts",
    "all_catch",
    "catch_for_cpue",
    "valid_drift_mask",
    "exclusion_reasons",
    "drift_level_reasons",
    "effort_by_drift",
    "species_pivot",
    "cpue_table",
    "to_long",
    "total_only",
    "species_columns",
]
from .metrics import angler_comparison, catch_by_anglers, gear_summary, species_totals
