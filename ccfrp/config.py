from pathlib import Path

# Root-relative data directories
DATA_DIR = Path("data")
RAW_DIR = DATA_DIR / "raw"
PROC_DIR = DATA_DIR / "processed"
SNAP_DIR = DATA_DIR / "snapshots"

# Source tables as exported from the CCFRP database
SOURCE_FILES = {
    "trips": "Trip.csv",
    "drifts": "Drift.csv",
    "catch": "Catch.csv",
    "species": "Species_Codes.csv",
}

OUTPUT_FILE = "ccfrp_cpue.csv"

# Raw header -> internal column name. Raw headers are the wire format.
TRIP_COLUMNS = {
    "Trip ID": "trip_id",
    "Area": "area",
    "Month": "month",
    "Day": "day",
    "Year Automatic": "year",
}

DRIFT_COLUMNS = {
    "Drift ID": "drift_id",
    "Trip ID": "trip_id",
    "ID-Cell per Trip": "cell_trip_id",
    "Grid Cell ID": "grid_cell_id",
    "Site (MPA/REF)": "site",
    "Drift Time: Hrs": "drift_hours",
    "Total Fishes Caught": "fish_caught",
    "Total Angler Hrs": "angler_hours",
    "Total # Anglers Fishing": "anglers",
}
OPTIONAL_DRIFT_COLUMNS = {"Excluded Drift Comment": "excluded_comment"}

CATCH_COLUMNS = {
    "Species Code": "species_code",
    "Drift ID": "drift_id",
    "Station #": "station",
    "Length (cm)": "length_cm",
}
OPTIONAL_CATCH_COLUMNS = {"Gear Type": "gear"}

SPECIES_COLUMNS = {
    "Species Code": "species_code",
    "Common Name": "common_name",
}

# Monitored areas. Trips from any other area code are dropped.
AREA_NAMES = {
    "AI": "Anacapa Island",
    "AN": "Ano Nuevo",
    "BH": "Bodega Head",
    "BL": "Point Buchon",
    "CM": "Cape Mendocino",
    "CP": "Carrington Point",
    "FN": "Farallon Islands",
    "LB": "Laguna Beach",
    "LJ": "South La Jolla",
    "PB": "Piedras Blancas",
    "PC": "Point Conception",
    "PL": "Point Lobos",
    "SP": "Stewarts Point",
    "SW": "Swamis",
    "TD": "Trinidad",
    "TM": "Ten Mile",
}

# Placeholder ID-Cell per Trip list in the shape of the survey IDs; these are
# not the protocol list. Replace it here or pass a file with --excluded-cells.
EXCLUDED_CELLS = frozenset({
    "AIM0107081901", "AIM0307081902", "AIR0207082001",
    "ANM0107070901", "ANM0407071001", "ANR0207070902",
    "BHM0208062201", "BHR0308062202", "BHR0508070601",
    "BLM0107080301", "BLM0407080302", "BLR0307090501",
    "CMM0217080801", "CMR0417080802",
    "CPM0109091101", "CPR0209091102",
    "FNM0118071401", "FNR0318071402",
    "LBM0219072801", "LBR0119072802",
    "LJM0319082401", "LJR0219082402",
    "PBM0107082801", "PBR0307082802", "PBR0407092001",
    "PLM0207071701", "PLM0507071702", "PLR0107081601",
    "SPM0117091201", "SPR0217091202",
    "SWM0119081001", "TDM0217072201", "TMR0117080401",
})

# Drifts must last strictly longer than two minutes.
MIN_DRIFT_HOURS = 2 / 60

# Internal column -> output header
OUTPUT_LABELS = {
    "area": "Area",
    "site": "Site",
    "year": "Year",
    "drift_id": "Drift ID",
    "anglers": "Total Anglers",
    "fish_caught": "Total Fishes Caught",
    "angler_hours": "Total Angler Hours",
    "grid_cell_id": "Grid Cell ID",
}

EFFORT_KEYS = ["area", "site", "year", "drift_id", "anglers", "fish_caught"]
CPUE_KEYS = [*EFFORT_KEYS, "angler_hours", "grid_cell_id"]
TOTAL_COL = "Total"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
