from pathlib import Path
import pandas as pd
import pytest

from ccfrp.config import SOURCE_FILES

TWO_MIN = repr(2 / 60)
JUST_OVER = repr(2.01 / 60)


def _frame(header: list[str], rows: list[list]) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=header).astype(object)


@pytest.fixture
def raw_trips() -> pd.DataFrame:
    return _frame(
        ["Trip ID", "Area", "Month", "Day", "Year Automatic", "Vessel"],
        [
            ["T1", "BL", "7", "1", "2019", "Patriot"],
            ["T2", "AN", "7", "9", "2020", "Huli Cat"],
            ["T3", "XX", "8", "2", "2020", "Huli Cat"],
        ],
    )


@pytest.fixture
def raw_drifts() -> pd.DataFrame:
    header = [
        "Drift ID", "Trip ID", "ID-Cell per Trip", "Grid Cell ID", "Site (MPA/REF)",
        "Drift Time: Hrs", "Total Fishes Caught", "Total Angler Hrs",
        "Total # Anglers Fishing", "Excluded Drift Comment",
    ]
    return _frame(
        header,
        [
            # two sub-drift rows, 4.0 angler-hours in total
            ["D1", "T1", "BLM0119070101", "BL01", "MPA", "0.25", "2", "2.0", "8", None],
            ["D1", "T1", "BLM0119070101", "BL01", "MPA", "0.25", "2", "2.0", "8", None],
            # nothing caught
            ["D2", "T1", "BLR0219070101", "BL02", "REF", "0.3", "0", "3.0", "10", ""],
            ["D3", "T1", "BLM0319070101", "BL03", "MPA", "0.25", "1", "2.0", "8", "Drift outside cell"],
            # on the excluded cell list
            ["D4", "T2", "ANM0107070901", "AN01", "MPA", "0.25", "1", "2.0", "8", None],
            ["D5", "T2", "ANM0220070901", "AN02", "MPA", TWO_MIN, "1", "0.2", "6", None],
            ["D6", "T2", "ANM0320070901", "AN03", "MPA", JUST_OVER, "1", "1.0", "6", None],
            # trip in an unmonitored area
            ["D7", "T3", "XXM0120080201", "XX01", "REF", "0.25", "1", "2.0", "8", None],
        ],
    )


@pytest.fixture
def raw_catch() -> pd.DataFrame:
    return _frame(
        ["Species Code", "Drift ID", "Station #", "Length (cm)", "Gear Type"],
        [
            ["KLB", "D1", "1", "31", "Bait"],
            ["KLB", "D1", "4", "28", "Lure"],
            ["ZZZ", "D1", "2", "12", "Lure"],
            ["BLU", "D3", "3", "25", "Bait"],
            ["BLU", "D4", "1", "27", "Lure"],
            ["KLB", "D5", "2", "33", "Lure"],
            ["BLU", "D6", "5", "24", "Bait"],
            ["KLB", "D7", "1", "30", "Bait"],
            ["KLB", "D99", "1", "30", "Bait"],
        ],
    )


@pytest.fixture
def raw_species() -> pd.DataFrame:
    return _frame(
        ["Species Code", "Common Name"],
        [
            ["KLB", "Kelp Bass"],
            ["BLU", "Blue Rockfish"],
            ["VER", "Vermilion Rockfish"],
        ],
    )


@pytest.fixture
def raw_sources(raw_trips, raw_drifts, raw_catch, raw_species) -> dict:
    return {"trips": raw_trips, "drifts": raw_drifts, "catch": raw_catch, "species": raw_species}


@pytest.fixture
def source_dir(tmp_path: Path, raw_sources) -> Path:
    d = tmp_path / "raw"
    d.mkdir()
    for table, name in SOURCE_FILES.items():
        raw_sources[table].to_csv(d / name, index=False)
    return d


@pytest.fixture
def prepared(raw_sources) -> dict:
    from ccfrp.cleaning import prepare_trips, prepare_drifts, prepare_catch, prepare_species

    return {
        "trips": prepare_trips(raw_sources["trips"]),
        "drifts": prepare_drifts(raw_sources["drifts"]),
        "catch": prepare_catch(raw_sources["catch"]),
        "species": prepare_species(raw_sources["species"]),
    }
