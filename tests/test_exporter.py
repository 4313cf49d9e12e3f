"""Tests for the tabular export."""

import logging
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pandas as pd

from models import Person, Group, Household, Ballot
from engine.allocation_engine import allocate_rooms
from data.exporter import ballot_to_dataframe, unplaced_to_dataframe, placements_to_dataframe, export_csv, export_excel
from config.defaults import EXPORT_COLUMNS


def make_allocated():
    households = [Household("H1", 3, "Wolfson"), Household("H2", 2, "MGA")]
    groups = [
        Group([Person("Alice", 10), Person("Bob", 20)], group_id="G1"),
        Group([Person("Carol", 90), Person("Dan", 95), Person("Eve", 99)], group_id="G2"),
    ]
    ballot = Ballot(["Wolfson", "MGA"], households, groups)
    result = allocate_rooms(ballot, ["Wolfson", "MGA"])
    return ballot, result


class TestBallotToDataFrame:
    def test_columns_and_rows(self):
        ballot, _ = make_allocated()
        df = ballot_to_dataframe(ballot)

        assert list(df.columns) == EXPORT_COLUMNS
        assert df["Household name"].tolist() == ["H1", "H2"]
        assert df["Size"].tolist() == [3, 2]
        assert df["Occupancy"].tolist() == [2, 0]

    def test_occupant_rendering(self):
        ballot, _ = make_allocated()
        df = ballot_to_dataframe(ballot)
        assert df.loc[0, "Occupants"] == "Alice [10], Bob [20]"
        assert df.loc[1, "Occupants"] == ""

    def test_empty_ballot(self):
        df = ballot_to_dataframe(Ballot([]))
        assert df.empty
        assert list(df.columns) == EXPORT_COLUMNS


class TestSideTables:
    def test_unplaced(self):
        ballot, _ = make_allocated()
        df = unplaced_to_dataframe(ballot.pending_groups)
        assert df["Group"].tolist() == ["G2"]
        assert df.loc[0, "Size"] == 3

    def test_placements(self):
        _, result = make_allocated()
        df = placements_to_dataframe(result)
        assert df["Order"].tolist() == [1, 2]
        assert df["Tier"].tolist() == ["Building Preference", "Unplaced"]
        assert df.loc[1, "Household"] == ""


class TestFiles:
    def test_csv(self, tmp_path, caplog):
        ballot, _ = make_allocated()
        path = tmp_path / "allocation.csv"
        with caplog.at_level(logging.INFO, logger="data.exporter"):
            export_csv(ballot, str(path))
        assert f"Wrote 2 households to {path}" in caplog.messages

        df = pd.read_csv(path, keep_default_na=False)
        assert list(df.columns) == EXPORT_COLUMNS
        assert df.loc[0, "Occupants"] == "Alice [10], Bob [20]"

    def test_excel_sheets(self, tmp_path):
        ballot, result = make_allocated()
        path = tmp_path / "allocation.xlsx"
        export_excel(ballot, str(path), result)

        sheets = pd.read_excel(path, sheet_name=None, engine="openpyxl")
        assert set(sheets) == {"Households", "Unplaced", "Placements"}
        assert len(sheets["Households"]) == 2

    def test_excel_without_result(self, tmp_path):
        ballot, _ = make_allocated()
        path = tmp_path / "allocation.xlsx"
        export_excel(ballot, str(path))

        sheets = pd.read_excel(path, sheet_name=None, engine="openpyxl")
        assert set(sheets) == {"Households", "Unplaced"}


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
