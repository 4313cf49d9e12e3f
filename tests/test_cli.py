"""Tests for the console entry point."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pandas as pd

from cli import main, parse_args
from config.defaults import EXPORT_COLUMNS, DEFAULT_GROUP_COUNT


class TestCli:
    def test_defaults(self):
        args = parse_args([])
        assert args.groups == DEFAULT_GROUP_COUNT
        assert args.workbook is None

    def test_sample_run_writes_csv(self, tmp_path, capsys):
        out = tmp_path / "alloc.csv"
        code = main(["--groups", "6", "--households", "3", "--buildings", "2", "--out", str(out)])

        assert code == 0
        df = pd.read_csv(out)
        assert list(df.columns) == EXPORT_COLUMNS
        assert len(df) == 3
        assert "Default building order: Wolfson > MGA" in capsys.readouterr().out

    def test_excel_output(self, tmp_path):
        out = tmp_path / "alloc.csv"
        xlsx = tmp_path / "alloc.xlsx"
        assert main(["--groups", "4", "--out", str(out), "--excel", str(xlsx)]) == 0
        assert xlsx.exists()

    def test_inconsistent_workbook_aborts(self, tmp_path, capsys):
        path = tmp_path / "bad.xlsx"
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            pd.DataFrame({"Building Name": ["A"]}).to_excel(writer, sheet_name="Buildings", index=False)
            pd.DataFrame({
                "Household Name": ["H1"], "Building": ["Z"], "Capacity": [2],
            }).to_excel(writer, sheet_name="Households", index=False)
            pd.DataFrame({
                "Group ID": ["G1"], "Member Name": ["Alice"], "Score": [10],
            }).to_excel(writer, sheet_name="Groups", index=False)

        out = tmp_path / "alloc.csv"
        assert main(["--workbook", str(path), "--out", str(out)]) == 1
        assert not out.exists()
        assert "Allocation aborted" in capsys.readouterr().err


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
