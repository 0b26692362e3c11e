"""Unit tests for the time entry reader."""

import datetime as dt
import json
from decimal import Decimal

import pandas as pd
import pytest

from src.readers.time_entry_reader import EntryReadError, TimeEntryReader


@pytest.fixture
def reader():
    """Reader that raises on invalid rows."""
    return TimeEntryReader()


class TestReadFile:
    """Test reading exports from disk."""

    def test_read_csv(self, reader, sample_csv):
        """Test a CSV export is read into entries in file order."""
        entries = reader.read_file(sample_csv)

        assert [e.worker_key for e in entries] == ["A", "A", "B"]
        assert entries[0].hours == Decimal("45")
        assert entries[0].personnel_name == "Ana Ruiz"
        assert entries[0].is_holiday is False
        assert entries[1].is_holiday is True
        assert entries[2].is_holiday is False
        assert entries[2].entry_date == dt.date(2023, 6, 12)

    def test_blank_cells_are_unset(self, reader, tmp_path):
        """Test blank cells become None rather than empty strings."""
        path = tmp_path / "week.csv"
        path.write_text(
            "personnel_id,user_id,hours,regular_hours,overtime_hours\n"
            ",u1,,6,2\n"
        )

        entry = reader.read_file(path)[0]

        assert entry.personnel_id is None
        assert entry.worker_key == "u1"
        assert entry.hours is None
        assert entry.effective_hours == Decimal("8")

    def test_numeric_ids_kept_as_strings(self, reader, tmp_path):
        """Test ids like 0017 keep their leading zeros."""
        path = tmp_path / "week.csv"
        path.write_text("personnel_id,hours\n0017,8\n")

        assert reader.read_file(path)[0].personnel_id == "0017"

    def test_read_json(self, reader, tmp_path):
        """Test a JSON list of records is read."""
        path = tmp_path / "week.json"
        path.write_text(
            json.dumps(
                [
                    {"personnel_id": 17, "hours": 45.5, "is_holiday": False},
                    {"user_id": "u2", "hours": None, "regular_hours": 4},
                ]
            )
        )

        entries = reader.read_file(path)

        assert entries[0].personnel_id == "17"
        assert entries[0].hours == Decimal("45.5")
        assert entries[1].worker_key == "u2"
        assert entries[1].effective_hours == Decimal("4")

    def test_unsupported_suffix(self, reader, tmp_path):
        """Test an unsupported file type is rejected."""
        path = tmp_path / "week.xlsx"
        path.write_text("")

        with pytest.raises(EntryReadError, match="Unsupported file type"):
            reader.read_file(path)

    def test_missing_file(self, reader, tmp_path):
        """Test a missing file raises EntryReadError."""
        with pytest.raises(EntryReadError, match="Could not read"):
            reader.read_file(tmp_path / "missing.csv")

    def test_header_only_csv(self, reader, tmp_path):
        """Test a CSV without rows gives no entries."""
        path = tmp_path / "week.csv"
        path.write_text("personnel_id,hours\n")

        assert reader.read_file(path) == []


class TestInvalidRows:
    """Test handling of rows that do not form entries."""

    def test_invalid_row_raises_with_row_number(self, reader):
        """Test the failing row is named."""
        with pytest.raises(EntryReadError) as exc_info:
            reader.read_records(
                [{"personnel_id": "A", "hours": 8}, {"personnel_id": "A", "hours": "x"}]
            )

        assert exc_info.value.row_number == 2
        assert "Row 2" in str(exc_info.value)

    def test_skip_invalid(self, caplog):
        """Test invalid rows are skipped with a warning."""
        reader = TimeEntryReader(skip_invalid=True)

        entries = reader.read_records(
            [{"personnel_id": "A", "hours": "x"}, {"personnel_id": "B", "hours": 8}]
        )

        assert [e.worker_key for e in entries] == ["B"]
        assert "Skipping row 1" in caplog.text


class TestReadDataFrame:
    """Test reading DataFrames."""

    def test_nan_cells_are_unset(self, reader):
        """Test missing values in a DataFrame are treated as unset."""
        df = pd.DataFrame(
            [
                {"personnel_id": "A", "hours": 8.0, "hourly_rate": None},
                {"personnel_id": "B", "hours": None, "hourly_rate": 20.0},
            ]
        )

        entries = reader.read_dataframe(df)

        assert entries[0].hourly_rate is None
        assert entries[1].hours is None
        assert entries[1].hourly_rate == Decimal("20")

    def test_empty_dataframe(self, reader):
        """Test an empty DataFrame gives no entries."""
        assert reader.read_dataframe(pd.DataFrame()) == []
