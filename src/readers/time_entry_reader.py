"""Time entry reader for loading entries from CSV and JSON exports.

This module turns time entry exports (one row per entry, columns named
after the TimeEntry fields) into validated TimeEntry models. Values are
not range checked here; see ``TimeEntryValidator`` for data quality checks.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Union

import pandas as pd
from pydantic import ValidationError

from src.models.time_entry import TimeEntry
from src.utils.logging_utils import log_function_call

logger = logging.getLogger(__name__)

ID_FIELDS = ("personnel_id", "user_id")


class EntryReadError(Exception):
    """Raised when an export cannot be read or a row does not form an entry."""

    def __init__(self, message: str, row_number: int = 0):
        self.row_number = row_number
        super().__init__(message)


class TimeEntryReader:
    """Reader for time entry exports.

    Supported formats:
    - ``.csv`` with a header row; blank cells mean "not set"
    - ``.json`` holding a list of records

    Booleans accept the usual spellings (true/false, yes/no, 1/0).

    Attributes:
        skip_invalid: Log and skip rows that fail validation instead of
            raising EntryReadError

    Example:
        >>> reader = TimeEntryReader()
        >>> entries = reader.read_file("week-10.csv")
        >>> entries[0].worker_key
        'p-17'
    """

    SUPPORTED_SUFFIXES = (".csv", ".json")

    def __init__(self, skip_invalid: bool = False):
        """Initialize the reader.

        Args:
            skip_invalid: Skip invalid rows with a warning (default: raise)
        """
        self.skip_invalid = skip_invalid

    @log_function_call(include_args=True)
    def read_file(self, path: Union[str, Path]) -> List[TimeEntry]:
        """Read time entries from a CSV or JSON file.

        Args:
            path: Path to the export

        Returns:
            List of TimeEntry models in file order

        Raises:
            EntryReadError: If the file type is unsupported, the file cannot
                be parsed, or a row is invalid and ``skip_invalid`` is False
        """
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix not in self.SUPPORTED_SUFFIXES:
            raise EntryReadError(
                f"Unsupported file type '{suffix}' for {path.name}; "
                f"expected one of {', '.join(self.SUPPORTED_SUFFIXES)}"
            )

        logger.info(f"Reading time entries from {path}")

        try:
            if suffix == ".csv":
                df = pd.read_csv(path, dtype=str, keep_default_na=False)
            else:
                # object dtype keeps integer ids intact next to missing values
                with open(path, encoding="utf-8") as f:
                    df = pd.DataFrame(json.load(f), dtype=object)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read time entries from {path}: {e}")
            raise EntryReadError(f"Could not read {path.name}: {e}") from e

        return self.read_dataframe(df)

    def read_dataframe(self, df: pd.DataFrame) -> List[TimeEntry]:
        """Validate the rows of a DataFrame into time entries.

        Missing values (NaN, None) are treated as "not set".

        Args:
            df: One row per entry

        Returns:
            List of TimeEntry models in row order
        """
        if df.empty:
            logger.info("No rows found, returning empty list")
            return []

        cleaned = df.astype(object).where(df.notna(), None)
        return self.read_records(cleaned.to_dict(orient="records"))

    def read_records(self, records: Iterable[Mapping[str, Any]]) -> List[TimeEntry]:
        """Validate in-memory records into time entries.

        Args:
            records: Mappings keyed by TimeEntry field names

        Returns:
            List of TimeEntry models

        Raises:
            EntryReadError: If a record is invalid and ``skip_invalid`` is False
        """
        entries: List[TimeEntry] = []
        skipped = 0

        for row_number, record in enumerate(records, start=1):
            try:
                entries.append(TimeEntry.model_validate(self._clean_record(record)))
            except ValidationError as e:
                if not self.skip_invalid:
                    raise EntryReadError(
                        f"Row {row_number} is not a valid time entry: {e}",
                        row_number=row_number,
                    ) from e
                logger.warning(f"Skipping row {row_number}: {e}")
                skipped += 1

        logger.info(f"Read {len(entries)} time entries ({skipped} skipped)")
        return entries

    def _clean_record(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Drop unset (None or blank) values and stringify identifiers.

        Args:
            record: Raw record

        Returns:
            Record ready for model validation
        """
        cleaned = {
            str(key).strip(): value
            for key, value in record.items()
            if value is not None and value != ""
        }
        for key in ID_FIELDS:
            if key in cleaned:
                cleaned[key] = str(cleaned[key]).strip()
        return cleaned
