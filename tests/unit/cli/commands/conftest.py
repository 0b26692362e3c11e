"""Fixtures for CLI command tests."""

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def single_worker_csv(tmp_path):
    """CSV export of one worker's week of Mon 2023-06-12."""
    path = tmp_path / "ana.csv"
    path.write_text(
        "personnel_id,hours,hourly_rate,is_holiday,entry_date\n"
        "A,45,20,false,2023-06-12\n"
        "A,8,20,true,2023-06-13\n"
        "A,6,20,false,2023-06-05\n"
    )
    return path


@pytest.fixture
def invalid_csv(tmp_path):
    """CSV export with a non-numeric hours cell."""
    path = tmp_path / "broken.csv"
    path.write_text("personnel_id,hours\nA,8\nB,eight\n")
    return path
