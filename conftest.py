"""
Global pytest configuration and fixtures.
"""
import datetime as dt
import os
from decimal import Decimal
from typing import Any, Dict, List

import pytest

from src.config import PayrollConfig, reload_config
from src.config.logging_config import reset_logging
from src.models.time_entry import TimeEntry


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'WEEKLY_OVERTIME_THRESHOLD': '40',
        'OVERTIME_MULTIPLIER': '1.5',
        'HOLIDAY_MULTIPLIER': '2.0',
        'DEBUG': 'true',
        'LOG_LEVEL': 'DEBUG'
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)

    # Clear the global config to force reload with test values
    import src.config.settings
    src.config.settings._config = None

    yield test_env_vars

    # Clean up
    src.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> PayrollConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def sample_entry_records() -> List[Dict[str, Any]]:
    """One week of entries for two workers, one with a holiday entry."""
    return [
        {'personnel_id': 'A', 'personnel_name': 'Ana Ruiz', 'hours': 45, 'hourly_rate': 20},
        {'personnel_id': 'A', 'hours': 8, 'hourly_rate': 20, 'is_holiday': True},
        {'personnel_id': 'B', 'personnel_name': 'Ben Cole', 'hours': 20, 'hourly_rate': 30},
    ]


@pytest.fixture
def sample_entries(sample_entry_records) -> List[TimeEntry]:
    """Sample entries as TimeEntry models."""
    return [TimeEntry.model_validate(record) for record in sample_entry_records]


@pytest.fixture
def sample_week_entries() -> List[TimeEntry]:
    """One worker's dated entries for the week of Mon 2023-06-12."""
    start = dt.date(2023, 6, 12)
    return [
        TimeEntry(
            personnel_id='A',
            entry_date=start + dt.timedelta(days=offset),
            hours=Decimal('10'),
            hourly_rate=Decimal('20'),
        )
        for offset in range(5)
    ]


@pytest.fixture
def sample_csv(tmp_path):
    """CSV export with three entries."""
    path = tmp_path / 'week.csv'
    path.write_text(
        'personnel_id,personnel_name,hours,hourly_rate,is_holiday,entry_date\n'
        'A,Ana Ruiz,45,20,false,2023-06-12\n'
        'A,Ana Ruiz,8,20,yes,2023-06-13\n'
        'B,Ben Cole,20,30,,2023-06-12\n'
    )
    return path


@pytest.fixture(autouse=True)
def reset_root_logging():
    """Drop handlers installed by configure_logging during a test."""
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def cleanup_test_files():
    """Clean up any test files created during testing."""
    yield

    # Remove test coverage files in case they're created
    test_files = ['coverage.xml', '.coverage']
    for file in test_files:
        if os.path.exists(file):
            os.remove(file)


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        # Add unit marker for tests in tests/unit/
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
