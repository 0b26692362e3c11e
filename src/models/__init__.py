"""Data models for the payroll engine.

This package contains Pydantic models for the records the engine consumes:
- BaseDataModel: Base class with common configuration
- TimeEntry: A block of hours logged by one worker
"""

from src.models.base import BaseDataModel
from src.models.time_entry import UNKNOWN_WORKER_KEY, TimeEntry

__all__ = [
    "BaseDataModel",
    "TimeEntry",
    "UNKNOWN_WORKER_KEY",
]
