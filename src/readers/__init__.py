"""
Data readers for loading time entries from exports.
"""

from .time_entry_reader import EntryReadError, TimeEntryReader

__all__ = ["EntryReadError", "TimeEntryReader"]
