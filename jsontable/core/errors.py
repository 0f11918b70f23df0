"""
Error taxonomy for the JSON table store.

Every failure raised by the store derives from StoreError, so callers can
catch one type. The specific classes also derive from the matching builtin
(FileNotFoundError, ValueError, LookupError) for code that already handles those.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional


class StoreError(Exception):
    """Base class for table store failures."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class TableNotFoundError(StoreError, FileNotFoundError):
    """Raised when the table file does not exist."""


class MalformedTableError(StoreError, ValueError):
    """Raised when the table file is not UTF-8 JSON, or not a JSON array."""


class ReadFailureError(StoreError):
    """Raised when the table file exists but cannot be read (permissions, a directory, I/O error)."""


class WriteFailureError(StoreError):
    """Raised when creating directories, serializing, or writing the table fails."""


class RecordNotFoundError(StoreError, LookupError):
    """Raised when no record carries the requested id."""

    def __init__(self, message: str, path: Optional[Path] = None, record_id: Any = None):
        super().__init__(message, path)
        self.record_id = record_id
