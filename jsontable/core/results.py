"""
Stable result shape for a single store operation, plus the mapping from
store errors to process-like exit codes (0 = ok, >0 = failure kind).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from jsontable.core.errors import (
    MalformedTableError,
    ReadFailureError,
    RecordNotFoundError,
    StoreError,
    TableNotFoundError,
    WriteFailureError,
)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_MALFORMED = 2
EXIT_RECORD_NOT_FOUND = 3
EXIT_WRITE_FAILURE = 4
EXIT_READ_FAILURE = 5
EXIT_STORE_ERROR = 6


def exit_code_for(error: Optional[BaseException]) -> int:
    if error is None:
        return EXIT_OK
    if isinstance(error, TableNotFoundError):
        return EXIT_NOT_FOUND
    if isinstance(error, MalformedTableError):
        return EXIT_MALFORMED
    if isinstance(error, RecordNotFoundError):
        return EXIT_RECORD_NOT_FOUND
    if isinstance(error, WriteFailureError):
        return EXIT_WRITE_FAILURE
    if isinstance(error, ReadFailureError):
        return EXIT_READ_FAILURE
    return EXIT_STORE_ERROR


@dataclass(frozen=True)
class StoreResult:
    op: str
    ok: bool
    value: Optional[Any] = None
    error: Optional[StoreError] = None

    @property
    def exit_code(self) -> int:
        return exit_code_for(self.error)

    def unwrap(self) -> Any:
        """Return the value, or re-raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value
