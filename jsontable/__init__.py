"""
jsontable: a single JSON file used as a naive record store.

The file holds one JSON array of objects, each with an "id". Every call
reads the whole file, changes the list in memory and writes the whole file back.
"""

from jsontable.adapters.deferred import DeferredWrite
from jsontable.adapters.json_store import exists, read_json, read_table, write_json, write_table
from jsontable.core.errors import (
    MalformedTableError,
    ReadFailureError,
    RecordNotFoundError,
    StoreError,
    TableNotFoundError,
    WriteFailureError,
)
from jsontable.core.results import StoreResult, exit_code_for
from jsontable.settings.config import StoreConfig
from jsontable.settings.logging_setup import setup_logging
from jsontable.store import RecordStore, add, edit, edit_later, find, get_all, remove

__version__ = "0.1.0"

__all__ = [
    "DeferredWrite",
    "MalformedTableError",
    "ReadFailureError",
    "RecordNotFoundError",
    "RecordStore",
    "StoreConfig",
    "StoreError",
    "StoreResult",
    "TableNotFoundError",
    "WriteFailureError",
    "add",
    "edit",
    "edit_later",
    "exists",
    "exit_code_for",
    "find",
    "get_all",
    "read_json",
    "read_table",
    "remove",
    "setup_logging",
    "write_json",
    "write_table",
]
