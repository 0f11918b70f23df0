"""
Record store operations over one JSON file.

Every operation is read-modify-write of the whole file: check the file
exists, read the full table, compute the new list in memory, write the full
table back. Nothing is cached between calls; the file is the only state.

There is no locking. Two callers interleaving on the same file can each
write back a table missing the other's change (last write wins).

Error policy comes from StoreConfig.policy:
  - "legacy": add/remove/find on a missing file log the problem and return
    (find returns None), edit raises, get_all logs and returns [].
  - "strict": every operation raises its StoreError.
Malformed tables and failed writes always raise.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from jsontable.adapters.deferred import DeferredWrite
from jsontable.adapters.json_store import JsonStore, PathLike
from jsontable.core.errors import RecordNotFoundError, StoreError, TableNotFoundError
from jsontable.core.records import (
    ID_FIELD,
    append_record,
    build_record,
    drop_matches,
    first_match,
    replace_matches,
)
from jsontable.core.results import StoreResult
from jsontable.settings.config import StoreConfig
from jsontable.settings.logging_setup import flog, store_logging

log = logging.getLogger(__name__)

_OPERATIONS = frozenset(
    {"exists", "read", "write", "add", "edit", "edit_later", "remove", "find", "get_all"}
)


class RecordStore:
    def __init__(self, path: PathLike, config: Optional[StoreConfig] = None):
        self.path = Path(path)
        self.config = config if config is not None else StoreConfig.load()
        self._file = JsonStore(
            self.path, indent=self.config.indent, atomic=self.config.atomic_writes
        )

    def __repr__(self) -> str:
        return f"RecordStore({str(self.path)!r}, policy={self.config.policy!r})"

    # ---------- raw file access ----------
    def exists(self) -> bool:
        return self._file.exists()

    def read(self) -> List[Any]:
        return self._file.load()

    def write(self, records: List[Any]) -> None:
        self._file.save(records)

    # ---------- helpers ----------
    def _missing(self, message: str) -> None:
        log.error(message)
        if self.config.strict:
            raise TableNotFoundError(message, self.path)

    def _load_existing(self, message: str) -> Optional[List[Any]]:
        """Table contents, or None when the file is missing under the legacy policy."""
        if not self.exists():
            self._missing(message)
            return None
        try:
            return self.read()
        except TableNotFoundError:
            # removed between the existence check and the read
            if self.config.strict:
                raise
            return None

    def _edited_table(self, rid: Any, fields: Optional[Mapping[str, Any]]) -> List[Any]:
        if not self.exists():
            message = f"{self.path} does not exist"
            log.error(message)
            raise TableNotFoundError(message, self.path)
        table = self.read()
        existing = first_match(table, rid)
        if existing is None:
            raise RecordNotFoundError(f"no record with id {rid!r} in {self.path}", self.path, rid)
        return replace_matches(table, rid, build_record(existing[ID_FIELD], fields))

    # ---------- operations ----------
    def add(self, rid: Any, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Append {id: rid, **fields} at the end of the table. Duplicate ids are allowed."""
        table = self._load_existing(f"{self.path} does not exist. Create {self.path} first.")
        if table is None:
            return
        self.write(append_record(table, rid, fields))

    def edit(self, rid: Any, fields: Optional[Mapping[str, Any]] = None) -> None:
        """
        Replace the record with id rid by {id: rid, **fields}.

        The old record's other fields are not kept. When several records share
        the id, every one of them gets the same replacement. Raises
        TableNotFoundError for a missing file and RecordNotFoundError for an
        unknown id, whatever the policy.
        """
        self.write(self._edited_table(rid, fields))

    def edit_later(
        self,
        rid: Any,
        fields: Optional[Mapping[str, Any]] = None,
        delay: Optional[float] = None,
    ) -> DeferredWrite:
        """
        Like edit(), but the write runs on a timer after `delay` seconds.
        The table is read and checked now; errors from that raise here.
        """
        table = self._edited_table(rid, fields)
        wait_s = self.config.edit_delay if delay is None else delay
        return DeferredWrite(
            lambda: self.write(table), wait_s, label=f"edit of {self.path}"
        ).start()

    def remove(self, rid: Any) -> None:
        """Drop every record with id rid. The table is written back even if nothing matched."""
        table = self._load_existing(f"{self.path} does not exist.")
        if table is None:
            return
        self.write(drop_matches(table, rid))

    def find(self, rid: Any) -> Optional[Dict[str, Any]]:
        table = self._load_existing(f"{self.path} does not exist")
        if table is None:
            return None
        return first_match(table, rid)

    def get_all(self) -> List[Any]:
        try:
            return self.read()
        except StoreError as e:
            if self.config.strict:
                raise
            log.error("%s", e)
            return []

    # ---------- typed results ----------
    def attempt(self, op: str, *args: Any, **kwargs: Any) -> StoreResult:
        """
        Run one operation under the strict policy and capture the outcome.
        Store errors become StoreResult(ok=False, error=...); anything else propagates.
        """
        if op not in _OPERATIONS:
            raise ValueError(f"unknown operation: {op!r}")
        target = self if self.config.strict else RecordStore(self.path, self.config.with_policy("strict"))
        try:
            value = getattr(target, op)(*args, **kwargs)
        except StoreError as e:
            return StoreResult(op=op, ok=False, error=e)
        return StoreResult(op=op, ok=True, value=value)

    @contextmanager
    def session(self, label: Optional[str] = None):
        """Send this store's log records to a file under config.log_dir for the block."""
        with store_logging(self.config.log_dir, label or self.path.name) as logfile:
            if logfile is not None:
                flog(f"table          : {self.path}")
                for line in self.config.pretty_lines():
                    flog(line)
            yield logfile


def add(path: PathLike, rid: Any, fields: Optional[Mapping[str, Any]] = None, *, config: Optional[StoreConfig] = None) -> None:
    RecordStore(path, config).add(rid, fields)


def edit(path: PathLike, rid: Any, fields: Optional[Mapping[str, Any]] = None, *, config: Optional[StoreConfig] = None) -> None:
    RecordStore(path, config).edit(rid, fields)


def edit_later(
    path: PathLike,
    rid: Any,
    fields: Optional[Mapping[str, Any]] = None,
    delay: Optional[float] = None,
    *,
    config: Optional[StoreConfig] = None,
) -> DeferredWrite:
    return RecordStore(path, config).edit_later(rid, fields, delay)


def remove(path: PathLike, rid: Any, *, config: Optional[StoreConfig] = None) -> None:
    RecordStore(path, config).remove(rid)


def find(path: PathLike, rid: Any, *, config: Optional[StoreConfig] = None) -> Optional[Dict[str, Any]]:
    return RecordStore(path, config).find(rid)


def get_all(path: PathLike, *, config: Optional[StoreConfig] = None) -> List[Any]:
    return RecordStore(path, config).get_all()
