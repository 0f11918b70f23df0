# adapters/json_store.py
from __future__ import annotations
from pathlib import Path
import json
import logging
import os
import tempfile
from typing import Any, List, Union

from jsontable.core.errors import (
    MalformedTableError,
    ReadFailureError,
    TableNotFoundError,
    WriteFailureError,
)

log = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def exists(path: PathLike) -> bool:
    """True when path exists and is readable by this process. Never raises."""
    try:
        return os.access(path, os.R_OK)
    except (OSError, TypeError, ValueError):
        return False


def read_json(path: PathLike) -> Any:
    p = Path(path)
    try:
        with p.open("rb") as f:
            raw = f.read()
    except FileNotFoundError as e:
        log.error("File not found: %s", p)
        raise TableNotFoundError(f"{p} does not exist", p) from e
    except OSError as e:
        raise ReadFailureError(f"Failed to read JSON from {p}: {e}", p) from e

    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedTableError(f"{p} is not valid UTF-8 JSON: {e}", p) from e


def read_table(path: PathLike) -> List[Any]:
    data = read_json(path)
    if not isinstance(data, list):
        raise MalformedTableError(
            f"{Path(path)} must hold a JSON array, got {type(data).__name__}", Path(path)
        )
    return data


def _dumps(value: Any, indent: int) -> str:
    return json.dumps(value, ensure_ascii=False, indent=indent, allow_nan=False)


def write_json(path: PathLike, value: Any, *, indent: int = 2, atomic: bool = True) -> None:
    """
    Write value as pretty-printed JSON, creating parent directories.
    With atomic=True the text goes to a fresh temp file in the same directory
    (one per write) that then replaces the target, so a crash or an
    overlapping writer never leaves a truncated table behind.
    """
    p = Path(path)
    try:
        text = _dumps(value, indent)
    except (TypeError, ValueError) as e:
        raise WriteFailureError(f"Failed to write JSON to file {p}: {e}", p) from e

    try:
        p.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteFailureError(f"Failed to write JSON to file {p}: {e}", p) from e

    if not atomic:
        try:
            p.write_text(text, encoding="utf-8")
        except OSError as e:
            raise WriteFailureError(f"Failed to write JSON to file {p}: {e}", p) from e
        return

    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f"{p.name}.", suffix=".tmp", dir=p.parent)
    except OSError as e:
        raise WriteFailureError(f"Failed to write JSON to file {p}: {e}", p) from e
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        # mkstemp files are 0600; keep the table's own mode when it already exists
        try:
            os.chmod(tmp, p.stat().st_mode & 0o777)
        except FileNotFoundError:
            pass
        os.replace(tmp, p)
    except OSError as e:
        try:
            tmp.unlink()
        except FileNotFoundError:
            pass
        except OSError:
            log.warning("Could not remove temp file %s", tmp)
        raise WriteFailureError(f"Failed to write JSON to file {p}: {e}", p) from e


def write_table(path: PathLike, records: List[Any], *, indent: int = 2, atomic: bool = True) -> None:
    if not isinstance(records, list):
        raise WriteFailureError(
            f"Failed to write JSON to file {Path(path)}: table must be a list, got {type(records).__name__}",
            Path(path),
        )
    write_json(path, records, indent=indent, atomic=atomic)


class JsonStore:
    """One JSON file on disk: whole-file load, whole-file save."""

    def __init__(self, path: PathLike, *, indent: int = 2, atomic: bool = True):
        self.path = Path(path)
        self.indent = indent
        self.atomic = atomic

    def exists(self) -> bool:
        return exists(self.path)

    def load(self) -> List[Any]:
        return read_table(self.path)

    def save(self, data: List[Any]) -> None:
        write_table(self.path, data, indent=self.indent, atomic=self.atomic)
