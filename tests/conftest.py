"""
Shared fixtures: a clean JSONTABLE_* environment and a sample table on disk.
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# keep the package importable when running the tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

ENV_VARS = (
    "JSONTABLE_POLICY",
    "JSONTABLE_INDENT",
    "JSONTABLE_ATOMIC_WRITES",
    "JSONTABLE_EDIT_DELAY",
    "JSONTABLE_LOG_DIR",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture()
def people(tmp_path) -> Path:
    """[{"id":1,"name":"John"},{"id":2,"name":"Jane"}] written to a temp file."""
    p = tmp_path / "people.json"
    p.write_text(
        json.dumps([{"id": 1, "name": "John"}, {"id": 2, "name": "Jane"}], indent=2),
        encoding="utf-8",
    )
    return p
