"""
Whole-file reader/writer and the existence check.
"""
from __future__ import annotations

import json
import os
import threading

import pytest

from jsontable.adapters.json_store import (
    JsonStore,
    exists,
    read_json,
    read_table,
    write_json,
    write_table,
)
from jsontable.core.errors import (
    MalformedTableError,
    ReadFailureError,
    StoreError,
    TableNotFoundError,
    WriteFailureError,
)


def test_exists_true_for_readable_file(people):
    assert exists(people) is True
    assert exists(str(people)) is True


def test_exists_false_for_missing_path(tmp_path):
    assert exists(tmp_path / "nonexistent.json") is False


def test_exists_never_raises_on_bad_input():
    assert exists(None) is False
    assert exists("bad\0path") is False


def test_read_json_parses_file(people):
    assert read_json(people) == [{"id": 1, "name": "John"}, {"id": 2, "name": "Jane"}]


def test_read_json_missing_file_raises_not_found(tmp_path, caplog):
    target = tmp_path / "nonexistent.json"
    with pytest.raises(TableNotFoundError) as exc:
        read_json(target)
    assert isinstance(exc.value, FileNotFoundError)
    assert exc.value.path == target
    assert "File not found" in caplog.text


def test_read_json_invalid_json_raises_malformed(tmp_path):
    p = tmp_path / "broken.json"
    p.write_text("[{\"id\": 1,", encoding="utf-8")
    with pytest.raises(MalformedTableError):
        read_json(p)


def test_read_json_invalid_utf8_raises_malformed(tmp_path):
    p = tmp_path / "latin1.json"
    p.write_bytes(b'["caf\xe9"]')
    with pytest.raises(MalformedTableError) as exc:
        read_json(p)
    assert isinstance(exc.value.__cause__, UnicodeDecodeError)


def test_read_json_on_directory_raises_read_failure(tmp_path):
    with pytest.raises(ReadFailureError) as exc:
        read_json(tmp_path)
    assert isinstance(exc.value, StoreError)
    assert not isinstance(exc.value, TableNotFoundError)


def test_read_table_rejects_non_array(tmp_path):
    p = tmp_path / "object.json"
    p.write_text('{"id": 1}', encoding="utf-8")
    assert read_json(p) == {"id": 1}
    with pytest.raises(MalformedTableError):
        read_table(p)


def test_write_then_read_round_trip(tmp_path):
    p = tmp_path / "t.json"
    table = [{"id": "a", "tags": ["x", "y"], "n": None}, {"id": 2.5, "nested": {"k": True}}]
    write_table(p, table)
    assert read_table(p) == table


def test_write_json_uses_two_space_indent_and_keeps_unicode(tmp_path):
    p = tmp_path / "t.json"
    write_json(p, [{"id": 1, "name": "Zoë"}])
    text = p.read_text(encoding="utf-8")
    assert text == json.dumps([{"id": 1, "name": "Zoë"}], indent=2, ensure_ascii=False)
    assert "Zoë" in text


def test_write_json_creates_nested_directories(tmp_path):
    p = tmp_path / "a" / "b" / "c" / "file.json"
    write_json(p, [{"name": "John Doe", "age": 30}])
    assert json.loads(p.read_text(encoding="utf-8")) == [{"name": "John Doe", "age": 30}]


def test_write_json_overwrites_existing_file(people):
    write_json(people, [{"id": 9}])
    assert read_json(people) == [{"id": 9}]


def test_write_json_unserializable_value_leaves_file_alone(people):
    before = people.read_text(encoding="utf-8")
    with pytest.raises(WriteFailureError) as exc:
        write_json(people, [{"id": 1, "when": object()}])
    assert isinstance(exc.value.__cause__, TypeError)
    assert people.read_text(encoding="utf-8") == before


def test_write_json_rejects_nan(tmp_path):
    with pytest.raises(WriteFailureError):
        write_json(tmp_path / "t.json", [{"id": 1, "x": float("nan")}])


def test_atomic_write_failure_keeps_previous_content(people, monkeypatch):
    before = people.read_text(encoding="utf-8")

    def boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", boom)
    with pytest.raises(WriteFailureError):
        write_json(people, [{"id": 3}])
    assert people.read_text(encoding="utf-8") == before
    assert sorted(p.name for p in people.parent.iterdir()) == ["people.json"]


def test_plain_overwrite_when_not_atomic(people):
    write_json(people, [{"id": 3}], atomic=False)
    assert read_json(people) == [{"id": 3}]
    assert sorted(p.name for p in people.parent.iterdir()) == ["people.json"]


def test_write_fails_when_parent_is_a_file(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(WriteFailureError):
        write_json(blocker / "t.json", [])


def test_write_table_requires_list(tmp_path):
    with pytest.raises(WriteFailureError):
        write_table(tmp_path / "t.json", {"id": 1})
    assert not (tmp_path / "t.json").exists()


def test_json_store_wraps_one_file(tmp_path):
    store = JsonStore(tmp_path / "sub" / "t.json", indent=4)
    assert store.exists() is False
    store.save([{"id": 1}])
    assert store.exists() is True
    assert store.load() == [{"id": 1}]
    assert (tmp_path / "sub" / "t.json").read_text(encoding="utf-8").startswith("[\n    {")


def test_overlapping_atomic_writes_use_separate_temp_files(people, monkeypatch):
    real_replace = os.replace
    both_written = threading.Barrier(2, timeout=5)

    def replace_after_both_wrote(src, dst):
        # neither writer renames until both temp files are on disk
        both_written.wait()
        real_replace(src, dst)

    monkeypatch.setattr(os, "replace", replace_after_both_wrote)
    errors = []

    def writer(rid):
        try:
            write_json(people, [{"id": rid}])
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=writer, args=(rid,)) for rid in ("a", "b")]
    for t in threads:
        t.start()
    for t in threads:
        t.join(10)

    assert errors == []
    assert read_table(people) in ([{"id": "a"}], [{"id": "b"}])
    assert sorted(p.name for p in people.parent.iterdir()) == ["people.json"]


def test_atomic_write_keeps_existing_file_mode(people):
    people.chmod(0o644)
    write_json(people, [{"id": 3}])
    assert people.stat().st_mode & 0o777 == 0o644
