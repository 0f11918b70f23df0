# core/records.py
from __future__ import annotations
from numbers import Number
from typing import Any, Dict, List, Mapping, Optional

ID_FIELD = "id"
_MISSING = object()


def ids_equal(a: Any, b: Any) -> bool:
    """
    Strict JSON-value equality for ids:
      - strings only equal strings, numbers only equal numbers (1 == 1.0)
      - booleans never equal numbers
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, Number) and isinstance(b, Number):
        return a == b
    return type(a) is type(b) and a == b


def record_id(item: Any) -> Any:
    if not isinstance(item, dict):
        return _MISSING
    return item.get(ID_FIELD, _MISSING)


def matches(item: Any, rid: Any) -> bool:
    got = record_id(item)
    if got is _MISSING:
        return False
    return ids_equal(got, rid)


def build_record(rid: Any, fields: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    # the id argument always wins over an "id" key inside fields
    rec: Dict[str, Any] = {ID_FIELD: rid}
    for k, v in (fields or {}).items():
        if k != ID_FIELD:
            rec[k] = v
    return rec


def append_record(table: List[Any], rid: Any, fields: Optional[Mapping[str, Any]]) -> List[Any]:
    return [*table, build_record(rid, fields)]


def first_match(table: List[Any], rid: Any) -> Optional[Dict[str, Any]]:
    for item in table:
        if matches(item, rid):
            return item
    return None


def replace_matches(table: List[Any], rid: Any, replacement: Dict[str, Any]) -> List[Any]:
    """Every position whose id matches gets the same replacement; order is kept."""
    return [dict(replacement) if matches(item, rid) else item for item in table]


def drop_matches(table: List[Any], rid: Any) -> List[Any]:
    return [item for item in table if not matches(item, rid)]
