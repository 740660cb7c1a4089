"""
Record codec -- frozen dataclasses <-> JSON-safe dicts.

Responsibility:
    Converts domain dataclasses to the persisted record layout and back.
    Persisted field names are camelCase (``productId``, ``totalCost``);
    ``Decimal`` is stored as a string, enums by value, dates as ISO
    strings, nested dataclasses and tuples recursively.

Architecture position:
    Kernel > Store.  Used by ``Repository``; never by module code directly.

Invariants enforced:
    - Round trip is lossless for every supported field type.
    - A field may override its persisted name with
      ``field(metadata={"record_key": ...})``.
    - Missing keys fall back to the dataclass default; unknown keys are
      ignored (forward-compatible reads of older collections).

Failure modes:
    - ``TypeError`` from the dataclass constructor when a required field
      is missing from the record.
"""

from __future__ import annotations

import dataclasses
import types
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

T = TypeVar("T")


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def encode_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_record(value)
    if isinstance(value, (list, tuple)):
        return [encode_value(v) for v in value]
    if isinstance(value, dict):
        return {k: encode_value(v) for k, v in value.items()}
    return value


def record_key(f: dataclasses.Field) -> str:
    """Persisted key for a field: ``metadata["record_key"]`` or camelCase."""
    return f.metadata.get("record_key") or camel_case(f.name)


def to_record(entity: Any) -> dict[str, Any]:
    """Encode a dataclass instance as a persisted record."""
    return {
        record_key(f): encode_value(getattr(entity, f.name))
        for f in dataclasses.fields(entity)
    }


@lru_cache(maxsize=None)
def _field_types(cls: type) -> dict[str, Any]:
    return get_type_hints(cls)


def _decode(tp: Any, raw: Any) -> Any:
    if raw is None:
        return None

    origin = get_origin(tp)
    if origin in (Union, types.UnionType):
        inner = [a for a in get_args(tp) if a is not type(None)]
        return _decode(inner[0], raw) if len(inner) == 1 else raw
    if origin is tuple:
        item_type = get_args(tp)[0]
        return tuple(_decode(item_type, v) for v in raw)
    if origin is list:
        item_type = get_args(tp)[0]
        return [_decode(item_type, v) for v in raw]

    if isinstance(tp, type):
        if issubclass(tp, Enum):
            return tp(raw)
        if tp is Decimal:
            return Decimal(str(raw))
        if tp is datetime:
            return raw if isinstance(raw, datetime) else datetime.fromisoformat(raw)
        if tp is date:
            return raw if isinstance(raw, date) else date.fromisoformat(raw)
        if dataclasses.is_dataclass(tp):
            return from_record(tp, raw)
    return raw


def from_record(cls: type[T], record: dict[str, Any]) -> T:
    """Decode a persisted record into an instance of ``cls``."""
    hints = _field_types(cls)
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        key = record_key(f)
        if key not in record:
            continue
        kwargs[f.name] = _decode(hints[f.name], record[key])
    return cls(**kwargs)
