"""Attribute value resolution and conversion to display text."""

import dataclasses
import json
import logging
from collections.abc import Mapping, Sequence
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError, to_jsonable_python

from boxlog.core.exceptions import SerializationError
from boxlog.models.event import Attribute, GroupMarker, GroupValue, LogValuer

logger = logging.getLogger(__name__)

# Guards against log_value() implementations returning themselves.
MAX_RESOLVE_STEPS = 100


class ValueKind(str, Enum):
    """How an attribute value is laid out."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"
    GROUP = "group"
    STRUCT = "struct"
    OTHER = "other"


def best_effort_str(value: Any) -> str:
    """Stringify anything, falling back to repr and finally the type name."""
    try:
        return str(value)
    except Exception:
        pass
    try:
        return repr(value)
    except Exception:
        return f"<{type(value).__name__}>"


def resolve(value: Any) -> Any:
    """Resolve log valuers and attribute lists into renderable values.

    A value whose ``log_value()`` raises degrades to its string form.
    A list or tuple made only of entries becomes a GroupValue.
    """
    steps = 0
    while isinstance(value, LogValuer) and not isinstance(value, type):
        if steps >= MAX_RESOLVE_STEPS:
            logger.debug(f"log_value() chain too long for {type(value).__name__}")
            return best_effort_str(value)
        try:
            value = value.log_value()
        except Exception as e:
            logger.debug(f"log_value() failed for {type(value).__name__}: {e}")
            return best_effort_str(value)
        steps += 1

    if (
        isinstance(value, (list, tuple))
        and value
        and all(isinstance(item, (Attribute, GroupMarker)) for item in value)
    ):
        return GroupValue(tuple(value))
    return value


def kind_of(value: Any) -> ValueKind:
    """Classify a resolved value."""
    if isinstance(value, GroupValue):
        return ValueKind.GROUP
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, Enum):
        return ValueKind.OTHER
    if isinstance(value, (int, float, Decimal)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (Mapping, list, tuple, set, frozenset, BaseModel)):
        return ValueKind.STRUCT
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return ValueKind.STRUCT
    return ValueKind.OTHER


def scalar_text(value: Any) -> str:
    """Text for a non-structured value, without quoting."""
    kind = kind_of(value)
    if kind is ValueKind.BOOL:
        return "true" if value else "false"
    if kind is ValueKind.NULL:
        return "null"
    if isinstance(value, BaseException):
        return best_effort_str(value) or type(value).__name__
    if isinstance(value, Enum):
        return best_effort_str(value.value)
    return best_effort_str(value)


def quote(text: str) -> str:
    """Double-quote text, escaping quotes and control characters."""
    return json.dumps(text, ensure_ascii=False)


def struct_lines(key: str, value: Any) -> list[str]:
    """Serialize a structured value to indented JSON lines.

    Raises:
        SerializationError: If the value cannot be converted.
    """
    try:
        data = to_jsonable_python(value, fallback=best_effort_str)
        text = json.dumps(data, indent=2, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError, PydanticSerializationError) as e:
        raise SerializationError(key, str(e)) from e
    return text.splitlines()


def collect(entries: Sequence[Attribute | GroupMarker]) -> dict[str, Any]:
    """Nest entries into a mapping of JSON-compatible values.

    Entries after a GroupMarker go into a sub-mapping named after it;
    empty attributes and empty groups are left out.
    """
    data: dict[str, Any] = {}
    for index, entry in enumerate(entries):
        if isinstance(entry, GroupMarker):
            nested = collect(entries[index + 1 :])
            if nested:
                if entry.name:
                    data[entry.name] = nested
                else:
                    data.update(nested)
            break
        if entry.is_empty:
            continue
        value = resolve(entry.value)
        if isinstance(value, GroupValue):
            nested = collect(value.entries)
            if nested:
                if entry.key:
                    data[entry.key] = nested
                else:
                    data.update(nested)
            continue
        data[entry.key] = to_plain(value)
    return data


def to_plain(value: Any) -> Any:
    """Convert a resolved value into JSON-compatible data for plain handlers."""
    if isinstance(value, GroupValue):
        return collect(value.entries)
    kind = kind_of(value)
    if kind in (ValueKind.STRING, ValueKind.NUMBER, ValueKind.BOOL, ValueKind.NULL):
        if isinstance(value, Decimal):
            return str(value)
        return value
    if kind is ValueKind.STRUCT:
        try:
            return to_jsonable_python(value, fallback=best_effort_str)
        except (TypeError, ValueError, RecursionError, PydanticSerializationError):
            return best_effort_str(value)
    return scalar_text(value)
