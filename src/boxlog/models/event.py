"""Log event data model.

A LogEvent is built once per log call and consumed once by a handler.
Its entries form a tree: attributes may carry a GroupValue holding more
entries, and GroupMarker entries (from ``with_group``) open a group that
contains every entry after them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Any, Protocol, Union, runtime_checkable

from boxlog.core.exceptions import InvalidLevelError


class Level(IntEnum):
    """Event severity. Numeric values match the stdlib logging levels."""

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @classmethod
    def parse(cls, value: Level | int | str) -> Level:
        """Convert a level name or number into a Level.

        Raises:
            InvalidLevelError: If the value names no known level.
        """
        if isinstance(value, Level):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise InvalidLevelError(value) from None
        name = str(value).strip().upper()
        if name == "WARNING":
            name = "WARN"
        try:
            return cls[name]
        except KeyError:
            raise InvalidLevelError(value) from None

    @classmethod
    def from_stdlib(cls, levelno: int | None) -> Level:
        """Map any stdlib logging level number onto the nearest Level.

        Records built by hand may carry no level number; those map to INFO.
        """
        if not isinstance(levelno, int):
            return cls.INFO
        if levelno < cls.INFO:
            return cls.DEBUG
        if levelno < cls.WARN:
            return cls.INFO
        if levelno < cls.ERROR:
            return cls.WARN
        return cls.ERROR


@runtime_checkable
class LogValuer(Protocol):
    """Objects that choose their own logged representation."""

    def log_value(self) -> Any: ...


@dataclass(frozen=True)
class Attribute:
    """A single key/value pair."""

    key: str
    value: Any = None

    @property
    def is_empty(self) -> bool:
        """True for the zero attribute (no key, no value), which is skipped."""
        return self.key == "" and self.value is None


@dataclass(frozen=True)
class GroupValue:
    """Value of a group attribute: an ordered run of child entries."""

    entries: tuple[Entry, ...] = ()


@dataclass(frozen=True)
class GroupMarker:
    """Opens a named group holding all following entries."""

    name: str


Entry = Union[Attribute, GroupMarker]


@dataclass(frozen=True)
class SourceLocation:
    """Where a log call was made."""

    file: str
    line: int
    function: str = ""

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class LogEvent:
    """One emitted log record."""

    level: Level
    message: str
    entries: tuple[Entry, ...] = field(default_factory=tuple)
    timestamp: datetime | None = None
    source: SourceLocation | None = None


# =============================================================================
# Attribute constructors
# =============================================================================


def string_attr(key: str, value: str) -> Attribute:
    return Attribute(key, str(value))


def int_attr(key: str, value: int) -> Attribute:
    return Attribute(key, int(value))


def float_attr(key: str, value: float) -> Attribute:
    return Attribute(key, float(value))


def bool_attr(key: str, value: bool) -> Attribute:
    return Attribute(key, bool(value))


def duration_attr(key: str, value: timedelta) -> Attribute:
    return Attribute(key, value)


def time_attr(key: str, value: datetime) -> Attribute:
    return Attribute(key, value)


def any_attr(key: str, value: Any) -> Attribute:
    """Attribute with an arbitrary value, rendered as a struct when structured."""
    return Attribute(key, value)


def err_attr(error: BaseException) -> Attribute:
    """Attribute carrying an error under the conventional ``error`` key."""
    return Attribute("error", error)


def group(name: str, *entries: Entry) -> Attribute:
    """Attribute whose value is a nested group of entries."""
    return Attribute(name, GroupValue(tuple(entries)))


def group_value(*entries: Entry) -> GroupValue:
    """Group value for use as the result of ``log_value()``."""
    return GroupValue(tuple(entries))
