"""Core - handlers, value resolution and the exception hierarchy.

This package provides:
- PrettyHandler: box-drawn terminal output
- JSONHandler / TextHandler: plain passthrough output
- BaseHandler: level filtering, binding and locked sink writes
- BoxLogError and subclasses
"""

from boxlog.core.exceptions import (
    BoxLogError,
    InvalidLevelError,
    SerializationError,
    SinkWriteError,
)

__all__ = [
    "BoxLogError",
    "InvalidLevelError",
    "SerializationError",
    "SinkWriteError",
]
