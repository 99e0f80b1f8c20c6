"""Plain passthrough handlers: JSON lines and logfmt-style text."""

import json
import sys
from typing import Any

from boxlog.core.handler import BaseHandler, HandlerOptions, Sink
from boxlog.core.values import collect
from boxlog.models.event import LogEvent

# Keys written before the event's own attributes.
TIME_KEY = "time"
LEVEL_KEY = "level"
MESSAGE_KEY = "msg"
SOURCE_KEY = "source"


def record_of(event: LogEvent, entries: tuple, add_source: bool) -> dict[str, Any]:
    """Flat record for an event: built-in keys first, then attributes."""
    record: dict[str, Any] = {}
    if event.timestamp is not None:
        record[TIME_KEY] = event.timestamp.isoformat()
    record[LEVEL_KEY] = event.level.name
    record[MESSAGE_KEY] = event.message
    if add_source and event.source is not None:
        record[SOURCE_KEY] = {
            "function": event.source.function,
            "file": event.source.file,
            "line": event.source.line,
        }
    record.update(collect(entries))
    return record


class JSONHandler(BaseHandler):
    """Writes one JSON object per event; groups become nested objects."""

    def __init__(self, out: Sink | None = None, options: HandlerOptions | None = None):
        super().__init__(out if out is not None else sys.stdout.buffer, options)

    def format(self, event: LogEvent) -> bytes:
        record = record_of(event, self._assemble(event), self.options.add_source)
        return (json.dumps(record, ensure_ascii=False, default=str) + "\n").encode()

    def handle(self, event: LogEvent) -> None:
        if not self.enabled(event.level):
            return
        data = self.format(event)
        with self._lock:
            self._write(data)


class TextHandler(BaseHandler):
    """Writes ``key=value`` pairs per event; group keys are dotted."""

    def __init__(self, out: Sink | None = None, options: HandlerOptions | None = None):
        super().__init__(out if out is not None else sys.stdout.buffer, options)

    def format(self, event: LogEvent) -> bytes:
        record = record_of(event, self._assemble(event), self.options.add_source)
        if SOURCE_KEY in record:
            source = record[SOURCE_KEY]
            record[SOURCE_KEY] = f"{source['file']}:{source['line']}"
        pairs = [f"{key}={_text_value(value)}" for key, value in _flatten(record)]
        return (" ".join(pairs) + "\n").encode()

    def handle(self, event: LogEvent) -> None:
        if not self.enabled(event.level):
            return
        data = self.format(event)
        with self._lock:
            self._write(data)


def _flatten(record: dict[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    pairs: list[tuple[str, Any]] = []
    for key, value in record.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict) and value:
            pairs.extend(_flatten(value, f"{name}."))
        else:
            pairs.append((name, value))
    return pairs


def _text_value(value: Any) -> str:
    if isinstance(value, str):
        if value and not any(ch in value for ch in ' ="\\') and value.isprintable():
            return value
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, bool) or value is None:
        return json.dumps(value)
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, ensure_ascii=False, default=str, separators=(",", ":"))
