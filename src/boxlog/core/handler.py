"""Handler protocol and the shared machinery behind every handler."""

import copy
import io
import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Protocol, TextIO, Union

from boxlog.core.exceptions import SinkWriteError
from boxlog.models.event import Attribute, Entry, GroupMarker, Level, LogEvent
from boxlog.render.metrics import PanelPolicy

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
DEFAULT_WIDTH = 80

Sink = Union[BinaryIO, TextIO, Any]


@dataclass(frozen=True)
class HandlerOptions:
    """Settings held by a handler for its whole lifetime."""

    level: Level = Level.INFO
    add_source: bool = False
    color: bool = True
    width: int | None = None  # fixed width; probed from the sink when None
    default_width: int = DEFAULT_WIDTH  # used when probing fails
    panel_policy: PanelPolicy = field(default_factory=PanelPolicy)


class Handler(Protocol):
    """What a logger needs from a handler."""

    @property
    def add_source(self) -> bool: ...

    def enabled(self, level: Level) -> bool: ...

    def handle(self, event: LogEvent) -> None: ...

    def with_attrs(self, attrs: list[Attribute]) -> "Handler": ...

    def with_group(self, name: str) -> "Handler": ...


def probe_terminal_width(stream: Sink, default: int = DEFAULT_WIDTH) -> int:
    """Column count of the terminal behind stream, or default if there is none."""
    try:
        columns = os.get_terminal_size(stream.fileno()).columns
    except (AttributeError, OSError, ValueError) as e:
        logger.debug(f"Terminal width unavailable ({e}), using {default}")
        return default
    return columns if columns > 0 else default


class BaseHandler:
    """Level filtering, attribute/group binding and locked sink writes.

    ``with_attrs`` and ``with_group`` return copies that share the sink
    and its lock, so output from related handlers never interleaves.
    """

    def __init__(self, out: Sink, options: HandlerOptions | None = None):
        self.out = out
        self.options = options or HandlerOptions()
        self._bound: tuple[Entry, ...] = ()
        self._lock = threading.RLock()

    @property
    def add_source(self) -> bool:
        return self.options.add_source

    def enabled(self, level: Level) -> bool:
        """Whether events at level pass the minimum level."""
        return level >= self.options.level

    def handle(self, event: LogEvent) -> None:
        raise NotImplementedError

    def with_attrs(self, attrs: list[Attribute]) -> "BaseHandler":
        """Handler that adds attrs to every event, inside any open group."""
        if not attrs:
            return self
        return self._derive(tuple(attrs))

    def with_group(self, name: str) -> "BaseHandler":
        """Handler that nests later attributes under a group called name."""
        if not name:
            return self
        return self._derive((GroupMarker(name),))

    def _derive(self, entries: tuple[Entry, ...]) -> "BaseHandler":
        derived = copy.copy(self)
        derived._bound = self._bound + entries
        return derived

    def _assemble(self, event: LogEvent) -> tuple[Entry, ...]:
        """Bound entries followed by the event's own entries."""
        return self._bound + tuple(event.entries)

    def _write(self, data: bytes) -> None:
        """Single write of data to the sink.

        Raises:
            SinkWriteError: If the sink rejects the write.
        """
        try:
            if isinstance(self.out, io.TextIOBase):
                self.out.write(data.decode(ENCODING))
            else:
                self.out.write(data)
            flush = getattr(self.out, "flush", None)
            if flush is not None:
                flush()
        except (OSError, ValueError) as e:
            raise SinkWriteError(str(e), len(data)) from e
