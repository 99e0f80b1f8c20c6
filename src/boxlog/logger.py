"""Logger front end, factory and stdlib logging bridge."""

import inspect
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from datetime import datetime
from typing import Any

from boxlog.config import Settings
from boxlog.config import settings as default_settings
from boxlog.core.handler import Handler, Sink
from boxlog.core.plain import JSONHandler, TextHandler
from boxlog.core.pretty import PrettyHandler
from boxlog.models.event import Attribute, Entry, GroupMarker, Level, LogEvent, SourceLocation

logger = logging.getLogger(__name__)

# Key given to a trailing value that has no key.
BAD_KEY = "!BADKEY"


def args_to_entries(args: tuple[Any, ...], kwargs: dict[str, Any]) -> tuple[Entry, ...]:
    """Turn call arguments into entries.

    Attributes and group markers pass through, a string followed by a
    value forms a pair, anything else is kept under ``!BADKEY``.
    Keyword arguments are appended last, in order.
    """
    entries: list[Entry] = []
    index = 0
    while index < len(args):
        item = args[index]
        if isinstance(item, (Attribute, GroupMarker)):
            entries.append(item)
            index += 1
        elif isinstance(item, str) and index + 1 < len(args):
            entries.append(Attribute(item, args[index + 1]))
            index += 2
        else:
            entries.append(Attribute(BAD_KEY, item))
            index += 1
    entries.extend(Attribute(key, value) for key, value in kwargs.items())
    return tuple(entries)


class Logger:
    """Structured logger handing events to a handler.

    Example:
        log = Logger(PrettyHandler())
        log = log.with_group("request").with_(id="123")
        log.info("served", size=42)
    """

    def __init__(self, handler: Handler):
        self.handler = handler

    def enabled(self, level: Level | int | str) -> bool:
        return self.handler.enabled(Level.parse(level))

    def with_(self, *args: Any, **kwargs: Any) -> "Logger":
        """Logger whose events all carry the given attributes."""
        attrs = [e for e in args_to_entries(args, kwargs) if isinstance(e, Attribute)]
        if not attrs:
            return self
        return Logger(self.handler.with_attrs(attrs))

    def with_group(self, name: str) -> "Logger":
        """Logger whose later attributes are nested under a group."""
        if not name:
            return self
        return Logger(self.handler.with_group(name))

    def log(self, level: Level | int | str, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(Level.parse(level), msg, args, kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(Level.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(Level.INFO, msg, args, kwargs)

    def warn(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(Level.WARN, msg, args, kwargs)

    warning = warn

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(Level.ERROR, msg, args, kwargs)

    def _log(
        self,
        level: Level,
        msg: str,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        """Build and hand over an event.

        Raises:
            SinkWriteError: If the handler cannot write the event.
        """
        if not self.handler.enabled(level):
            return
        source = _caller_location() if self.handler.add_source else None
        event = LogEvent(
            level=level,
            message=str(msg),
            entries=args_to_entries(args, kwargs),
            timestamp=datetime.now().astimezone(),
            source=source,
        )
        self.handler.handle(event)


def _caller_location() -> SourceLocation | None:
    """Location of the code that called a Logger method."""
    frame = inspect.currentframe()
    # _caller_location <- Logger._log <- Logger.<level method> <- caller
    for _ in range(3):
        if frame is None:
            return None
        frame = frame.f_back
    if frame is None:
        return None
    return SourceLocation(frame.f_code.co_filename, frame.f_lineno, frame.f_code.co_name)


# =============================================================================
# Factory and process default
# =============================================================================

_default_logger: Logger | None = None


def default() -> Logger:
    """The process default logger (plain text on stderr until replaced)."""
    global _default_logger
    if _default_logger is None:
        _default_logger = Logger(TextHandler(sys.stderr))
    return _default_logger


def set_default(new_logger: Logger) -> None:
    global _default_logger
    _default_logger = new_logger


def new_logger(
    config: Settings | None = None,
    out: Sink | None = None,
    **overrides: Any,
) -> Logger:
    """Create a logger from settings.

    Text output is the default; ``pretty`` selects the box renderer and
    ``as_json`` selects JSON lines, taking precedence over both.

    Args:
        config: Settings to use (default: the global settings)
        out: Output sink (default: stdout)
        **overrides: Settings fields to replace, e.g. ``pretty=True``

    Returns:
        Configured Logger, also installed as the default when ``set_default``.
    """
    config = config or default_settings
    if overrides:
        config = config.model_copy(update=overrides)
    options = config.handler_options()

    handler: Handler = TextHandler(out, options)
    if config.pretty:
        handler = PrettyHandler(out, options)
    if config.as_json:
        handler = JSONHandler(out, options)

    result = Logger(handler)
    if config.set_default:
        set_default(result)
    logger.debug(f"Created {type(handler).__name__} at level {options.level.name}")
    return result


# =============================================================================
# Context-bound loggers
# =============================================================================

_context_logger: ContextVar[Logger | None] = ContextVar("boxlog_logger", default=None)


def extract_logger() -> Logger:
    """Logger bound to the current context, or the process default."""
    bound = _context_logger.get()
    return bound if bound is not None else default()


def bind_logger(target: Logger) -> Token:
    """Make target the logger of the current context.

    Each thread and asyncio task sees its own binding. Pass the returned
    token to reset_logger to restore the previous one.
    """
    return _context_logger.set(target)


def reset_logger(token: Token) -> None:
    _context_logger.reset(token)


def with_attrs(*args: Any, **kwargs: Any) -> Logger:
    """Context logger carrying extra attributes.

    The context binding itself is left unchanged; use bound_attrs to make
    the attributes stick for a block of code.
    """
    return extract_logger().with_(*args, **kwargs)


def with_default_attrs(target: Logger, *args: Any, **kwargs: Any) -> Logger:
    """Logger carrying attributes every event from it should have."""
    return target.with_(*args, **kwargs)


@contextmanager
def bound_attrs(*args: Any, **kwargs: Any) -> Iterator[Logger]:
    """Bind a logger with extra attributes for the duration of a block.

    Example:
        with bound_attrs(request_id=request.id):
            handle(request)  # extract_logger() now carries request_id
    """
    token = bind_logger(with_attrs(*args, **kwargs))
    try:
        yield extract_logger()
    finally:
        reset_logger(token)


# =============================================================================
# stdlib logging bridge
# =============================================================================

_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

# Records from this logger hierarchy are never forwarded.
OWN_LOGGER = "boxlog"


class BridgeHandler(logging.Handler):
    """Forwards stdlib logging records to a boxlog handler.

    Fields passed through ``extra=`` become attributes; exception info
    is added as ``error`` and ``traceback`` attributes. Records from
    boxlog's own loggers are skipped.
    """

    def __init__(self, target: Handler, level: int = logging.NOTSET):
        super().__init__(level)
        self.target = target

    def to_event(self, record: logging.LogRecord) -> LogEvent:
        entries: list[Entry] = [Attribute("logger", record.name)]
        entries.extend(
            Attribute(key, value)
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )
        if record.exc_info and record.exc_info[1] is not None:
            entries.append(Attribute("error", record.exc_info[1]))
            entries.append(Attribute("traceback", logging.Formatter().formatException(record.exc_info)))
        return LogEvent(
            level=Level.from_stdlib(record.levelno),
            message=record.getMessage(),
            entries=tuple(entries),
            timestamp=datetime.fromtimestamp(record.created).astimezone(),
            source=SourceLocation(record.pathname, record.lineno, record.funcName),
        )

    def emit(self, record: logging.LogRecord) -> None:
        # boxlog's own diagnostics would re-enter the target handler
        if record.name.partition(".")[0] == OWN_LOGGER:
            return
        try:
            event = self.to_event(record)
            if self.target.enabled(event.level):
                self.target.handle(event)
        except Exception:
            # stdlib convention: report through handleError, never raise from emit
            self.handleError(record)


def bridge_stdlib_logging(target: Logger, level: int = logging.DEBUG) -> BridgeHandler:
    """Route root logger output through a boxlog logger.

    Returns:
        The installed BridgeHandler, for later removal.
    """
    bridge = BridgeHandler(target.handler, level)
    root = logging.getLogger()
    root.addHandler(bridge)
    root.setLevel(level)
    return bridge
