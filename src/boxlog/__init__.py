"""boxlog - box-drawn, color-coded terminal rendering of structured log events."""

__version__ = "0.1.0"

from boxlog.core.exceptions import (
    BoxLogError,
    InvalidLevelError,
    SerializationError,
    SinkWriteError,
)
from boxlog.core.handler import BaseHandler, Handler, HandlerOptions
from boxlog.core.plain import JSONHandler, TextHandler
from boxlog.core.pretty import PrettyHandler
from boxlog.logger import (
    BridgeHandler,
    Logger,
    bind_logger,
    bound_attrs,
    bridge_stdlib_logging,
    default,
    extract_logger,
    new_logger,
    reset_logger,
    set_default,
    with_attrs,
    with_default_attrs,
)
from boxlog.models.event import (
    Attribute,
    GroupMarker,
    GroupValue,
    Level,
    LogEvent,
    SourceLocation,
    any_attr,
    bool_attr,
    duration_attr,
    err_attr,
    float_attr,
    group,
    group_value,
    int_attr,
    string_attr,
    time_attr,
)
from boxlog.render.metrics import PanelPolicy

__all__ = [
    "__version__",
    # Logger
    "Logger",
    "new_logger",
    "default",
    "set_default",
    "extract_logger",
    "bind_logger",
    "reset_logger",
    "bound_attrs",
    "with_attrs",
    "with_default_attrs",
    "BridgeHandler",
    "bridge_stdlib_logging",
    # Handlers
    "BaseHandler",
    "Handler",
    "HandlerOptions",
    "JSONHandler",
    "PanelPolicy",
    "PrettyHandler",
    "TextHandler",
    # Events
    "Attribute",
    "GroupMarker",
    "GroupValue",
    "Level",
    "LogEvent",
    "SourceLocation",
    "any_attr",
    "bool_attr",
    "duration_attr",
    "err_attr",
    "float_attr",
    "group",
    "group_value",
    "int_attr",
    "string_attr",
    "time_attr",
    # Errors
    "BoxLogError",
    "InvalidLevelError",
    "SerializationError",
    "SinkWriteError",
]
