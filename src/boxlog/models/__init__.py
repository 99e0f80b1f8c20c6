"""Data models - log events, rendered lines, runtime metrics."""

from boxlog.models.event import (
    Attribute,
    Entry,
    GroupMarker,
    GroupValue,
    Level,
    LogEvent,
    LogValuer,
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
from boxlog.models.lines import LineRole, Position, RenderContext, RenderedLine
from boxlog.models.metrics import MetricsSample, MetricsTier

__all__ = [
    # Events
    "Attribute",
    "Entry",
    "GroupMarker",
    "GroupValue",
    "Level",
    "LogEvent",
    "LogValuer",
    "SourceLocation",
    # Constructors
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
    # Layout
    "LineRole",
    "Position",
    "RenderContext",
    "RenderedLine",
    # Metrics
    "MetricsSample",
    "MetricsTier",
]
