"""Global test fixtures."""

import io
from collections.abc import Generator
from datetime import datetime

import pytest

import boxlog.logger
from boxlog.core.handler import HandlerOptions
from boxlog.core.pretty import PrettyHandler
from boxlog.models.event import Attribute, Level, LogEvent, SourceLocation, group
from boxlog.models.lines import RenderContext
from boxlog.models.metrics import MetricsSample


@pytest.fixture
def sink() -> io.BytesIO:
    """In-memory binary output sink."""
    return io.BytesIO()


@pytest.fixture
def context() -> RenderContext:
    """Plain 80-column render context."""
    return RenderContext(terminal_width=80, color=False)


@pytest.fixture
def sample_metrics() -> MetricsSample:
    """Fixed runtime statistics."""
    return MetricsSample(
        active_workers=3,
        heap_bytes=12 * 1024 * 1024,
        total_alloc_bytes=256 * 1024 * 1024,
        gc_pause_total_ns=4_000_000,
        gc_count=17,
        cpu_count=8,
        scheduler_parallelism=4,
    )


@pytest.fixture
def pretty_handler(sink: io.BytesIO, sample_metrics: MetricsSample) -> PrettyHandler:
    """Pretty handler with fixed width, no color and source capture."""
    options = HandlerOptions(level=Level.INFO, add_source=True, color=False, width=80)
    return PrettyHandler(sink, options, metrics_source=lambda: sample_metrics)


@pytest.fixture
def request_event() -> LogEvent:
    """Event with a top-level attribute and a nested group."""
    return LogEvent(
        level=Level.INFO,
        message="stored",
        entries=(
            Attribute("op", "write"),
            group("request", Attribute("id", "123"), Attribute("size", 42)),
        ),
    )


@pytest.fixture
def error_event() -> LogEvent:
    """Error event with timestamp and source location."""
    return LogEvent(
        level=Level.ERROR,
        message="request failed",
        entries=(Attribute("error", "connection reset"),),
        timestamp=datetime(2024, 1, 2, 3, 4, 5),
        source=SourceLocation("handler.go", 42),
    )


@pytest.fixture(autouse=True)
def reset_default_logger() -> Generator[None, None, None]:
    """Keep tests from leaking the process default logger."""
    saved = boxlog.logger._default_logger
    yield
    boxlog.logger._default_logger = saved
