"""Pretty handler: box-drawn, color-coded terminal output."""

import dataclasses
import sys
from collections.abc import Callable

from boxlog.core.handler import BaseHandler, HandlerOptions, Sink, probe_terminal_width
from boxlog.models.event import Level, LogEvent
from boxlog.models.lines import RenderContext, RenderedLine
from boxlog.models.metrics import MetricsSample
from boxlog.render.layout import LayoutEngine
from boxlog.render.metrics import layout as layout_metrics
from boxlog.render.metrics import snapshot
from boxlog.render.serializer import serialize


class PrettyHandler(BaseHandler):
    """Renders each event as a bordered tree and writes it in one call.

    Rendering and writing happen under one lock, so events from
    concurrent threads never interleave. When the handler logs at debug
    level and the terminal is wide enough, a runtime metrics panel is
    appended after the event box.

    Example:
        handler = PrettyHandler(sys.stdout.buffer, HandlerOptions(level=Level.DEBUG))
        Logger(handler).info("listening", port=8080)
    """

    def __init__(
        self,
        out: Sink | None = None,
        options: HandlerOptions | None = None,
        *,
        width_probe: Callable[[], int] | None = None,
        metrics_source: Callable[[], MetricsSample] = snapshot,
        engine: LayoutEngine | None = None,
    ):
        """Initialize the handler.

        Args:
            out: Binary or text sink (default: stdout's byte buffer)
            options: Level, source capture, color and width settings
            width_probe: Returns the current terminal width; replaces probing the sink
            metrics_source: Returns runtime statistics for the metrics panel
            engine: Layout engine to use (default: a new LayoutEngine)
        """
        super().__init__(out if out is not None else sys.stdout.buffer, options)
        self.width_probe = width_probe
        self.metrics_source = metrics_source
        self.engine = engine or LayoutEngine()

    @property
    def verbose(self) -> bool:
        """Debug-level handlers show the metrics panel on wide terminals."""
        return self.options.level <= Level.DEBUG

    def terminal_width(self) -> int:
        """Width for the next render, probed fresh on every call."""
        if self.options.width is not None:
            return self.options.width
        if self.width_probe is not None:
            try:
                width = self.width_probe()
            except OSError:
                return self.options.default_width
            return width if width > 0 else self.options.default_width
        return probe_terminal_width(self.out, self.options.default_width)

    def context(self, width: int) -> RenderContext:
        """Render context for a terminal width."""
        panel = self.options.panel_policy.select(width) if self.verbose else None
        return RenderContext(
            terminal_width=width,
            side_panel_width=panel[1] if panel else 0,
            verbose=self.verbose,
            add_source=self.options.add_source,
            color=self.options.color,
        )

    def render(self, event: LogEvent, context: RenderContext) -> list[RenderedLine]:
        """Event box lines plus the metrics panel when the context allows it."""
        event = dataclasses.replace(event, entries=self._assemble(event))
        lines = self.engine.render(event, context)
        if context.verbose:
            panel = self.options.panel_policy.select(context.terminal_width)
            if panel is not None:
                tier, panel_width = panel
                lines.extend(layout_metrics(self.metrics_source(), tier, panel_width))
        return lines

    def handle(self, event: LogEvent) -> None:
        """Render and write one event.

        Events below the minimum level are dropped without any output.

        Raises:
            SinkWriteError: If writing to the sink fails.
        """
        if not self.enabled(event.level):
            return
        with self._lock:
            width = self.terminal_width()
            lines = self.render(event, self.context(width))
            self._write(serialize(lines, width))
