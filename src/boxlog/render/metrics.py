"""Runtime metrics panel appended below the main box on wide terminals."""

import gc
import os
import threading
import time
from dataclasses import dataclass
from typing import Any

import psutil

from boxlog.models.lines import LineRole, RenderedLine
from boxlog.models.metrics import MetricsSample, MetricsTier
from boxlog.utils.width import pad_right, truncate_cells

PANEL_TITLE = "──[📈 runtime]"
COLUMN_SEPARATOR = " │ "
PAIR_SEPARATOR = "   "

# Blank lines printed above the panel per tier.
TIER_SPACING: dict[MetricsTier, int] = {
    MetricsTier.COMPACT: 0,
    MetricsTier.PAIRED: 1,
    MetricsTier.FULL: 2,
}


@dataclass(frozen=True)
class PanelPolicy:
    """Terminal width brackets for the metrics panel.

    Terminals narrower than ``min_width`` get no panel. Wider ones pick
    the first bracket whose upper bound they do not exceed.
    """

    min_width: int = 159
    compact_max_width: int = 180
    paired_max_width: int = 200
    compact_panel_width: int = 50
    paired_panel_width: int = 75
    full_panel_width: int = 100

    def select(self, terminal_width: int) -> tuple[MetricsTier, int] | None:
        """Tier and panel width for a terminal width, or None for no panel."""
        if terminal_width < self.min_width:
            return None
        if terminal_width <= self.compact_max_width:
            return MetricsTier.COMPACT, self.compact_panel_width
        if terminal_width <= self.paired_max_width:
            return MetricsTier.PAIRED, self.paired_panel_width
        return MetricsTier.FULL, self.full_panel_width


class GCPauseTracker:
    """Accumulates time spent in garbage collection via ``gc.callbacks``."""

    def __init__(self) -> None:
        self.total_ns = 0
        self._started: int | None = None
        self._installed = False
        self._lock = threading.Lock()

    def install(self) -> None:
        with self._lock:
            if not self._installed:
                gc.callbacks.append(self._on_gc)
                self._installed = True

    def uninstall(self) -> None:
        with self._lock:
            if self._installed:
                gc.callbacks.remove(self._on_gc)
                self._installed = False

    def _on_gc(self, phase: str, info: dict[str, Any]) -> None:
        if phase == "start":
            self._started = time.perf_counter_ns()
        elif phase == "stop" and self._started is not None:
            self.total_ns += time.perf_counter_ns() - self._started
            self._started = None


_pause_tracker = GCPauseTracker()


def snapshot() -> MetricsSample:
    """Capture current process runtime statistics."""
    _pause_tracker.install()
    process = psutil.Process()
    memory = process.memory_info()
    cpu_count = os.cpu_count() or 1
    try:
        parallelism = len(process.cpu_affinity())
    except (AttributeError, psutil.Error, OSError):
        # cpu_affinity() is not available on macOS
        parallelism = cpu_count
    return MetricsSample(
        active_workers=threading.active_count(),
        heap_bytes=memory.rss,
        total_alloc_bytes=memory.vms,
        gc_pause_total_ns=_pause_tracker.total_ns,
        gc_count=sum(stat.get("collections", 0) for stat in gc.get_stats()),
        cpu_count=cpu_count,
        scheduler_parallelism=max(parallelism, 1),
    )


def metric_items(sample: MetricsSample) -> list[str]:
    """The six panel entries, in display order."""
    mib = 1024 * 1024
    return [
        f"🧵 Threads: {sample.active_workers}",
        f"🔁 GC cycles: {sample.gc_count}",
        f"🧠 CPUs: {sample.cpu_count} (usable {sample.scheduler_parallelism})",
        f"💾 Resident: {sample.heap_bytes // mib} MiB",
        f"📊 Virtual: {sample.total_alloc_bytes // mib} MiB",
        f"🕙 GC pause: {sample.gc_pause_total_ns // 1_000_000} ms",
    ]


def _rows(items: list[str], tier: MetricsTier, inner: int) -> list[str]:
    if tier is MetricsTier.COMPACT:
        return items
    if tier is MetricsTier.PAIRED:
        return [PAIR_SEPARATOR.join(items[i : i + 2]) for i in range(0, len(items), 2)]

    half = (len(items) + 1) // 2
    column = max((inner - 2 - len(COLUMN_SEPARATOR)) // 2, 1)
    left, right = items[:half], items[half:]
    rows = []
    for index, text in enumerate(left):
        row = pad_right(truncate_cells(text, column), column)
        if index < len(right):
            row += COLUMN_SEPARATOR + truncate_cells(right[index], column)
        rows.append(row)
    return rows


def layout(sample: MetricsSample, tier: MetricsTier, width: int) -> list[RenderedLine]:
    """Lay out a metrics sample as a box of the given width.

    Args:
        sample: Runtime statistics to show
        tier: Arrangement of the metrics
        width: Panel box width in cells, borders included

    Returns:
        Spacer lines followed by the boxed panel.
    """
    lines = [RenderedLine("", LineRole.SPACER) for _ in range(TIER_SPACING[tier])]
    lines.append(RenderedLine(PANEL_TITLE, LineRole.TOP_BORDER, box_width=width))
    for row in _rows(metric_items(sample), tier, max(width - 2, 0)):
        # depth 1 keeps plain side borders on panel rows
        lines.append(RenderedLine(" " + row, LineRole.ITEM, depth=1, box_width=width))
    lines.append(RenderedLine("", LineRole.BOTTOM_BORDER, box_width=width))
    return lines
