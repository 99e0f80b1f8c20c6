"""Tests for the runtime metrics panel."""

import gc

import pytest

from boxlog.models.lines import LineRole
from boxlog.models.metrics import MetricsSample, MetricsTier
from boxlog.render.metrics import (
    COLUMN_SEPARATOR,
    GCPauseTracker,
    PanelPolicy,
    layout,
    metric_items,
    snapshot,
)
from boxlog.render.serializer import serialize_line
from boxlog.utils.width import display_width


class TestPanelPolicy:
    """Tests for width bracket selection."""

    @pytest.mark.parametrize(
        ("width", "expected"),
        [
            (80, None),
            (158, None),
            (159, (MetricsTier.COMPACT, 50)),
            (180, (MetricsTier.COMPACT, 50)),
            (181, (MetricsTier.PAIRED, 75)),
            (200, (MetricsTier.PAIRED, 75)),
            (201, (MetricsTier.FULL, 100)),
            (300, (MetricsTier.FULL, 100)),
        ],
    )
    def test_default_brackets(self, width: int, expected) -> None:
        """Test tier selection with the default brackets."""
        assert PanelPolicy().select(width) == expected

    def test_custom_brackets(self) -> None:
        """Test tier selection with custom brackets."""
        policy = PanelPolicy(min_width=100, compact_max_width=120, compact_panel_width=40)

        assert policy.select(99) is None
        assert policy.select(110) == (MetricsTier.COMPACT, 40)


class TestMetricItems:
    """Tests for the metric texts."""

    def test_six_items(self, sample_metrics: MetricsSample) -> None:
        """Test the six metrics and their labels."""
        items = metric_items(sample_metrics)

        assert items == [
            "🧵 Threads: 3",
            "🔁 GC cycles: 17",
            "🧠 CPUs: 8 (usable 4)",
            "💾 Resident: 12 MiB",
            "📊 Virtual: 256 MiB",
            "🕙 GC pause: 4 ms",
        ]


class TestLayout:
    """Tests for panel layout per tier."""

    def test_compact_one_metric_per_line(self, sample_metrics: MetricsSample) -> None:
        """Test the compact panel layout."""
        lines = layout(sample_metrics, MetricsTier.COMPACT, 50)

        assert [line.role for line in lines] == (
            [LineRole.TOP_BORDER] + [LineRole.ITEM] * 6 + [LineRole.BOTTOM_BORDER]
        )

    def test_paired_two_metrics_per_line(self, sample_metrics: MetricsSample) -> None:
        """Test the paired panel layout."""
        lines = layout(sample_metrics, MetricsTier.PAIRED, 75)

        assert [line.role for line in lines] == (
            [LineRole.SPACER, LineRole.TOP_BORDER]
            + [LineRole.ITEM] * 3
            + [LineRole.BOTTOM_BORDER]
        )
        assert "Threads" in lines[2].text and "GC cycles" in lines[2].text

    def test_full_two_columns(self, sample_metrics: MetricsSample) -> None:
        """Test the full two-column panel layout."""
        lines = layout(sample_metrics, MetricsTier.FULL, 100)
        rows = [line for line in lines if line.role is LineRole.ITEM]

        assert [line.role for line in lines[:2]] == [LineRole.SPACER, LineRole.SPACER]
        assert len(rows) == 3
        assert all(COLUMN_SEPARATOR in row.text for row in rows)
        assert "Threads" in rows[0].text and "Resident" in rows[0].text

    @pytest.mark.parametrize(
        ("tier", "width"),
        [(MetricsTier.COMPACT, 50), (MetricsTier.PAIRED, 75), (MetricsTier.FULL, 100)],
    )
    def test_panel_lines_have_panel_width(
        self, sample_metrics: MetricsSample, tier: MetricsTier, width: int
    ) -> None:
        """Test that panel lines carry the panel width."""
        for line in layout(sample_metrics, tier, width):
            assert line.role is LineRole.SPACER or line.box_width == width
            serialized = serialize_line(line, 200)
            if line.role is not LineRole.SPACER:
                assert display_width(serialized) == width


class TestGCPauseTracker:
    """Tests for garbage collection pause accounting."""

    def test_install_is_idempotent(self) -> None:
        """Test that installing twice registers one callback."""
        tracker = GCPauseTracker()
        try:
            tracker.install()
            tracker.install()
            assert gc.callbacks.count(tracker._on_gc) == 1
        finally:
            tracker.uninstall()

        assert tracker._on_gc not in gc.callbacks

    def test_stop_without_start_is_ignored(self) -> None:
        """Test a stop phase with no matching start."""
        tracker = GCPauseTracker()

        tracker._on_gc("stop", {})

        assert tracker.total_ns == 0

    def test_start_stop_accumulates(self) -> None:
        """Test that collection pauses add up."""
        tracker = GCPauseTracker()

        tracker._on_gc("start", {})
        tracker._on_gc("stop", {})

        assert tracker.total_ns >= 0
        assert tracker._started is None


class TestSnapshot:
    """Tests for sampling the running process."""

    def test_snapshot_fields(self) -> None:
        """Test that a live snapshot fills every field."""
        sample = snapshot()

        assert sample.active_workers >= 1
        assert sample.heap_bytes > 0
        assert sample.total_alloc_bytes >= sample.heap_bytes
        assert sample.cpu_count >= 1
        assert sample.scheduler_parallelism >= 1
