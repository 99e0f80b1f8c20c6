"""Runtime metrics models."""

from enum import Enum

from pydantic import BaseModel, Field


class MetricsTier(str, Enum):
    """Width bracket selecting a metrics panel arrangement."""

    COMPACT = "compact"  # one metric per line
    PAIRED = "paired"  # two metrics per line
    FULL = "full"  # two side-by-side columns


class MetricsSample(BaseModel):
    """Snapshot of process runtime statistics."""

    active_workers: int = Field(ge=0)  # live threads
    heap_bytes: int = Field(ge=0)  # resident set size
    total_alloc_bytes: int = Field(ge=0)  # virtual memory size
    gc_pause_total_ns: int = Field(default=0, ge=0)
    gc_count: int = Field(default=0, ge=0)
    cpu_count: int = Field(default=1, ge=1)
    scheduler_parallelism: int = Field(default=1, ge=1)  # usable CPUs
