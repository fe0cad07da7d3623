"""
Worker Module
=============

Painting workers and their pacing.

Components:
    - Worker: Connection lifecycle + paint loop for one endpoint
    - JitterSleeper: Shared uniform-random delay between pixels
    - WorkerMetrics: Per-worker counters
"""

from pixel_brush.worker.bot import Worker
from pixel_brush.worker.metrics import WorkerMetrics
from pixel_brush.worker.pacing import JitterSleeper

__all__ = [
    "Worker",
    "WorkerMetrics",
    "JitterSleeper",
]
