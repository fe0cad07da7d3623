"""Per-worker counters."""


class WorkerMetrics:
    """Metrics for worker observability."""

    __slots__ = (
        "pixels_painted",
        "pixels_dropped",
        "send_retries",
        "reconnect_count",
        "frames_received",
    )

    def __init__(self) -> None:
        self.pixels_painted: int = 0
        self.pixels_dropped: int = 0
        self.send_retries: int = 0
        self.reconnect_count: int = 0
        self.frames_received: int = 0

    def to_dict(self) -> dict:
        """Export metrics as dict."""
        return {
            "pixels_painted": self.pixels_painted,
            "pixels_dropped": self.pixels_dropped,
            "send_retries": self.send_retries,
            "reconnect_count": self.reconnect_count,
            "frames_received": self.frames_received,
        }
