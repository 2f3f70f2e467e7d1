"""
Palette Finder Metrics Collection
In-process counters and stage timings for a batch run.
"""
import time
from collections import defaultdict, Counter
from contextlib import contextmanager
from typing import Any, Dict, List, Optional


class MetricsCollector:
    """Simple in-process metrics collector."""

    def __init__(self):
        """Initialize metrics collector."""
        self._counters: Dict[str, int] = Counter()
        self._timings: Dict[str, List[float]] = defaultdict(list)
        self._start_time = time.time()

    def increment_image_count(self):
        """Increment processed image counter."""
        self._counters["images_total"] += 1

    def increment_found_count(self):
        """Increment counter of images where a palette was found."""
        self._counters["palettes_found_total"] += 1

    def increment_missing_count(self):
        """Increment counter of images with no palette above threshold."""
        self._counters["palettes_missing_total"] += 1

    def increment_decode_failure_count(self):
        """Increment counter of unreadable inputs."""
        self._counters["decode_failures_total"] += 1

    def record_timing(self, operation: str, duration_ms: float):
        """Record timing for an operation."""
        self._timings[f"{operation}_duration_ms"].append(duration_ms)

    @contextmanager
    def timed(self, operation: str):
        """Record the wall time of the wrapped block under ``operation``."""
        start = time.time()
        try:
            yield
        finally:
            self.record_timing(operation, (time.time() - start) * 1000)

    def get_counters(self) -> Dict[str, int]:
        """Get current counter values."""
        return dict(self._counters)

    def get_timing_stats(self) -> Dict[str, Dict[str, float]]:
        """Get timing statistics."""
        stats = {}
        for operation, timings in self._timings.items():
            if timings:
                stats[operation] = {
                    "count": len(timings),
                    "mean": sum(timings) / len(timings),
                    "min": min(timings),
                    "max": max(timings),
                    "p50": self._percentile(timings, 50),
                    "p95": self._percentile(timings, 95)
                }
        return stats

    def get_uptime_seconds(self) -> float:
        """Get seconds since the collector was created or reset."""
        return time.time() - self._start_time

    def get_summary(self) -> Dict[str, Any]:
        """Get complete metrics summary."""
        return {
            "uptime_seconds": self.get_uptime_seconds(),
            "counters": self.get_counters(),
            "timing_stats": self.get_timing_stats(),
        }

    def reset(self):
        """Reset all metrics (for testing)."""
        self._counters.clear()
        self._timings.clear()
        self._start_time = time.time()

    @staticmethod
    def _percentile(data: List[float], percentile: int) -> float:
        """Calculate percentile of data."""
        if not data:
            return 0.0

        sorted_data = sorted(data)
        k = (len(sorted_data) - 1) * percentile / 100
        f = int(k)
        c = k - f

        if f + 1 < len(sorted_data):
            return sorted_data[f] + c * (sorted_data[f + 1] - sorted_data[f])
        else:
            return sorted_data[f]


# Global metrics instance
_metrics: Optional[MetricsCollector] = None


def get_metrics() -> MetricsCollector:
    """Get or create global metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def reset_metrics():
    """Reset global metrics (for testing)."""
    global _metrics
    if _metrics is not None:
        _metrics.reset()
