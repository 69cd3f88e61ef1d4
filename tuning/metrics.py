"""Lookup latency and event counters for an intonation.

Tracks frequency lookup latency, unsupported notes and modulations so a
performance front end can monitor the tuning path.
"""

import logging
import threading
import time
from collections import deque
from datetime import datetime
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)

# Lookups slower than this are logged; a lookup sits on the note-on path
SLOW_LOOKUP_MS = 1.0


class LatencyHistogram:
    """Tracks latency measurements with percentile calculations."""

    def __init__(self, max_samples: int = 10000):
        """Initialize latency histogram.

        Args:
            max_samples: Maximum samples to retain (circular buffer)
        """
        self.samples: deque[float] = deque(maxlen=max_samples)
        self.max_samples = max_samples

    def record(self, latency_ms: float) -> None:
        self.samples.append(latency_ms)

    def get_stats(self) -> dict[str, float | int]:
        """Get latency statistics.

        Returns:
            Dictionary with avg, p50, p95, p99, max and samples count
        """
        if not self.samples:
            return {"avg": 0.0, "p50": 0.0, "p95": 0.0, "p99": 0.0, "max": 0.0, "samples": 0}

        arr = np.array(list(self.samples))
        p50, p95, p99 = np.percentile(arr, [50, 95, 99])
        return {
            "avg": float(np.mean(arr)),
            "p50": float(p50),
            "p95": float(p95),
            "p99": float(p99),
            "max": float(np.max(arr)),
            "samples": len(self.samples),
        }


class IntonationMetrics:
    """Collects lookup latency and tuning event counts.

    Thread-safe: counters are updated under an internal lock, since lookups
    and modulations arrive from different threads.
    """

    def __init__(self, max_samples: int = 10000) -> None:
        self.lookup_latency = LatencyHistogram(max_samples)
        self._lock = threading.Lock()

        self.lookups = 0
        self.unsupported_notes = 0
        self.modulations = 0
        self.rejected_modulations = 0

        self.start_time = time.time()

        logger.info("Intonation metrics initialized")

    def record_lookup(self, latency_ms: float) -> None:
        """Record a completed frequency or note lookup.

        Args:
            latency_ms: Lookup time in milliseconds
        """
        with self._lock:
            self.lookups += 1
            self.lookup_latency.record(latency_ms)

        if latency_ms > SLOW_LOOKUP_MS:
            logger.warning(
                f"Lookup latency {latency_ms:.3f}ms exceeds {SLOW_LOOKUP_MS}ms",
                extra={"latency_ms": latency_ms},
            )

    def record_unsupported_note(self) -> None:
        with self._lock:
            self.unsupported_notes += 1

    def record_modulation(self) -> None:
        with self._lock:
            self.modulations += 1

    def record_rejected_modulation(self) -> None:
        with self._lock:
            self.rejected_modulations += 1
            total = self.rejected_modulations
        logger.warning(f"Modulation rejected (total: {total})")

    def get_summary(self) -> dict[str, Any]:
        """Get current metrics summary.

        Returns:
            Dictionary with lookup latency stats, counters, uptime and
            an ISO 8601 timestamp
        """
        with self._lock:
            return {
                "lookup_latency_ms": self.lookup_latency.get_stats(),
                "lookups": self.lookups,
                "unsupported_notes": self.unsupported_notes,
                "modulations": self.modulations,
                "rejected_modulations": self.rejected_modulations,
                "uptime_sec": time.time() - self.start_time,
                "timestamp": datetime.now().isoformat(),
            }
