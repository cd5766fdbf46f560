"""
Async metrics collection for the log shipper.

Implements minimal Prometheus-compatible counters and histograms for the
accept and flush paths.

Design goals:
- Zero global state; each collector owns an isolated registry
- Safe no-op behavior for Prometheus when disabled, while still tracking
  in-memory counters for tests
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from prometheus_client import CollectorRegistry, Counter, Histogram


@dataclass
class ShipperMetrics:
    """Captured runtime counters for quick assertions in tests."""

    lines_accepted: int = 0
    flushes: int = 0
    events_sent: int = 0
    events_dropped: int = 0
    send_errors: int = 0
    provisioning_errors: int = 0


class MetricsCollector:
    """Consumer-scoped async metrics collector."""

    def __init__(self, *, enabled: bool = False) -> None:
        self._enabled = bool(enabled)
        self._lock = asyncio.Lock()
        self._state = ShipperMetrics()

        self._c_lines: Any | None = None
        self._c_sent: Any | None = None
        self._c_dropped: Any | None = None
        self._c_errors: Any | None = None
        self._h_batch_size: Any | None = None
        self._h_flush_latency: Any | None = None
        self._registry: CollectorRegistry | None = None

        if self._enabled:
            # Isolated registry to avoid global duplication in tests
            self._registry = CollectorRegistry()
            self._c_lines = Counter(
                "cwlogship_lines_accepted_total",
                "Total number of non-empty lines accepted into the buffer",
                registry=self._registry,
            )
            self._c_sent = Counter(
                "cwlogship_events_sent_total",
                "Total number of events delivered to CloudWatch Logs",
                registry=self._registry,
            )
            self._c_dropped = Counter(
                "cwlogship_events_dropped_total",
                "Total number of events dropped after a failed flush",
                registry=self._registry,
            )
            self._c_errors = Counter(
                "cwlogship_errors_total",
                "Total number of flush errors by stage",
                ["stage"],
                registry=self._registry,
            )
            self._h_batch_size = Histogram(
                "cwlogship_batch_size",
                "Number of events per sent batch",
                buckets=(1, 10, 100, 1000, 5000, 10000, 25000, 50000),
                registry=self._registry,
            )
            self._h_flush_latency = Histogram(
                "cwlogship_flush_seconds",
                "Latency of a successful flush including permit wait",
                buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
                registry=self._registry,
            )

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def registry(self) -> CollectorRegistry | None:
        """Expose the isolated Prometheus registry when enabled."""
        return self._registry

    async def record_line_accepted(self) -> None:
        async with self._lock:
            self._state.lines_accepted += 1
        if self._c_lines is not None:
            self._c_lines.inc()

    async def record_flush(self, *, batch_size: int, latency_seconds: float) -> None:
        async with self._lock:
            self._state.flushes += 1
            self._state.events_sent += batch_size
        if self._c_sent is not None:
            self._c_sent.inc(batch_size)
        if self._h_batch_size is not None:
            self._h_batch_size.observe(batch_size)
        if self._h_flush_latency is not None:
            self._h_flush_latency.observe(latency_seconds)

    async def record_events_dropped(self, count: int) -> None:
        async with self._lock:
            self._state.events_dropped += count
        if self._c_dropped is not None:
            self._c_dropped.inc(count)

    async def record_send_error(self) -> None:
        async with self._lock:
            self._state.send_errors += 1
        if self._c_errors is not None:
            self._c_errors.labels(stage="send").inc()

    async def record_provisioning_error(self) -> None:
        async with self._lock:
            self._state.provisioning_errors += 1
        if self._c_errors is not None:
            self._c_errors.labels(stage="provisioning").inc()

    async def snapshot(self) -> ShipperMetrics:
        async with self._lock:
            return ShipperMetrics(**vars(self._state))
