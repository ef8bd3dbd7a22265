from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import wraps
from math import sqrt
from time import perf_counter
from typing import Any, Callable, Dict, Iterator, Sequence, TypeVar, cast

from study_diagnostic.core.config import settings as _settings

_F = TypeVar("_F", bound=Callable[..., Any])

DEFAULT_BUCKETS_MS: tuple[float, ...] = (0.5, 1.0, 5.0, 10.0, 50.0)


@dataclass(slots=True)
class TimingStats:
    """Running aggregates (Welford) for one timing label."""

    count: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0
    _mean_ms: float = 0.0
    _m2: float = 0.0

    def update(self, elapsed_ms: float) -> None:
        value = float(elapsed_ms)
        self.count += 1
        self.total_ms += value
        self.max_ms = max(self.max_ms, value)
        delta = value - self._mean_ms
        self._mean_ms += delta / self.count
        self._m2 += delta * (value - self._mean_ms)

    @property
    def variance_ms(self) -> float:
        return self._m2 / (self.count - 1) if self.count > 1 else 0.0

    def snapshot(self) -> Dict[str, float]:
        variance = self.variance_ms
        return {
            "count": float(self.count),
            "total_ms": self.total_ms,
            "max_ms": self.max_ms,
            "avg_ms": self._mean_ms,
            "variance_ms": variance,
            "stddev_ms": sqrt(variance) if variance > 0.0 else 0.0,
        }


@dataclass(slots=True)
class HistogramBuckets:
    """Cumulative-free bucket counts; values above the last boundary land in ``+Inf``."""

    boundaries: tuple[float, ...]
    counts: Dict[str, float] = field(init=False)

    def __post_init__(self) -> None:
        self.counts = {str(boundary): 0.0 for boundary in self.boundaries}
        self.counts["+Inf"] = 0.0

    def observe(self, value: float) -> None:
        for boundary in self.boundaries:
            if value <= boundary:
                self.counts[str(boundary)] += 1.0
                return
        self.counts["+Inf"] += 1.0


class _MetricsRegistry:
    """Thread-safe in-process store for timings, counters, histograms and last runs."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._timings: Dict[str, TimingStats] = {}
        self._counters: Dict[str, float] = {}
        self._histograms: Dict[str, HistogramBuckets] = {}
        self._last_runs: Dict[str, Dict[str, Any]] = {}

    def record(self, label: str, elapsed_ms: float, *, histogram: bool = False, buckets: Sequence[float] | None = None) -> None:
        if not label:
            return
        with self._lock:
            self._timings.setdefault(label, TimingStats()).update(elapsed_ms)
            self._last_runs[label] = {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "duration_ms": float(elapsed_ms),
            }
            if histogram:
                hist = self._histograms.get(label)
                if hist is None:
                    hist = HistogramBuckets(tuple(buckets or DEFAULT_BUCKETS_MS))
                    self._histograms[label] = hist
                hist.observe(elapsed_ms)

    def inc(self, label: str, amount: float = 1.0) -> None:
        if not label:
            return
        with self._lock:
            self._counters[label] = self._counters.get(label, 0.0) + float(amount)

    def timings(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            return {label: stats.snapshot() for label, stats in self._timings.items()}

    def counters(self) -> Dict[str, float]:
        with self._lock:
            return dict(self._counters)

    def histograms(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            return {label: dict(hist.counts) for label, hist in self._histograms.items()}

    def last_runs(self) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            return {label: dict(payload) for label, payload in self._last_runs.items()}

    def reset(self) -> None:
        with self._lock:
            self._timings.clear()
            self._counters.clear()
            self._histograms.clear()
            self._last_runs.clear()


metrics_registry = _MetricsRegistry()

_INSTRUMENTATION_ENABLED: bool = bool(_settings.instrumentation_enabled)


def set_instrumentation_enabled(enabled: bool) -> None:
    global _INSTRUMENTATION_ENABLED
    _INSTRUMENTATION_ENABLED = bool(enabled)


def instrumentation_enabled() -> bool:
    return _INSTRUMENTATION_ENABLED


@contextmanager
def timer(label: str) -> Iterator[None]:
    """Time the enclosed block and record it under ``label``."""
    if not instrumentation_enabled():
        yield
        return
    t0 = perf_counter()
    try:
        yield
    finally:
        metrics_registry.record(label, (perf_counter() - t0) * 1000.0)


def measure_time(label: str, *, histogram: bool = False, buckets: Sequence[float] | None = None) -> Callable[[_F], _F]:
    """Decorator recording call duration, optionally into a histogram."""

    def _wrap(func: _F) -> _F:
        @wraps(func)
        def _inner(*args: Any, **kwargs: Any):
            if not instrumentation_enabled():
                return func(*args, **kwargs)
            t0 = perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed = (perf_counter() - t0) * 1000.0
                metrics_registry.record(label, elapsed, histogram=histogram, buckets=buckets)

        return cast(_F, _inner)

    return _wrap


def count_calls(label: str) -> Callable[[_F], _F]:
    """Decorator incrementing ``label`` on every invocation."""

    def _wrap(func: _F) -> _F:
        @wraps(func)
        def _inner(*args: Any, **kwargs: Any):
            if instrumentation_enabled():
                metrics_registry.inc(label)
            return func(*args, **kwargs)

        return cast(_F, _inner)

    return _wrap


def get_metrics() -> Dict[str, Dict[str, float]]:
    return metrics_registry.timings()


def get_counters() -> Dict[str, float]:
    return metrics_registry.counters()


def get_histograms() -> Dict[str, Dict[str, float]]:
    return metrics_registry.histograms()


def get_last_runs() -> Dict[str, Dict[str, Any]]:
    return metrics_registry.last_runs()


__all__ = [
    "timer",
    "measure_time",
    "count_calls",
    "get_metrics",
    "get_counters",
    "get_histograms",
    "get_last_runs",
    "metrics_registry",
    "set_instrumentation_enabled",
    "instrumentation_enabled",
]
