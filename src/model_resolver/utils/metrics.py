"""
Metrics Collection Module for Model Resolver
Counts what the inference engine derives and times schema resolution
"""
from __future__ import annotations

import json
import statistics
import threading
import time
from collections import defaultdict
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional


class MetricsCollector:
    """Thread-safe metrics collector"""

    _instance: Optional["MetricsCollector"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "MetricsCollector":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._counters: Dict[str, float] = defaultdict(float)
        self._gauges: Dict[str, float] = {}
        self._timers: Dict[str, List[float]] = defaultdict(list)
        self._data_lock = threading.Lock()
        self._enabled = True
        self._initialized = True

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        """Enable metrics collection"""
        self._enabled = True

    def disable(self) -> None:
        """Disable metrics collection"""
        self._enabled = False

    def counter(self, name: str, value: float = 1.0, labels: Optional[Dict[str, str]] = None) -> None:
        """Increment a counter"""
        if not self._enabled:
            return

        key = self._make_key(name, labels)
        with self._data_lock:
            self._counters[key] += value

    def gauge(self, name: str, value: float, labels: Optional[Dict[str, str]] = None) -> None:
        """Set a gauge value"""
        if not self._enabled:
            return

        key = self._make_key(name, labels)
        with self._data_lock:
            self._gauges[key] = value

    def timer(self, name: str, duration: float, labels: Optional[Dict[str, str]] = None) -> None:
        """Record a timer value"""
        if not self._enabled:
            return

        key = self._make_key(name, labels)
        with self._data_lock:
            self._timers[key].append(duration)

    @contextmanager
    def time_operation(self, name: str, labels: Optional[Dict[str, str]] = None) -> Generator[None, None, None]:
        """Context manager for timing operations"""
        start = time.time()
        try:
            yield
        finally:
            self.timer(name, time.time() - start, labels)

    def _make_key(self, name: str, labels: Optional[Dict[str, str]] = None) -> str:
        """Create a unique key for metric with labels"""
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"

    def get_counter(self, name: str, labels: Optional[Dict[str, str]] = None) -> float:
        with self._data_lock:
            return self._counters.get(self._make_key(name, labels), 0.0)

    def get_metrics(self) -> Dict[str, Any]:
        """Get all collected metrics"""
        with self._data_lock:
            metrics = {
                "counters": dict(self._counters),
                "gauges": dict(self._gauges),
                "timers": {},
            }

            for key, values in self._timers.items():
                if values:
                    metrics["timers"][key] = {
                        "count": len(values),
                        "sum": sum(values),
                        "min": min(values),
                        "max": max(values),
                        "mean": statistics.mean(values),
                    }

            return metrics

    def reset(self) -> None:
        """Reset all metrics"""
        with self._data_lock:
            self._counters.clear()
            self._gauges.clear()
            self._timers.clear()

    def export_json(self) -> str:
        """Export metrics as JSON string"""
        return json.dumps(self.get_metrics(), indent=2, default=str)


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector instance"""
    return MetricsCollector()


def counter(name: str, value: float = 1.0, labels: Optional[Dict[str, str]] = None) -> None:
    """Increment a counter"""
    get_metrics_collector().counter(name, value, labels)


def gauge(name: str, value: float, labels: Optional[Dict[str, str]] = None) -> None:
    """Set a gauge value"""
    get_metrics_collector().gauge(name, value, labels)


def timer(name: str, duration: float, labels: Optional[Dict[str, str]] = None) -> None:
    """Record a timer value"""
    get_metrics_collector().timer(name, duration, labels)


@contextmanager
def time_operation(name: str, labels: Optional[Dict[str, str]] = None) -> Generator[None, None, None]:
    """Context manager for timing operations"""
    with get_metrics_collector().time_operation(name, labels):
        yield


class ResolverMetrics:
    """Resolver specific metrics helper"""

    @staticmethod
    def record_relation_inferred(mirrored: bool) -> None:
        counter("relations_inferred_total", 1.0, {"mirrored": str(mirrored).lower()})

    @staticmethod
    def record_index_created(reason: str) -> None:
        counter("indexes_created_total", 1.0, {"reason": reason})

    @staticmethod
    def record_primary_key_derived(tier: str) -> None:
        counter("primary_keys_derived_total", 1.0, {"tier": tier})

    @staticmethod
    def record_alias_renamed() -> None:
        counter("aliases_renamed_total")

    @staticmethod
    def record_schema_resolution(duration: float, tables: int, tables_without_key: int) -> None:
        """Record one full schema resolution run"""
        timer("schema_resolution_duration", duration)
        counter("schema_resolution_total")
        gauge("schema_tables", float(tables))
        gauge("schema_tables_without_primary_key", float(tables_without_key))
