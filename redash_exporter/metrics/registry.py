from __future__ import annotations

from typing import Dict, Iterator, Optional, Protocol

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import GaugeMetricFamily, Metric

from .base import ACTIVE_TASKS_SERIES, INFO_SERIES, STATUS_SERIES, MetricSet


class GaugeSink(Protocol):
    """Write side of the registry, as seen by the poll loop."""

    def publish_status(self, metric_set: MetricSet) -> None: ...

    def publish_active_tasks(self, count: int) -> None: ...


class MetricRegistry:
    """Holds the last published Redash values and exposes them to Prometheus.

    A single writer (the poll loop) replaces the whole MetricSet reference on
    each successful poll. Scrapes read that reference once, so every
    system-status series in one exposition comes from the same snapshot.
    The active task count is published independently and may lag or lead the
    status values by one cycle.
    """

    def __init__(self, collector_registry: Optional[CollectorRegistry] = None) -> None:
        self.collector_registry = collector_registry or CollectorRegistry(auto_describe=True)
        self._status: Optional[MetricSet] = None
        self._active_tasks: float = 0.0
        self.collector_registry.register(RedashCollector(self))

    def publish_status(self, metric_set: MetricSet) -> None:
        self._status = metric_set

    def publish_active_tasks(self, count: int) -> None:
        self._active_tasks = float(count)

    @property
    def status(self) -> Optional[MetricSet]:
        """Last published MetricSet, or None before the first successful poll."""
        return self._status

    @property
    def active_tasks(self) -> float:
        return self._active_tasks

    def value(self, name: str, labels: Optional[Dict[str, str]] = None) -> Optional[float]:
        return self.collector_registry.get_sample_value(name, labels or {})

    def exposition(self) -> bytes:
        return generate_latest(self.collector_registry)


class RedashCollector:
    """prometheus_client custom collector rendering a MetricRegistry."""

    def __init__(self, registry: MetricRegistry) -> None:
        self._registry = registry

    def collect(self) -> Iterator[Metric]:
        status = self._registry.status
        active_tasks = self._registry.active_tasks

        if status is not None:
            info = GaugeMetricFamily(
                INFO_SERIES.name, INFO_SERIES.description, labels=list(INFO_SERIES.labels)
            )
            info.add_metric([status.version], 1.0)
            yield info

        values = (status or MetricSet()).as_series()
        for series in STATUS_SERIES:
            yield GaugeMetricFamily(series.name, series.description, value=values[series.name])

        yield GaugeMetricFamily(
            ACTIVE_TASKS_SERIES.name, ACTIVE_TASKS_SERIES.description, value=active_tasks
        )
