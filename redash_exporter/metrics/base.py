from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class SeriesDefinition:
    """Declarative definition of one exported gauge."""

    name: str
    description: str
    attribute: str = ""  # MetricSet field holding the value
    labels: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MetricSet:
    """Every system-status value produced by one normalization pass."""

    version: str = ""
    dashboards_count: float = 0
    query_results_size_bytes: float = 0
    db_size_bytes: float = 0
    outdated_queries_count: float = 0
    queues_celery: float = 0
    queues_queries: float = 0
    queues_scheduled_queries: float = 0
    queries_count: float = 0
    query_results_count: float = 0
    redis_used_memory_bytes: float = 0
    unused_query_results_count: float = 0
    widgets_count: float = 0

    def as_series(self) -> Dict[str, float]:
        return {series.name: getattr(self, series.attribute) for series in STATUS_SERIES}


INFO_SERIES = SeriesDefinition(
    name="redash_info",
    description="Information of Redash.",
    labels=("redash_version",),
)

STATUS_SERIES: Tuple[SeriesDefinition, ...] = (
    SeriesDefinition(
        "redash_dashboards_count", "Number of dashboards in Redash.", "dashboards_count"
    ),
    SeriesDefinition(
        "redash_query_results_size_bytes",
        "Size of Redash query results.",
        "query_results_size_bytes",
    ),
    SeriesDefinition("redash_db_size_bytes", "Size of Redash database.", "db_size_bytes"),
    SeriesDefinition(
        "redash_outdated_queries_count", "Number of outdated queries.", "outdated_queries_count"
    ),
    SeriesDefinition("redash_queues_celery", "Number of celery queues.", "queues_celery"),
    SeriesDefinition("redash_queues_queries", "Number of query queues.", "queues_queries"),
    SeriesDefinition(
        "redash_queues_scheduled_queries",
        "Number of scheduled query queues.",
        "queues_scheduled_queries",
    ),
    SeriesDefinition(
        "redash_queries_count", "Number of queries stored in redash.", "queries_count"
    ),
    SeriesDefinition(
        "redash_query_results_count", "Number of query results.", "query_results_count"
    ),
    SeriesDefinition(
        "redash_redis_used_memory_bytes",
        "Memory size used by redis in Redash.",
        "redis_used_memory_bytes",
    ),
    SeriesDefinition(
        "redash_unused_query_results_count",
        "Number of unused query results.",
        "unused_query_results_count",
    ),
    # The misspelling is part of the published name.
    SeriesDefinition("redash_wigets_count", "Number of widgets.", "widgets_count"),
)

ACTIVE_TASKS_SERIES = SeriesDefinition("redash_active_tasks", "Active tasks count.")

