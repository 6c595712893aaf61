from typing import Dict

from ..models import StatusSnapshot
from .base import MetricSet

QUERY_RESULTS_SIZE_LABEL = "Query Results Size"
DB_SIZE_LABEL = "Redash DB Size"


def size_metrics(snapshot: StatusSnapshot) -> Dict[str, float]:
    """Label -> value for ``database_metrics``; a repeated label keeps its last value."""
    values: Dict[str, float] = {}
    for pair in snapshot.database_metrics.metrics:
        values[pair.label] = pair.value
    return values


def normalize(snapshot: StatusSnapshot) -> MetricSet:
    sizes = size_metrics(snapshot)
    queues = snapshot.manager.queues
    return MetricSet(
        version=snapshot.version,
        dashboards_count=snapshot.dashboards_count,
        query_results_size_bytes=sizes.get(QUERY_RESULTS_SIZE_LABEL, 0.0),
        db_size_bytes=sizes.get(DB_SIZE_LABEL, 0.0),
        outdated_queries_count=snapshot.manager.outdated_queries_count,
        queues_celery=queues.celery.size,
        queues_queries=queues.queries.size,
        queues_scheduled_queries=queues.scheduled_queries.size,
        queries_count=snapshot.queries_count,
        query_results_count=snapshot.query_results_count,
        redis_used_memory_bytes=snapshot.redis_used_memory,
        unused_query_results_count=snapshot.unused_query_results_count,
        widgets_count=snapshot.widgets_count,
    )
