from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, List, NamedTuple, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Text:
    value: str


NumberOrText = Union[Number, Text]


def classify(element: Any) -> Optional[NumberOrText]:
    """Tag one JSON element of a metrics pair, or return None for anything else."""
    # bool is an int subclass but `true` is not a measurement.
    if isinstance(element, bool):
        return None
    if isinstance(element, (int, float)):
        return Number(float(element))
    if isinstance(element, str):
        return Text(element)
    return None


class MetricPair(NamedTuple):
    label: str
    value: float


def reconcile_pair(raw: Any) -> MetricPair:
    """Turn a ``[label, value]`` or ``[value, label]`` pair into a MetricPair.

    The label is whichever element is text and the value whichever is a
    number; position does not matter. Anything other than exactly one of
    each is rejected.
    """
    if isinstance(raw, MetricPair):
        return raw
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError(f"metric entry must be a two element array, got {raw!r}")
    first, second = classify(raw[0]), classify(raw[1])
    if isinstance(first, Text) and isinstance(second, Number):
        return MetricPair(first.value, second.value)
    if isinstance(first, Number) and isinstance(second, Text):
        return MetricPair(second.value, first.value)
    raise ValueError(f"metric entry needs one label and one number, got {raw!r}")


def _none_as_zero(value: Any) -> Any:
    return 0 if value is None else value


def _none_as_empty(value: Any) -> Any:
    return {} if value is None else value


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class QueueInfo(_Payload):
    size: float = 0

    size_default = field_validator("size", mode="before")(_none_as_zero)


class Queues(_Payload):
    celery: QueueInfo = Field(default_factory=QueueInfo)
    queries: QueueInfo = Field(default_factory=QueueInfo)
    scheduled_queries: QueueInfo = Field(default_factory=QueueInfo)

    queue_defaults = field_validator("celery", "queries", "scheduled_queries", mode="before")(
        _none_as_empty
    )


class Manager(_Payload):
    # Redash serialises this one as a string, e.g. "7".
    outdated_queries_count: float = 0
    queues: Queues = Field(default_factory=Queues)

    count_default = field_validator("outdated_queries_count", mode="before")(_none_as_zero)
    queues_default = field_validator("queues", mode="before")(_none_as_empty)


class DatabaseMetrics(_Payload):
    metrics: List[Annotated[MetricPair, BeforeValidator(reconcile_pair)]] = Field(
        default_factory=list
    )

    @field_validator("metrics", mode="before")
    def null_metrics_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class StatusSnapshot(_Payload):
    """Decoded body of ``/status.json``."""

    dashboards_count: float = 0
    queries_count: float = 0
    query_results_count: float = 0
    unused_query_results_count: float = 0
    widgets_count: float = 0
    redis_used_memory: float = 0
    version: str = ""
    manager: Manager = Field(default_factory=Manager)
    database_metrics: DatabaseMetrics = Field(default_factory=DatabaseMetrics)

    counts_default = field_validator(
        "dashboards_count",
        "queries_count",
        "query_results_count",
        "unused_query_results_count",
        "widgets_count",
        "redis_used_memory",
        mode="before",
    )(_none_as_zero)

    @field_validator("version", mode="before")
    def version_as_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    sections_default = field_validator("manager", "database_metrics", mode="before")(
        _none_as_empty
    )


class TaskDescriptor(_Payload):
    # Only counted; queued jobs arrive with most of these null.
    task_id: Optional[str] = None
    task_name: Optional[str] = None
    worker: Optional[str] = None
    worker_pid: Optional[int] = None
    state: Optional[str] = None
    queue: Optional[str] = None
    scheduled: Optional[bool] = None
    user_id: Optional[int] = None
    org_id: Optional[int] = None
    data_source_id: Optional[int] = None
    query_id: Optional[Union[int, str]] = None
    start_time: Optional[float] = None
    enqueue_time: Optional[float] = None


class TaskSnapshot(_Payload):
    """Decoded body of ``/api/admin/queries/tasks``."""

    tasks: List[TaskDescriptor] = Field(default_factory=list)

    @field_validator("tasks", mode="before")
    def null_tasks_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def active_count(self) -> int:
        return len(self.tasks)
