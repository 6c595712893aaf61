"""Shared fixtures and fakes for the exporter tests."""

import asyncio
import json
from typing import Dict, List, Union

import pytest
from prometheus_client import CollectorRegistry

from redash_exporter.metrics.registry import MetricRegistry
from redash_exporter.services.fetcher import STATUS_PATH, TASKS_PATH

STATUS_PAYLOAD = {
    "dashboards_count": 12,
    "database_metrics": {
        "metrics": [
            ["Query Results Size", 500],
            ["Redash DB Size", 900],
        ]
    },
    "manager": {
        "last_refresh_at": "1592204653.8562014",
        "outdated_queries_count": "5",
        "query_ids": "[]",
        "queues": {
            "celery": {"size": 3},
            "queries": {"size": 1},
            "scheduled_queries": {"size": 0},
        },
    },
    "queries_count": 40,
    "query_results_count": 321,
    "redis_used_memory": 1048576,
    "redis_used_memory_human": "1.00M",
    "unused_query_results_count": 17,
    "version": "8.0.0+b32245",
    "widgets_count": 55,
    "workers": [],
}

TASKS_PAYLOAD = {
    "tasks": [
        {
            "task_id": "0b3e5c1a",
            "task_name": "redash.tasks.execute_query",
            "worker": "celery@worker-1",
            "worker_pid": 31,
            "state": "executing_query",
            "queue": "queries",
            "scheduled": False,
            "user_id": 1,
            "org_id": 1,
            "query_id": "adhoc",
            "data_source_id": 2,
            "start_time": 1592204650.12,
            "enqueue_time": 1592204649.9,
        },
        {
            "task_id": "9a8d71f0",
            "task_name": "redash.tasks.refresh_queries",
            "worker": "celery@worker-2",
            "worker_pid": 44,
            "state": "active",
            "queue": "celery",
            "start_time": 1592204651.0,
        },
    ]
}


class FakeFetcher:
    """Serves canned bodies (or raises canned errors) per endpoint path."""

    def __init__(self, responses: Dict[str, Union[bytes, Exception]]) -> None:
        self.responses = dict(responses)
        self.calls: List[str] = []
        self.closed = False

    async def fetch(self, path: str) -> bytes:
        self.calls.append(path)
        await asyncio.sleep(0)
        result = self.responses[path]
        if isinstance(result, Exception):
            raise result
        return result

    async def aclose(self) -> None:
        self.closed = True


class FiniteTicker:
    """Ticker that allows a fixed number of extra cycles without real sleeping."""

    def __init__(self, ticks: int) -> None:
        self.remaining = ticks
        self.stopped = False

    async def wait(self) -> bool:
        await asyncio.sleep(0)
        if self.stopped or self.remaining <= 0:
            return False
        self.remaining -= 1
        return True

    def stop(self) -> None:
        self.stopped = True

    def reset(self) -> None:
        self.stopped = False


def as_body(payload: object) -> bytes:
    return json.dumps(payload).encode()


@pytest.fixture
def status_body() -> bytes:
    return as_body(STATUS_PAYLOAD)


@pytest.fixture
def tasks_body() -> bytes:
    return as_body(TASKS_PAYLOAD)


@pytest.fixture
def registry() -> MetricRegistry:
    return MetricRegistry(CollectorRegistry(auto_describe=True))


@pytest.fixture
def healthy_fetcher(status_body, tasks_body) -> FakeFetcher:
    return FakeFetcher({STATUS_PATH: status_body, TASKS_PATH: tasks_body})
