import pytest

from redash_exporter.errors import DecodeError, MalformedPayloadError
from redash_exporter.services.decoder import decode_status, decode_tasks


def test_decode_status_fixture(status_body):
    snapshot = decode_status(status_body)
    assert snapshot.dashboards_count == 12
    assert snapshot.queries_count == 40
    assert snapshot.version == "8.0.0+b32245"
    assert snapshot.manager.outdated_queries_count == 5


def test_decode_tasks_fixture(tasks_body):
    assert decode_tasks(tasks_body).active_count == 2


@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"<html><body>Unauthorized</body></html>",
        b'{"dashboards_count": ',
        b"[]",
        b'"status"',
        b'{"dashboards_count": "many"}',
    ],
)
def test_decode_status_malformed(body):
    with pytest.raises(MalformedPayloadError) as info:
        decode_status(body)
    assert isinstance(info.value, DecodeError)
    assert str(info.value).startswith("status parse error: ")
    assert str(info.value).endswith("Is api key correct?")


def test_decode_tasks_malformed():
    with pytest.raises(MalformedPayloadError) as info:
        decode_tasks(b'{"tasks": {"not": "a list"}}')
    assert info.value.kind == "tasks"
    assert "tasks" in info.value.detail


def test_malformed_detail_names_the_field():
    with pytest.raises(MalformedPayloadError) as info:
        decode_status(b'{"manager": {"queues": {"celery": {"size": "lots"}}}}')
    assert info.value.detail.startswith("manager.queues.celery.size:")
