from __future__ import annotations

from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import MalformedPayloadError
from ..models import StatusSnapshot, TaskSnapshot

SnapshotT = TypeVar("SnapshotT", bound=BaseModel)


def _decode(model: Type[SnapshotT], kind: str, body: bytes) -> SnapshotT:
    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        raise MalformedPayloadError(kind, _summarize(exc)) from exc


def _summarize(exc: ValidationError) -> str:
    errors = exc.errors(include_url=False, include_input=False)
    first = errors[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    more = f" (+{len(errors) - 1} more)" if len(errors) > 1 else ""
    return f"{location}: {first['msg']}{more}"


def decode_status(body: bytes) -> StatusSnapshot:
    return _decode(StatusSnapshot, "status", body)


def decode_tasks(body: bytes) -> TaskSnapshot:
    return _decode(TaskSnapshot, "tasks", body)
