# src/habityzer_cli/api/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Mapping

from .errors import DecodeError
from .relations import ABSENT, Relation, resolve_relation


class StatusId(IntEnum):
    """Well-known task status ids on the server."""

    IDEA = 1
    TODO = 2
    IN_PROGRESS = 3
    DONE = 4


# The default "active" view.
ACTIVE_STATUS_IDS: tuple[int, ...] = (StatusId.TODO, StatusId.IN_PROGRESS)

DEFAULT_PRIORITY = 2


def _require_object(payload: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise DecodeError(f"expected a JSON object for {what}, got {type(payload).__name__}")
    return payload


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(slots=True)
class Task:
    id: Any
    title: str
    description: str | None = None
    priority: int | None = None
    status: Relation = ABSENT
    project: Relation = ABSENT
    due_date: str | None = None
    completed_at: str | None = None
    created_at: str | None = None

    # The JSON object as received, so server fields this client does not model survive.
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, payload: Any) -> Task:
        data = _require_object(payload, "task")
        priority = data.get("priority")
        return cls(
            id=data.get("id"),
            title=str(data.get("title") or ""),
            description=_opt_str(data.get("description")),
            priority=priority if isinstance(priority, int) else None,
            status=resolve_relation(data.get("status")),
            project=resolve_relation(data.get("project")),
            due_date=_opt_str(data.get("dueDate")),
            completed_at=_opt_str(data.get("completedAt")),
            created_at=_opt_str(data.get("createdAt")),
            raw=dict(data),
        )


@dataclass(slots=True, frozen=True)
class TaskStatus:
    id: Any
    name: str

    @classmethod
    def from_api(cls, payload: Any) -> TaskStatus:
        data = _require_object(payload, "task status")
        return cls(id=data.get("id"), name=str(data.get("name") or ""))


@dataclass(slots=True, frozen=True)
class Project:
    id: Any
    name: str
    short_name: str | None = None
    color: str | None = None
    description: str | None = None

    @classmethod
    def from_api(cls, payload: Any) -> Project:
        data = _require_object(payload, "project")
        return cls(
            id=data.get("id"),
            name=str(data.get("name") or ""),
            short_name=_opt_str(data.get("shortName")),
            color=_opt_str(data.get("color")),
            description=_opt_str(data.get("description")),
        )
