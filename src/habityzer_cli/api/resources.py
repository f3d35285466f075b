# src/habityzer_cli/api/resources.py

from __future__ import annotations

"""
Task resource operations.

Each operation performs exactly one transport call and declares what a failure
means for the caller:
- DEGRADE: list-style reads log the failure and return an empty list.
- PROPAGATE: single-entity reads and every mutation log the failure and re-raise
  it unchanged to the caller.
"""

import functools
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, TypeVar
from urllib.parse import quote

from ..core.ports import JsonValue, Transport
from .errors import DecodeError, TransportError
from .models import DEFAULT_PRIORITY, Project, StatusId, Task, TaskStatus
from .query import TaskFilter, build_task_query
from .relations import PROJECTS, TASK_STATUSES, to_iri

logger = logging.getLogger(__name__)

T = TypeVar("T")

CompletionPredicate = Callable[[Any], bool]
Clock = Callable[[], datetime]


class ErrorPolicy(str, Enum):
    DEGRADE = "degrade"
    PROPAGATE = "propagate"


def error_policy(policy: ErrorPolicy, action: str):
    """Attach a failure policy to a resource operation (see module docstring)."""

    def decorate(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await fn(*args, **kwargs)
            except TransportError as e:
                logger.error("Failed to %s: %s", action, e)
                if policy is ErrorPolicy.DEGRADE:
                    return []
                raise

        wrapper.error_policy = policy  # type: ignore[attr-defined]
        return wrapper

    return decorate


def is_completion_status(status_id: Any) -> bool:
    """
    Default completion check for move_task_to_status.

    Only a textual identifier counts: one mentioning "complet" or naming the Done
    status. Numeric status ids (the usual CLI input) never match, so completedAt
    is not set for them.
    """
    if not isinstance(status_id, str):
        return False
    text = status_id.strip().lower()
    return "complet" in text or text == StatusId.DONE.name.lower()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso_instant(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def collection_members(payload: JsonValue) -> list[Any]:
    """
    Unwrap a collection envelope.

    Accepts {"member": [...]}, the prefixed {"hydra:member": [...]} form, or a bare list.
    """
    if isinstance(payload, Mapping):
        for key in ("member", "hydra:member"):
            members = payload.get(key)
            if isinstance(members, list):
                return members
        raise DecodeError("collection response has no member list")
    if isinstance(payload, list):
        return payload
    raise DecodeError(f"expected a collection, got {type(payload).__name__}")


def _task_path(task_id: Any) -> str:
    return f"/tasks/{quote(str(task_id), safe='')}"


class TaskService:
    """Domain operations against the task API, composed over an injected Transport."""

    def __init__(
        self,
        transport: Transport,
        *,
        default_project_id: int,
        completion_predicate: CompletionPredicate = is_completion_status,
        clock: Clock = _utc_now,
    ) -> None:
        self._transport = transport
        self.default_project_id = default_project_id
        self._is_completion = completion_predicate
        self._clock = clock

    # ---- reads (degrade) ----

    @error_policy(ErrorPolicy.DEGRADE, "fetch tasks")
    async def list_tasks(self, task_filter: TaskFilter | None = None) -> list[Task]:
        query = build_task_query(task_filter, self.default_project_id)
        payload = await self._transport.request(f"/tasks?{query}")
        return [Task.from_api(item) for item in collection_members(payload)]

    @error_policy(ErrorPolicy.DEGRADE, "fetch task statuses")
    async def get_task_statuses(self) -> list[TaskStatus]:
        payload = await self._transport.request("/task_statuses?page=1")
        return [TaskStatus.from_api(item) for item in collection_members(payload)]

    @error_policy(ErrorPolicy.DEGRADE, "fetch projects")
    async def get_projects(self) -> list[Project]:
        payload = await self._transport.request("/projects?page=1")
        return [Project.from_api(item) for item in collection_members(payload)]

    # ---- single entity + mutations (propagate) ----

    @error_policy(ErrorPolicy.PROPAGATE, "fetch task")
    async def get_task(self, task_id: Any) -> Task:
        payload = await self._transport.request(_task_path(task_id))
        return Task.from_api(payload)

    @error_policy(ErrorPolicy.PROPAGATE, "create task")
    async def create_task(
        self,
        title: str,
        description: str = "",
        status_id: Any = None,
        priority: int = DEFAULT_PRIORITY,
    ) -> Task:
        body = {
            "title": title,
            "description": description,
            "priority": priority,
            "status": to_iri(TASK_STATUSES, status_id or int(StatusId.TODO)),
            "project": to_iri(PROJECTS, self.default_project_id),
        }
        payload = await self._transport.request("/tasks", "POST", body)
        task = Task.from_api(payload)
        logger.info("Task created: %s", task.title)
        return task

    @error_policy(ErrorPolicy.PROPAGATE, "update task")
    async def update_task(self, task_id: Any, updates: Mapping[str, Any]) -> Task:
        # Merge-patch: the server only touches the fields named in the body.
        payload = await self._transport.request(_task_path(task_id), "PATCH", dict(updates))
        task = Task.from_api(payload)
        logger.info("Task updated: %s", task.title)
        return task

    @error_policy(ErrorPolicy.PROPAGATE, "delete task")
    async def delete_task(self, task_id: Any) -> bool:
        await self._transport.request(_task_path(task_id), "DELETE")
        logger.info("Task deleted: %s", task_id)
        return True

    @error_policy(ErrorPolicy.PROPAGATE, "move task")
    async def move_task_to_status(self, task_id: Any, status_id: Any) -> Task:
        updates: dict[str, Any] = {"status": to_iri(TASK_STATUSES, status_id)}
        if self._is_completion(status_id):
            updates["completedAt"] = _iso_instant(self._clock())
        return await self.update_task(task_id, updates)
