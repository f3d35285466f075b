# src/habityzer_cli/api/query.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
from urllib.parse import urlencode

from .models import ACTIVE_STATUS_IDS, StatusId
from .relations import PROJECTS, TASK_STATUSES, to_iri

FIRST_PAGE = "1"


@dataclass(frozen=True, slots=True)
class TaskFilter:
    """
    What to list.

    status_ids=None means "not supplied" and falls back to the active view;
    an explicit list (even an empty one) is used as given.
    """

    status_ids: Sequence[Any] | None = None
    project_id: int | None = None
    include_all: bool = False


def build_task_query(task_filter: TaskFilter | None, default_project_id: int | None) -> str:
    """
    Encode a TaskFilter as the /tasks query string.

    Status resolution, first match wins: explicit ids > include_all > active (2, 3).
    Array filters use the bracketed key convention (status[], project[]).
    """
    task_filter = task_filter or TaskFilter()
    params: list[tuple[str, str]] = [("page", FIRST_PAGE)]

    project_id = task_filter.project_id or default_project_id
    if project_id:
        params.append(("project[]", to_iri(PROJECTS, project_id)))

    if task_filter.status_ids is not None:
        for status_id in task_filter.status_ids:
            params.append(("status[]", to_iri(TASK_STATUSES, status_id)))
    elif not task_filter.include_all:
        for status_id in ACTIVE_STATUS_IDS:
            params.append(("status[]", to_iri(TASK_STATUSES, int(status_id))))

    return urlencode(params)


@dataclass(frozen=True, slots=True)
class NamedFilter:
    title: str
    task_filter: TaskFilter


ACTIVE_FILTER = NamedFilter("Active Tasks (Todo & In-Progress)", TaskFilter())

_NAMED_FILTERS: dict[str, NamedFilter] = {
    "done": NamedFilter("Completed Tasks", TaskFilter(status_ids=(int(StatusId.DONE),))),
    "todo": NamedFilter("Todo Tasks", TaskFilter(status_ids=(int(StatusId.TODO),))),
    "progress": NamedFilter("In Progress Tasks", TaskFilter(status_ids=(int(StatusId.IN_PROGRESS),))),
    "idea": NamedFilter("Ideas", TaskFilter(status_ids=(int(StatusId.IDEA),))),
    "all": NamedFilter("All Tasks (All Statuses)", TaskFilter(include_all=True)),
}

_ALIASES = {
    "completed": "done",
    "in-progress": "progress",
    "ideas": "idea",
}


def filter_for_name(name: str | None) -> NamedFilter:
    """Map a `list` argument to its filter; anything unknown is the active view."""
    key = (name or "").strip().lower()
    key = _ALIASES.get(key, key)
    return _NAMED_FILTERS.get(key, ACTIVE_FILTER)
