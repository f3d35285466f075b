# src/habityzer_cli/cli/display.py

from __future__ import annotations

from datetime import datetime

from ..api.models import Project, Task, TaskStatus
from ..api.relations import relation_label

PRIORITY_GLYPH = "★"
DESCRIPTION_PREVIEW_CHARS = 100


def _heading(title: str, underline_extra: int = 0) -> list[str]:
    return ["", title, "=" * (len(title) + underline_extra)]


def format_date(raw: str | None) -> str:
    """YYYY-MM-DD for ISO instants; anything unparsable is shown as received."""
    if not raw:
        return ""
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return raw


def priority_stars(priority: int | None) -> str:
    return PRIORITY_GLYPH * max(1, priority or 1)


def _status_label(task: Task) -> str:
    return relation_label(task.status, unresolved_label="Status Set", absent_label="No Status")


def _project_label(task: Task) -> str:
    return relation_label(task.project, unresolved_label="Project Set", absent_label="No Project")


def format_tasks(tasks: list[Task], title: str = "Tasks") -> str:
    lines = _heading(title, underline_extra=2)

    if not tasks:
        lines.append("   No tasks found.")
        return "\n".join(lines)

    for i, task in enumerate(tasks, start=1):
        due = f" (Due: {format_date(task.due_date)})" if task.due_date else ""
        lines.append("")
        lines.append(f"{i}. [ID: {task.id}] {task.title}")
        lines.append(
            f"   Project: {_project_label(task)} | Status: {_status_label(task)}"
            f" | Priority: {priority_stars(task.priority)}{due}"
        )
        if task.description:
            preview = task.description[:DESCRIPTION_PREVIEW_CHARS]
            ellipsis = "..." if len(task.description) > DESCRIPTION_PREVIEW_CHARS else ""
            lines.append(f"   Description: {preview}{ellipsis}")

    return "\n".join(lines)


def format_statuses(statuses: list[TaskStatus]) -> str:
    lines = _heading("Available Task Statuses:")
    for i, status in enumerate(statuses, start=1):
        lines.append(f"{i}. [ID: {status.id}] {status.name}")
    return "\n".join(lines)


def format_projects(projects: list[Project]) -> str:
    lines = _heading("Available Projects:")
    for i, project in enumerate(projects, start=1):
        short = f" [{project.short_name}]" if project.short_name else ""
        color = f" ({project.color})" if project.color else ""
        lines.append(f"{i}. [ID: {project.id}] {project.name}{short}{color}")
        if project.description:
            lines.append(f"   Description: {project.description}")
    return "\n".join(lines)


def format_task_details(task: Task) -> str:
    status = _status_label(task)
    project = _project_label(task)

    due = f" | Due: {format_date(task.due_date)}" if task.due_date else ""
    completed = f" | Completed: {format_date(task.completed_at)}" if task.completed_at else ""

    lines = _heading("Task Details")
    lines += [
        "",
        f"ID: {task.id}",
        f"Title: {task.title}",
        f"Project: {project}",
        f"Status: {status}",
        f"Priority: {priority_stars(task.priority)}{due}{completed}",
    ]

    if task.description:
        lines += ["", "Description:", task.description]

    if task.created_at:
        lines += ["", f"Created: {format_date(task.created_at)}"]

    return "\n".join(lines)
