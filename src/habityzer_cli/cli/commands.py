# src/habityzer_cli/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from ..api.query import filter_for_name
from ..api.relations import PROJECTS, TASK_STATUSES, to_iri
from ..api.resources import TaskService
from ..config import ENV_VARS
from .display import format_projects, format_statuses, format_task_details, format_tasks

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandContext:
    service: TaskService
    project_id: int


CommandHandler = Callable[[CommandContext, list[str]], Awaitable[str]]


class CommandRegistry:
    """Command registry used by the CLI entry point (list, show, create, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, tuple[str, str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        usage: str = "",
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = (usage or name, help_text)
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, ctx: CommandContext, argv: list[str]) -> str:
        """
        Run `argv[0]` with the remaining arguments and return its output.
        Missing or unknown commands print the help text.
        """
        name = argv[0].lower() if argv else "help"
        args = argv[1:]
        logger.debug("Command %s args=%s", name, args)

        handler = self._handlers.get(name) or self._handlers.get("help")
        if handler is None:
            return "No commands registered."
        return await handler(ctx, args)

    def build_help(self, project_id: int) -> str:
        lines = ["", "Available commands:"]
        for usage, help_text in self._help.values():
            lines.append(f"  {usage:<30} - {help_text}")
        lines += [
            "",
            "Examples:",
            "  habityzer list                # Active tasks (todo + in-progress)",
            "  habityzer list todo           # Todo tasks only",
            "  habityzer list progress       # In progress tasks only",
            "  habityzer list done           # Completed tasks",
            "  habityzer list ideas          # Ideas only",
            "  habityzer list all            # All tasks (all statuses)",
            "  habityzer show 123",
            '  habityzer create "Fix bug" "Fix the authentication issue"',
            "",
            "Filters:",
            "  Default: active tasks only (Todo + In Progress, excludes Ideas + Done)",
            "  Status filters: todo, progress, done, ideas, all",
            f"  Project: automatically filtered to the configured project (ID: {project_id})",
            "",
            "Configuration (environment or .env):",
        ]
        for name, description in ENV_VARS.items():
            lines.append(f"  {name:<36} {description}")
        return "\n".join(lines)


registry = CommandRegistry()


def coerce_update_value(field: str, value: str) -> Any:
    """
    Turn a command-line value into its merge-patch JSON value.

    priority -> int, status/project numeric ids -> IRIs, everything else verbatim.
    """
    if field == "priority":
        try:
            return int(value)
        except ValueError:
            return value
    if field == "status" and value.strip().isdigit():
        return to_iri(TASK_STATUSES, int(value))
    if field == "project" and value.strip().isdigit():
        return to_iri(PROJECTS, int(value))
    return value


async def cmd_help(ctx: CommandContext, args: list[str]) -> str:
    return registry.build_help(ctx.project_id)


async def cmd_list(ctx: CommandContext, args: list[str]) -> str:
    named = filter_for_name(args[0] if args else None)
    tasks = await ctx.service.list_tasks(named.task_filter)
    return format_tasks(tasks, named.title)


async def cmd_statuses(ctx: CommandContext, args: list[str]) -> str:
    return format_statuses(await ctx.service.get_task_statuses())


async def cmd_projects(ctx: CommandContext, args: list[str]) -> str:
    return format_projects(await ctx.service.get_projects())


async def cmd_show(ctx: CommandContext, args: list[str]) -> str:
    if not args:
        return "Please provide a task ID: habityzer show <taskId>"
    task = await ctx.service.get_task(args[0])
    return format_task_details(task)


async def cmd_create(ctx: CommandContext, args: list[str]) -> str:
    if not args or not args[0]:
        return 'Please provide a task title: habityzer create "Task title" "Description"'
    title = args[0]
    description = args[1] if len(args) > 1 else ""
    task = await ctx.service.create_task(title, description)
    return f"Task created successfully: [ID: {task.id}] {task.title}"


async def cmd_update(ctx: CommandContext, args: list[str]) -> str:
    if len(args) < 3 or not all(args[:3]):
        return "Usage: habityzer update <taskId> <field> <value>"
    task_id, field, value = args[0], args[1], args[2]
    task = await ctx.service.update_task(task_id, {field: coerce_update_value(field, value)})
    return f"Task updated successfully: [ID: {task.id}] {task.title}"


async def cmd_move(ctx: CommandContext, args: list[str]) -> str:
    if len(args) < 2 or not all(args[:2]):
        return "Usage: habityzer move <taskId> <statusId>"
    task = await ctx.service.move_task_to_status(args[0], args[1])
    return f"Task moved successfully: [ID: {task.id}] {task.title}"


async def cmd_delete(ctx: CommandContext, args: list[str]) -> str:
    if not args:
        return "Usage: habityzer delete <taskId>"
    await ctx.service.delete_task(args[0])
    return "Task deleted successfully"


registry.register("help", cmd_help, "Show this help.", usage="help")
registry.register(
    "list", cmd_list, "List tasks (default: active only).", usage="list [filter]", aliases=["tasks"]
)
registry.register("show", cmd_show, "Show detailed task info with description.", usage="show <taskId>")
registry.register("projects", cmd_projects, "Show available projects.", usage="projects")
registry.register("statuses", cmd_statuses, "Show available task statuses.", usage="statuses")
registry.register("create", cmd_create, "Create new task.", usage='create "title" "description"')
registry.register("update", cmd_update, "Update task field.", usage="update <id> <field> <value>")
registry.register("move", cmd_move, "Move task to status.", usage="move <id> <statusId>")
registry.register("delete", cmd_delete, "Delete task.", usage="delete <id>")
