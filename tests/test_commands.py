# tests/test_commands.py

from __future__ import annotations

from dataclasses import replace
from urllib.parse import parse_qsl

import pytest

from habityzer_cli.cli import main as main_module
from habityzer_cli.cli.commands import CommandContext, CommandRegistry, coerce_update_value, registry
from habityzer_cli.cli.main import main

from .fakes import FakeTaskServer


@pytest.fixture()
def ctx(service) -> CommandContext:
    return CommandContext(service=service, project_id=2)


@pytest.fixture()
def quiet_logging(monkeypatch) -> None:
    monkeypatch.setattr(main_module, "setup_logging", lambda **_: None)


@pytest.mark.asyncio
async def test_command_registry_routes_names_and_aliases(ctx) -> None:
    reg = CommandRegistry()
    called: list[tuple[str, list[str]]] = []

    async def h(ctx, args):
        called.append(("h", args))
        return "h"

    async def help_(ctx, args):
        return "help"

    reg.register("help", help_, "help")
    reg.register("a", h, "a", aliases=["alias"])

    assert await reg.handle(ctx, ["a", "x"]) == "h"
    assert await reg.handle(ctx, ["ALIAS"]) == "h"
    assert await reg.handle(ctx, ["nope"]) == "help"
    assert await reg.handle(ctx, []) == "help"
    assert called == [("h", ["x"]), ("h", [])]


@pytest.mark.asyncio
async def test_list_done_requests_done_status(ctx, transport) -> None:
    transport.queue({"member": []})

    out = await registry.handle(ctx, ["list", "done"])

    query = dict(parse_qsl(transport.calls[0].path.split("?", 1)[1]))
    assert query["status[]"] == "/api/task_statuses/4"
    assert "Completed Tasks" in out
    assert "No tasks found." in out


@pytest.mark.asyncio
async def test_usage_messages_make_no_requests(ctx, transport) -> None:
    assert "Usage" in await registry.handle(ctx, ["update", "1", "title"])
    assert "Usage" in await registry.handle(ctx, ["move", "1"])
    assert "Usage" in await registry.handle(ctx, ["delete"])
    assert "task ID" in await registry.handle(ctx, ["show"])
    assert "task title" in await registry.handle(ctx, ["create"])
    assert transport.calls == []


@pytest.mark.asyncio
async def test_update_coerces_priority(ctx, transport) -> None:
    transport.queue({"id": 1, "title": "A"})

    out = await registry.handle(ctx, ["update", "1", "priority", "3"])

    assert transport.calls[0].body == {"priority": 3}
    assert "Task updated successfully" in out


def test_coerce_update_value() -> None:
    assert coerce_update_value("priority", "5") == 5
    assert coerce_update_value("priority", "-1") == -1
    assert coerce_update_value("priority", "--5") == "--5"
    assert coerce_update_value("priority", "high") == "high"
    assert coerce_update_value("status", "4") == "/api/task_statuses/4"
    assert coerce_update_value("project", "7") == "/api/projects/7"
    assert coerce_update_value("status", "/api/task_statuses/4") == "/api/task_statuses/4"
    assert coerce_update_value("title", "42") == "42"


@pytest.mark.asyncio
async def test_help_lists_commands_and_configuration(ctx) -> None:
    out = await registry.handle(ctx, ["help"])
    for name in ("list", "show", "create", "update", "move", "delete", "statuses", "projects"):
        assert name in out
    assert "HABITYZER_API_TOKEN" in out


def test_main_lists_tasks(settings, capsys, quiet_logging) -> None:
    server = FakeTaskServer()
    server.add_task(id=1, title="Write tests", priority=2, status={"id": 2, "name": "Todo"})

    code = main(["list"], settings=settings, client=server.client())

    out = capsys.readouterr().out
    assert code == 0
    assert "Project ID: 2" in out
    assert "[ID: 1] Write tests" in out
    assert "Status: Todo" in out


def test_main_exits_1_when_get_fails(settings, capsys, quiet_logging) -> None:
    server = FakeTaskServer(fail_with=(500, "boom"))

    code = main(["show", "42"], settings=settings, client=server.client())

    assert code == 1
    assert "HTTP 500" in capsys.readouterr().err


def test_main_exits_1_without_token(settings, capsys, quiet_logging) -> None:
    code = main(["list"], settings=replace(settings, api_token=None))

    assert code == 1
    assert "HABITYZER_API_TOKEN" in capsys.readouterr().err


def test_main_list_failure_still_exits_0(settings, capsys, quiet_logging) -> None:
    server = FakeTaskServer(fail_with=(500, "boom"))

    assert main(["list", "all"], settings=settings, client=server.client()) == 0
    assert "No tasks found." in capsys.readouterr().out
