# tests/fakes.py

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from habityzer_cli.core.ports import JsonValue


@dataclass(slots=True)
class RecordedCall:
    path: str
    method: str
    body: JsonValue | None


class FakeTransport:
    """
    Deterministic Transport for service unit tests.

    - Captures calls for assertions
    - Returns queued payloads in order; a queued exception is raised instead
    """

    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.calls: list[RecordedCall] = []

    def queue(self, response: Any) -> None:
        self._responses.append(response)

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: JsonValue | None = None,
    ) -> JsonValue:
        self.calls.append(RecordedCall(path=path, method=method, body=body))
        if not self._responses:
            return None
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


STATUSES = [
    {"id": 1, "name": "Idea"},
    {"id": 2, "name": "Todo"},
    {"id": 3, "name": "In Progress"},
    {"id": 4, "name": "Done"},
]

PROJECTS = [
    {"id": 2, "name": "Habityzer", "shortName": "HAB", "color": "#ff0000"},
]


@dataclass
class FakeTaskServer:
    """
    In-memory task API behind httpx.MockTransport.

    Applies merge-patch on PATCH (null removes a field), answers 404 for unknown
    task ids and can be switched to fail every request with `fail_with`.
    """

    tasks: dict[int, dict[str, Any]] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)
    fail_with: tuple[int, str] | None = None

    def add_task(self, **fields: Any) -> dict[str, Any]:
        task_id = fields.pop("id", None) or max(self.tasks, default=0) + 1
        task = {"id": task_id, **fields}
        self.tasks[task_id] = task
        return task

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            status_code, text = self.fail_with
            return httpx.Response(status_code, text=text)

        path = request.url.path
        if not path.startswith("/api/"):
            return httpx.Response(404, json={"detail": "Not Found"})
        parts = path[len("/api/"):].strip("/").split("/")

        if parts == ["tasks"]:
            if request.method == "GET":
                return httpx.Response(200, json={"member": list(self.tasks.values())})
            if request.method == "POST":
                payload = json.loads(request.content)
                task = self.add_task(**payload, createdAt="2026-10-19T08:00:00+00:00")
                return httpx.Response(201, json=task)

        if len(parts) == 2 and parts[0] == "tasks":
            task = self.tasks.get(int(parts[1])) if parts[1].isdigit() else None
            if task is None:
                return httpx.Response(404, json={"detail": "Not Found"})
            if request.method == "GET":
                return httpx.Response(200, json=task)
            if request.method == "PATCH":
                for key, value in json.loads(request.content).items():
                    if value is None:
                        task.pop(key, None)
                    else:
                        task[key] = value
                return httpx.Response(200, json=task)
            if request.method == "DELETE":
                del self.tasks[task["id"]]
                return httpx.Response(204)

        if parts == ["task_statuses"] and request.method == "GET":
            return httpx.Response(200, json={"member": STATUSES})
        if parts == ["projects"] and request.method == "GET":
            return httpx.Response(200, json={"member": PROJECTS})

        return httpx.Response(405, text="Method Not Allowed")
