# src/habityzer_cli/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- takes the settings loaded once at startup,
- builds the HTTP transport and wires it into the TaskService,
- hands both back so the caller can close the transport when done.
"""

from __future__ import annotations

import logging

import httpx

from ..api.resources import TaskService
from ..api.transport import HttpTransport
from ..config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_service(
    *,
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
) -> tuple[TaskService, HttpTransport]:
    """
    Build a TaskService from the provided settings.

    Keeping settings (and the HTTP client) injectable makes the CLI testable against
    a fake server and avoids hidden global config reads.
    Raises ConfigError when the API token is missing.
    """
    if settings is None:
        settings = get_settings()

    transport = HttpTransport(settings, client=client)
    service = TaskService(transport, default_project_id=settings.project_id)
    logger.debug("Service ready base_url=%s project_id=%s", settings.api_base_url, settings.project_id)
    return service, transport
