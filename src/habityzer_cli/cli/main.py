# src/habityzer_cli/cli/main.py

"""
CLI entrypoint.

Initializes logging, checks the configuration, builds the TaskService, then runs
one command and prints its output. Exit status 1 on a fatal error, 0 otherwise.
"""

from __future__ import annotations

import asyncio
import logging
import sys

import httpx

from ..api.resources import TaskService
from ..api.transport import HttpTransport
from ..cli.bootstrap import create_service
from ..cli.commands import CommandContext, registry
from ..config import ConfigError, Settings, get_settings
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run_command(service: TaskService, transport: HttpTransport, project_id: int, argv: list[str]) -> str:
    async with transport:
        return await registry.handle(CommandContext(service=service, project_id=project_id), argv)


def main(
    argv: list[str] | None = None,
    *,
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if settings is None:
        settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    try:
        service, transport = create_service(settings=settings, client=client)
    except ConfigError as e:
        logger.debug("Configuration check failed.", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        print("Please add your token to the .env file:", file=sys.stderr)
        print("HABITYZER_API_TOKEN=your_token_here", file=sys.stderr)
        return 1

    print(f"Habityzer CLI - Project ID: {settings.project_id}")

    try:
        output = asyncio.run(_run_command(service, transport, settings.project_id, argv))
    except Exception as e:
        # Final reporter: the service already logged the failure with context.
        logger.debug("Command failed.", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
