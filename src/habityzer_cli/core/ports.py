# src/habityzer_cli/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The resource operations depend on a Protocol instead of the concrete HTTP transport.
This keeps the network stack swappable and makes testing easier.
"""

from typing import Any, Protocol

JsonValue = Any
# Parsed JSON: dict / list / str / int / float / bool / None.


class Transport(Protocol):
    """
    Issue one API request and return the parsed JSON body.

    Raises TransportError subclasses (NetworkError, HttpStatusError, DecodeError).
    """

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: JsonValue | None = None,
    ) -> JsonValue: ...
