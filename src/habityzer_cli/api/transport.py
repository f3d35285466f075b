# src/habityzer_cli/api/transport.py

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ..config import Settings
from ..core.ports import JsonValue
from .errors import DecodeError, HttpStatusError, NetworkError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
MERGE_PATCH_CONTENT_TYPE = "application/merge-patch+json"
JSON_LD_CONTENT_TYPE = "application/ld+json"

# Only these methods ever carry a request body.
_BODY_METHODS = frozenset({"POST", "PATCH"})


def _make_timeout(settings: Settings) -> httpx.Timeout:
    connect_s = float(settings.connect_timeout_seconds)
    read_s = float(settings.read_timeout_seconds)
    return httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)


def join_url(base_url: str, path: str) -> str:
    """
    Append an endpoint path to the configured base URL.

    The base URL already ends with its /api segment, so a leading slash on the path
    is appended as-is and a bare path gets one separator.
    """
    base = base_url.rstrip("/")
    if path.startswith("/"):
        return f"{base}{path}"
    return f"{base}/{path}"


class HttpTransport:
    """
    One request in, parsed JSON (or a TransportError) out.

    No retries and no outcome logging here: the resource operations decide what a
    failure means for the caller.
    """

    def __init__(self, settings: Settings, *, client: httpx.AsyncClient | None = None) -> None:
        self._base_url = settings.api_base_url
        self._token = settings.require_token()
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=_make_timeout(settings))

    def __repr__(self) -> str:
        return f"HttpTransport(base_url={self._base_url!r}, token=***redacted***)"

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _headers(self, method: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": MERGE_PATCH_CONTENT_TYPE if method == "PATCH" else JSON_CONTENT_TYPE,
            "Accept": JSON_LD_CONTENT_TYPE,
        }

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: JsonValue | None = None,
    ) -> JsonValue:
        method = method.upper()
        url = join_url(self._base_url, path)
        headers = self._headers(method)

        content: bytes | None = None
        if body is not None and method in _BODY_METHODS:
            content = json.dumps(body).encode("utf-8")
            headers["Content-Length"] = str(len(content))

        logger.debug("HTTP %s %s", method, url)
        try:
            response = await self._client.request(method, url, headers=headers, content=content)
        except httpx.DecodingError as e:
            # Body arrived but its Content-Encoding could not be undone.
            raise DecodeError(e) from e
        except httpx.RequestError as e:
            raise NetworkError(e, method=method, url=url) from e

        raw = response.text
        if not response.is_success:
            raise HttpStatusError(response.status_code, raw, method=method, url=url)

        if not raw.strip():
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise DecodeError(e) from e
