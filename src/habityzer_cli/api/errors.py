# src/habityzer_cli/api/errors.py

from __future__ import annotations


class TransportError(Exception):
    """Base class for every failure of a single API request."""


class NetworkError(TransportError):
    """DNS failure, refused connection or timeout. The request never got a response."""

    def __init__(self, cause: BaseException, *, method: str = "", url: str = "") -> None:
        self.cause = cause
        self.method = method
        self.url = url
        where = f" on {method} {url}" if method else ""
        super().__init__(f"Network error{where}: {cause}")


class HttpStatusError(TransportError):
    """Non-2xx response. Carries the status code and the raw response body."""

    def __init__(self, status_code: int, raw_body: str, *, method: str = "", url: str = "") -> None:
        self.status_code = status_code
        self.raw_body = raw_body
        self.method = method
        self.url = url
        prefix = f"{method} {url} -> " if method else ""
        super().__init__(f"{prefix}HTTP {status_code}: {raw_body}")


class DecodeError(TransportError):
    """A successful response whose body is not the JSON we expected."""

    def __init__(self, cause: BaseException | str) -> None:
        self.cause = cause
        super().__init__(f"Failed to parse response: {cause}")
