# src/habityzer_cli/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole process, built once and never mutated.
- No secrets required at import time: the token is validated by the CLI at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "HABITYZER"

DEFAULT_BASE_URL = "https://s.habityzer.com/api"
DEFAULT_PROJECT_ID = 2


class ConfigError(RuntimeError):
    """Raised when required configuration is missing."""


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


ENV_VARS = {
    _k("API_BASE_URL"): f"API origin including the /api prefix (default: {DEFAULT_BASE_URL}).",
    _k("API_TOKEN"): "Bearer token (required).",
    _k("PROJECT_ID"): f"Default project id for listing and creating tasks (default: {DEFAULT_PROJECT_ID}).",
    _k("LOG_LEVEL"): "Console logging level (default: WARNING).",
    _k("LOG_DIR"): "Directory for habityzer.log (default: empty, file log disabled).",
    _k("CONNECT_TIMEOUT_SECONDS"): "HTTP connect timeout (default: 5).",
    _k("READ_TIMEOUT_SECONDS"): "HTTP read timeout (default: 30).",
}


def _load_dotenv() -> None:
    """Load .env from the working directory; real environment values win."""
    load_dotenv(override=False)


_load_dotenv()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_optional_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- API ----
    api_base_url: str
    api_token: Optional[str]
    project_id: int

    # ---- HTTP ----
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 30.0

    # ---- Logging ----
    log_level: str = "WARNING"
    log_dir: Optional[Path] = None

    @staticmethod
    def from_env() -> "Settings":
        api_base_url = _env(_k("API_BASE_URL"), DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL
        api_token = _env(_k("API_TOKEN")).strip() or None

        # Zero is not a valid project id; treat it like an unset value.
        project_id = _env_int(_k("PROJECT_ID"), DEFAULT_PROJECT_ID) or DEFAULT_PROJECT_ID

        return Settings(
            api_base_url=api_base_url,
            api_token=api_token,
            project_id=project_id,
            connect_timeout_seconds=_env_float(_k("CONNECT_TIMEOUT_SECONDS"), 5.0),
            read_timeout_seconds=_env_float(_k("READ_TIMEOUT_SECONDS"), 30.0),
            log_level=_env(_k("LOG_LEVEL"), "WARNING").strip() or "WARNING",
            log_dir=_env_optional_path(_k("LOG_DIR")),
        )

    def require_token(self) -> str:
        if not self.api_token:
            raise ConfigError(f"{_k('API_TOKEN')} environment variable is required.")
        return self.api_token


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
