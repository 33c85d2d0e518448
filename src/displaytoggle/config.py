"""XDG config loading."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from displaytoggle.logging import LOG_LEVELS, normalize_level

DEFAULT_CONFIG_PATH = Path("~/.config/displaytoggle/config.toml")
DEFAULT_TOOL_PATHS = (
    "/opt/homebrew/bin/displayplacer",
    "/usr/local/bin/displayplacer",
)
DEFAULT_STATE_FILE = "~/.display-toggle-state"
DEFAULT_LOG_LEVEL = "WARN"
DEFAULT_PERSISTENT_ID_MARKER = "Persistent screen id:"
DEFAULT_INTERNAL_MARKER = "Type: MacBook built in"
DEFAULT_EXTERNAL_MARKER = "Type: external"
DEFAULT_RESOLUTION_MARKER = "Resolution:"
TOOL_ENV = "DISPLAYTOGGLE_TOOL"
STATE_FILE_ENV = "DISPLAYTOGGLE_STATE_FILE"

_MARKER_FIELDS = (
    "persistent_id_marker",
    "internal_marker",
    "external_marker",
    "resolution_marker",
)


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    tool_paths: list[str] = Field(default_factory=lambda: list(DEFAULT_TOOL_PATHS))
    state_file: str = DEFAULT_STATE_FILE
    log_level: str = DEFAULT_LOG_LEVEL
    persistent_id_marker: str = DEFAULT_PERSISTENT_ID_MARKER
    internal_marker: str = DEFAULT_INTERNAL_MARKER
    external_marker: str = DEFAULT_EXTERNAL_MARKER
    resolution_marker: str = DEFAULT_RESOLUTION_MARKER

    @field_validator("tool_paths")
    @classmethod
    def _validate_tool_paths(cls, value: list[str]) -> list[str]:
        cleaned = [item.strip() for item in value if item.strip()]
        if not cleaned:
            raise ValueError("At least one tool path is required")
        return cleaned

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = normalize_level(value)
        if normalized not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        return normalized

    @field_validator(*_MARKER_FIELDS)
    @classmethod
    def _validate_marker(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Marker must not be empty")
        return value

    @property
    def state_path(self) -> Path:
        return Path(self.state_file).expanduser()


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH.expanduser()
    return Path(path).expanduser()


def _normalize_tool_paths(value: object) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    normalized: list[str] = []
    for item in value:
        if not isinstance(item, str):
            continue
        candidate = item.strip()
        if candidate and candidate not in normalized:
            normalized.append(candidate)
    return normalized


def _sanitize(raw: dict[str, object]) -> AppConfig:
    cfg = AppConfig()

    tool_paths = _normalize_tool_paths(raw.get("tool_paths", []))
    if tool_paths:
        cfg.tool_paths = tool_paths
    env_tool = os.getenv(TOOL_ENV, "").strip()
    if env_tool:
        cfg.tool_paths = [env_tool, *[item for item in cfg.tool_paths if item != env_tool]]

    state_file = raw.get("state_file", cfg.state_file)
    if isinstance(state_file, str) and state_file.strip():
        cfg.state_file = state_file.strip()
    env_state = os.getenv(STATE_FILE_ENV, "").strip()
    if env_state:
        cfg.state_file = env_state

    log_level = raw.get("log_level", cfg.log_level)
    if isinstance(log_level, str) and normalize_level(log_level) in LOG_LEVELS:
        cfg.log_level = log_level

    for name in _MARKER_FIELDS:
        marker = raw.get(name)
        if isinstance(marker, str) and marker.strip():
            setattr(cfg, name, marker)

    return cfg


def load_config(path: str | Path | None = None) -> AppConfig:
    resolved = get_config_path(path)
    raw: object = {}
    if resolved.exists():
        try:
            with resolved.open("rb") as handle:
                raw = tomllib.load(handle)
        except (tomllib.TOMLDecodeError, OSError):
            raw = {}
    if not isinstance(raw, dict):
        raw = {}
    return _sanitize(raw)
