"""Deterministic error model and exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4
    TOOL_NOT_FOUND = 5
    STATE_ERROR = 6
    NO_DISPLAY = 7


@dataclass
class DisplayToggleError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


@dataclass
class ToolNotFound(DisplayToggleError):
    message: str = "Error: displayplacer not found"
    code: ExitCode = ExitCode.TOOL_NOT_FOUND
    hint: str = "Install it with `brew install displayplacer`."


@dataclass
class NoSavedState(DisplayToggleError):
    message: str = "No saved state"
    code: ExitCode = ExitCode.STATE_ERROR


@dataclass
class InvalidState(DisplayToggleError):
    message: str = "Invalid state file"
    code: ExitCode = ExitCode.STATE_ERROR


@dataclass
class StateWriteFailed(DisplayToggleError):
    message: str = "Could not save display state"
    code: ExitCode = ExitCode.STATE_ERROR


@dataclass
class NoExternalDisplay(DisplayToggleError):
    message: str = "No external display found"
    code: ExitCode = ExitCode.NO_DISPLAY


@dataclass
class ToolCommandFailed(DisplayToggleError):
    code: ExitCode = ExitCode.RUNTIME_ERROR


def user_facing_error(message: str, *, hint: str = "") -> str:
    message = message.removeprefix("Error: ")
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
