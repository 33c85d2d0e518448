"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import logging as py_logging
import subprocess
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import load_config
from .controller import DisplayController
from .errors import DisplayToggleError, ExitCode, ToolNotFound, user_facing_error
from .logging import configure_logging, default_log_path, normalize_level

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")
_COMMANDS = ("toggle", "status", "list")


def _log_level_type(value: str) -> str:
    normalized = normalize_level(value)
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="displaytoggle",
        description="Disable or re-enable the external display via displayplacer.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config.toml")
    parser.add_argument("--log-level", type=_log_level_type, default=None)
    parser.add_argument("--log-file", type=Path, default=None)
    commands = parser.add_subparsers(dest="command", metavar="{toggle,status,list}")
    commands.add_parser("toggle", help="Disable the external display, or re-enable the saved one")
    commands.add_parser("status", help="Show whether an external display is connected and enabled")
    commands.add_parser("list", help="List displays reported by displayplacer")
    return parser


def run_toggle(controller: DisplayController) -> int:
    outcome = controller.toggle_external()
    print(outcome.message)
    if isinstance(outcome.error, ToolNotFound):
        return int(outcome.error.code)
    return int(ExitCode.SUCCESS)


def run_status(controller: DisplayController) -> int:
    status = controller.status()
    line = f"{status.state.value}: {status.summary}"
    if status.external_id:
        line = f"{line} ({status.external_id})"
    print(line)
    if not status.can_toggle:
        print("Nothing to toggle: connect an external display first.")
    return int(ExitCode.SUCCESS)


def run_list(controller: DisplayController) -> int:
    records = controller.list_displays()
    if not records:
        print("No displays reported")
    for record in records:
        state = "enabled" if record.enabled else "disabled"
        print(f"{record.id}\t{record.kind.value}\t{state}")
    return int(ExitCode.SUCCESS)


_HANDLERS: dict[str, Callable[[DisplayController], int]] = {
    "toggle": run_toggle,
    "status": run_status,
    "list": run_list,
}


def main(
    argv: Sequence[str] | None = None,
    *,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> int:
    log_path = default_log_path()
    logger = configure_logging(log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    config = load_config(namespace.config)
    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()
    logger = configure_logging(level=namespace.log_level or config.log_level, log_file=log_path)

    command = namespace.command or "toggle"
    try:
        controller = DisplayController.from_config(config, runner=runner)
        logger.debug("Running command=%s", command)
        return _HANDLERS[command](controller)
    except DisplayToggleError as exc:
        logger.error(
            "Handled DisplayToggleError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        hint = f"Inspect logs: {log_path}"
        print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
