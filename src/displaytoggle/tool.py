"""displayplacer invocation with install-prefix fallback."""

from __future__ import annotations

import logging as py_logging
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from displaytoggle.config import DEFAULT_TOOL_PATHS

logger = py_logging.getLogger(__name__)

TOOL_NAME = "displayplacer"
TOOL_NOT_FOUND_MESSAGE = f"Error: {TOOL_NAME} not found"


def _decode_process_output(value: bytes | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class ToolResult:
    args: tuple[str, ...]
    output: str
    returncode: int | None = None

    @property
    def launched(self) -> bool:
        return self.returncode is not None

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class DisplayTool:
    def __init__(
        self,
        paths: Sequence[str] = DEFAULT_TOOL_PATHS,
        *,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        self.paths = list(paths)
        self.runner = runner

    def run(self, args: Sequence[str]) -> ToolResult:
        """Run the tool, trying each install location until one launches.

        Never raises for a missing binary: the result carries
        ``TOOL_NOT_FOUND_MESSAGE`` and no return code instead.
        """
        arguments = tuple(args)
        for path in self.paths:
            logger.debug("Running display tool path=%s args=%s", path, list(arguments))
            try:
                completed = self.runner(
                    [path, *arguments],
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    check=False,
                )
            except OSError as exc:
                logger.debug("Display tool failed to launch path=%s error=%s", path, exc)
                continue
            output = _decode_process_output(completed.stdout)
            if completed.returncode != 0:
                logger.warning(
                    "Display tool exited with returncode=%s args=%s output=%s",
                    completed.returncode,
                    list(arguments),
                    output.strip()[:200],
                )
            return ToolResult(args=arguments, output=output, returncode=completed.returncode)

        logger.error("Display tool not found in any of: %s", ", ".join(self.paths))
        return ToolResult(args=arguments, output=TOOL_NOT_FOUND_MESSAGE)

    def list_report(self) -> ToolResult:
        return self.run(["list"])
