"""External display discovery and toggle flow."""

from __future__ import annotations

import logging as py_logging
import shlex
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from displaytoggle.config import AppConfig
from displaytoggle.errors import (
    DisplayToggleError,
    NoExternalDisplay,
    ToolCommandFailed,
    ToolNotFound,
)
from displaytoggle.listing import (
    DisplayIds,
    DisplayKind,
    DisplayRecord,
    ListingMarkers,
    classify,
    find_invocation_echo,
    parse_display_list,
)
from displaytoggle.state import PersistedState, StateStore
from displaytoggle.status import DisplayStatus
from displaytoggle.tool import TOOL_NAME, DisplayTool, ToolResult

logger = py_logging.getLogger(__name__)

DISABLED_MESSAGE = "External display disabled"
ENABLED_MESSAGE = "External display enabled"


class ToggleAction(str, Enum):
    DISABLE = "disable"
    ENABLE = "enable"
    NONE = "none"


@dataclass(frozen=True)
class ToggleOutcome:
    action: ToggleAction
    message: str
    error: DisplayToggleError | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


def display_directive(display_id: str, *, enabled: bool) -> str:
    return f"id:{display_id} enabled:{'true' if enabled else 'false'}"


def replay_arguments(config_line: str, tool_name: str = TOOL_NAME) -> list[str]:
    """Split a captured invocation echo back into tool arguments."""
    remainder = config_line[len(tool_name) :]
    try:
        return shlex.split(remainder)
    except ValueError:
        logger.debug("Invocation echo is not shell-quoted; splitting on spaces")
        return remainder.split()


class DisplayController:
    def __init__(
        self,
        tool: DisplayTool,
        store: StateStore,
        *,
        markers: ListingMarkers | None = None,
        tool_name: str = TOOL_NAME,
    ) -> None:
        self.tool = tool
        self.store = store
        self.markers = markers or ListingMarkers()
        self.tool_name = tool_name

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> DisplayController:
        return cls(
            DisplayTool(config.tool_paths, runner=runner),
            StateStore(config.state_path),
            markers=ListingMarkers.from_config(config),
        )

    def _list_report(self) -> str:
        result = self.tool.list_report()
        if not result.launched:
            raise ToolNotFound(message=result.output)
        return result.output

    def _run_mutation(self, args: list[str]) -> ToolResult:
        result = self.tool.run(args)
        if not result.launched:
            raise ToolNotFound(message=result.output)
        if not result.ok:
            raise ToolCommandFailed(
                result.output.strip() or f"{self.tool_name} exited with code {result.returncode}",
                hint=f"Run `{self.tool_name} list` to inspect the current arrangement.",
            )
        return result

    def list_displays(self) -> list[DisplayRecord]:
        records = parse_display_list(self._list_report(), self.markers)
        logger.debug("Discovered %s displays", len(records))
        return records

    def display_ids(self) -> DisplayIds:
        return classify(self.list_displays())

    def status(self) -> DisplayStatus:
        records = self.list_displays()
        ids = classify(records)
        enabled = False
        if ids.external is not None:
            enabled = any(
                record.enabled
                for record in records
                if record.id == ids.external and record.kind is DisplayKind.EXTERNAL
            )
        return DisplayStatus(
            connected=ids.external is not None,
            enabled=enabled,
            has_saved_state=self.store.exists(),
            external_id=ids.external,
        )

    def toggle_external(self) -> ToggleOutcome:
        action = ToggleAction.NONE
        try:
            ids = self.display_ids()
            if ids.external is not None:
                action = ToggleAction.DISABLE
                message = self.disable(ids.external)
            elif self.store.exists():
                action = ToggleAction.ENABLE
                message = self.enable()
            else:
                raise NoExternalDisplay()
        except DisplayToggleError as exc:
            logger.info("Toggle finished without change action=%s reason=%s", action.value, exc.message)
            return ToggleOutcome(action=action, message=exc.message, error=exc)
        logger.info("Toggle finished action=%s", action.value)
        return ToggleOutcome(action=action, message=message)

    def disable(self, display_id: str) -> str:
        report = self._list_report()
        config_line = find_invocation_echo(report, self.tool_name)
        if config_line is None:
            logger.warning("No %s invocation echo in listing; arrangement will not be restored", self.tool_name)
            config_line = ""
        self.store.save(PersistedState(config_line=config_line, external_id=display_id))

        logger.debug("Disabling external display id=%s", display_id)
        result = self._run_mutation([display_directive(display_id, enabled=False)])
        return result.output.strip() or DISABLED_MESSAGE

    def enable(self) -> str:
        saved = self.store.load()
        logger.debug("Enabling external display id=%s", saved.external_id)
        self._run_mutation([display_directive(saved.external_id, enabled=True)])

        if saved.config_line.startswith(self.tool_name):
            arguments = replay_arguments(saved.config_line, self.tool_name)
            if arguments:
                restored = self.tool.run(arguments)
                if not restored.ok:
                    logger.warning("Arrangement restore did not apply: %s", restored.output.strip()[:200])
        return ENABLED_MESSAGE
