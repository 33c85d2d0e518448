"""Snapshot of the external display state, read by presentation code."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ExternalState(str, Enum):
    ACTIVE = "active"
    DISABLED = "disabled"
    ABSENT = "absent"


@dataclass(frozen=True)
class DisplayStatus:
    connected: bool = False
    enabled: bool = False
    has_saved_state: bool = False
    external_id: str | None = None

    @property
    def state(self) -> ExternalState:
        if not self.connected:
            return ExternalState.ABSENT
        return ExternalState.ACTIVE if self.enabled else ExternalState.DISABLED

    @property
    def can_toggle(self) -> bool:
        return self.connected or self.has_saved_state

    @property
    def summary(self) -> str:
        if not self.connected:
            if self.has_saved_state:
                return "External disconnected (can reconnect)"
            return "No external display"
        if self.enabled:
            return "External display active"
        return "External display disabled"
