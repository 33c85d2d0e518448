"""Parse the human-readable `displayplacer list` report."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from displaytoggle.config import (
    DEFAULT_EXTERNAL_MARKER,
    DEFAULT_INTERNAL_MARKER,
    DEFAULT_PERSISTENT_ID_MARKER,
    DEFAULT_RESOLUTION_MARKER,
    AppConfig,
)
from displaytoggle.tool import TOOL_NAME


class DisplayKind(str, Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"
    OTHER = "other"


@dataclass(frozen=True)
class DisplayRecord:
    id: str
    kind: DisplayKind
    enabled: bool


@dataclass(frozen=True)
class DisplayIds:
    internal: str | None = None
    external: str | None = None


@dataclass(frozen=True)
class ListingMarkers:
    persistent_id: str = DEFAULT_PERSISTENT_ID_MARKER
    internal: str = DEFAULT_INTERNAL_MARKER
    external: str = DEFAULT_EXTERNAL_MARKER
    resolution: str = DEFAULT_RESOLUTION_MARKER

    @classmethod
    def from_config(cls, config: AppConfig) -> ListingMarkers:
        return cls(
            persistent_id=config.persistent_id_marker,
            internal=config.internal_marker,
            external=config.external_marker,
            resolution=config.resolution_marker,
        )


def _id_from_line(line: str) -> str:
    _, sep, rest = line.partition(": ")
    if not sep:
        return ""
    return rest.strip()


def parse_display_list(report: str, markers: ListingMarkers | None = None) -> list[DisplayRecord]:
    """Return one record per persistent id found in ``report``.

    A display's block runs from its id line to the next id line. The block
    decides the record kind (last classification marker wins) and whether the
    display is enabled (a resolution marker is present).
    """
    markers = markers or ListingMarkers()
    records: list[DisplayRecord] = []
    current_id: str | None = None
    kind = DisplayKind.OTHER
    enabled = False

    def flush() -> None:
        if current_id is not None:
            records.append(DisplayRecord(id=current_id, kind=kind, enabled=enabled))

    for line in report.splitlines():
        if markers.persistent_id in line:
            flush()
            current_id = _id_from_line(line)
            kind = DisplayKind.OTHER
            enabled = False
        if current_id is None:
            continue
        if markers.internal in line:
            kind = DisplayKind.INTERNAL
        if markers.external in line:
            kind = DisplayKind.EXTERNAL
        if markers.resolution in line:
            enabled = True
    flush()
    return records


def classify(records: list[DisplayRecord]) -> DisplayIds:
    internal: str | None = None
    external: str | None = None
    for record in records:
        if record.kind is DisplayKind.INTERNAL:
            internal = record.id
        elif record.kind is DisplayKind.EXTERNAL:
            external = record.id
    return DisplayIds(internal=internal, external=external)


def find_invocation_echo(report: str, tool_name: str = TOOL_NAME) -> str | None:
    """First line that starts with the tool name, i.e. the replayable arrangement."""
    for line in report.splitlines():
        stripped = line.strip()
        if stripped == tool_name or stripped.startswith(f"{tool_name} "):
            return stripped
    return None
