"""Two-line state file remembering the last disabled external display."""

from __future__ import annotations

import logging as py_logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from displaytoggle.config import DEFAULT_STATE_FILE
from displaytoggle.errors import InvalidState, NoSavedState, StateWriteFailed

logger = py_logging.getLogger(__name__)


@dataclass(frozen=True)
class PersistedState:
    config_line: str
    external_id: str

    def to_text(self) -> str:
        return f"{self.config_line}\n{self.external_id}"


def parse_state(text: str) -> PersistedState:
    lines = text.splitlines()
    if len(lines) < 2 or not lines[1].strip():
        raise InvalidState(hint="Disable the external display again to rewrite the state file.")
    return PersistedState(config_line=lines[0], external_id=lines[1].strip())


class StateStore:
    def __init__(self, path: str | Path = DEFAULT_STATE_FILE) -> None:
        self.path = Path(path).expanduser()

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> PersistedState:
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("State file unreadable path=%s error=%s", self.path, exc)
            raise NoSavedState(hint=f"Nothing saved at {self.path}.") from exc
        return parse_state(text)

    def save(self, state: PersistedState) -> Path:
        """Atomically replace the state file with ``state``.

        Any filesystem failure is raised as ``StateWriteFailed`` and leaves
        no temp file behind.
        """
        temp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                delete=False,
            ) as handle:
                temp_path = Path(handle.name)
                handle.write(state.to_text())
            os.replace(temp_path, self.path)
        except OSError as exc:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            logger.error("State file write failed path=%s error=%s", self.path, exc)
            raise StateWriteFailed(hint=f"Check that {self.path} is writable.") from exc
        logger.debug("Saved state path=%s external_id=%s", self.path, state.external_id)
        return self.path
