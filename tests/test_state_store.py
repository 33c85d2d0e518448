from __future__ import annotations

from pathlib import Path

import pytest

from displaytoggle.errors import InvalidState, NoSavedState, StateWriteFailed
from displaytoggle.state import PersistedState, StateStore, parse_state


def test_save_writes_exactly_two_lines(tmp_path: Path) -> None:
    store = StateStore(tmp_path / ".display-toggle-state")

    store.save(PersistedState(config_line='displayplacer "id:A res:1x1"', external_id="EXT"))

    assert store.path.read_text(encoding="utf-8") == 'displayplacer "id:A res:1x1"\nEXT'


def test_save_overwrites_and_leaves_no_temp_files(tmp_path: Path) -> None:
    store = StateStore(tmp_path / ".display-toggle-state")

    store.save(PersistedState(config_line="displayplacer old", external_id="OLD"))
    store.save(PersistedState(config_line="displayplacer new", external_id="NEW"))

    assert store.load() == PersistedState(config_line="displayplacer new", external_id="NEW")
    assert [item.name for item in tmp_path.iterdir()] == [".display-toggle-state"]


def test_save_creates_parent_directory(tmp_path: Path) -> None:
    store = StateStore(tmp_path / "nested" / "state")

    store.save(PersistedState(config_line="", external_id="EXT"))

    assert store.exists()


def test_load_missing_file_raises_no_saved_state(tmp_path: Path) -> None:
    store = StateStore(tmp_path / "missing")

    assert store.exists() is False
    with pytest.raises(NoSavedState):
        store.load()


def test_load_directory_path_raises_no_saved_state(tmp_path: Path) -> None:
    store = StateStore(tmp_path)

    assert store.exists() is False
    with pytest.raises(NoSavedState):
        store.load()


def test_second_line_is_trimmed() -> None:
    assert parse_state("displayplacer x\n  EXT-1 \t\n").external_id == "EXT-1"


def test_single_line_is_invalid() -> None:
    with pytest.raises(InvalidState):
        parse_state("displayplacer x")


def test_single_line_with_trailing_newline_is_invalid() -> None:
    with pytest.raises(InvalidState):
        parse_state("displayplacer x\n")


def test_blank_second_line_is_invalid() -> None:
    with pytest.raises(InvalidState):
        parse_state("displayplacer x\n   \n")


def test_home_relative_path_is_expanded(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    store = StateStore("~/.display-toggle-state")

    assert store.path == tmp_path / ".display-toggle-state"


def test_save_under_regular_file_raises_state_write_failed(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(StateWriteFailed):
        StateStore(blocker / "state").save(PersistedState(config_line="", external_id="EXT"))


def test_failed_write_removes_temp_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    store = StateStore(tmp_path / ".display-toggle-state")

    def full_disk(self: PersistedState) -> str:
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(PersistedState, "to_text", full_disk)

    with pytest.raises(StateWriteFailed):
        store.save(PersistedState(config_line="", external_id="EXT"))
    assert list(tmp_path.iterdir()) == []
