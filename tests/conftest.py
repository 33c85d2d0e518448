from __future__ import annotations

from pathlib import Path

import pytest

BUILTIN_ID = "37D8832A-2D66-02CA-B9F7-8F30A301B230"
EXTERNAL_ID = "9D5E2B1C-7A10-4F3E-8B6D-2C4A1E9F0B77"

LIST_REPORT = f"""Persistent screen id: {BUILTIN_ID}
Contextual screen id: 1
Serial screen id: s4251086178
Type: MacBook built in screen
Resolution: 1512x982
Hertz: 120
Color Depth: 8
Scaling: on
Origin: (0,0) - main display
Rotation: 0
Enabled: true

Persistent screen id: {EXTERNAL_ID}
Contextual screen id: 2
Serial screen id: s16843009
Type: external screen
Resolution: 2560x1440
Hertz: 60
Color Depth: 8
Scaling: off
Origin: (1512,-300)
Rotation: 0
Enabled: true

Execute the command below to set your screens to the current arrangement. If screen ids are switching, please run `displayplacer --help` for info on using contextual or serial ids instead of persistent ids.

displayplacer "id:{BUILTIN_ID} res:1512x982 hz:120 color_depth:8 enabled:true scaling:on origin:(0,0) degree:0" "id:{EXTERNAL_ID} res:2560x1440 hz:60 color_depth:8 enabled:true scaling:off origin:(1512,-300) degree:0"
"""

INTERNAL_ONLY_REPORT = f"""Persistent screen id: {BUILTIN_ID}
Contextual screen id: 1
Type: MacBook built in screen
Resolution: 1512x982
Enabled: true

displayplacer "id:{BUILTIN_ID} res:1512x982 hz:120 color_depth:8 enabled:true scaling:on origin:(0,0) degree:0"
"""


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    del config
    for item in items:
        path = Path(str(getattr(item, "path", item.fspath)))
        if "integration" in path.parts:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DISPLAYTOGGLE_TOOL", raising=False)
    monkeypatch.delenv("DISPLAYTOGGLE_STATE_FILE", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture
def builtin_id() -> str:
    return BUILTIN_ID


@pytest.fixture
def external_id() -> str:
    return EXTERNAL_ID


@pytest.fixture
def list_report() -> str:
    return LIST_REPORT


@pytest.fixture
def internal_only_report() -> str:
    return INTERNAL_ONLY_REPORT
