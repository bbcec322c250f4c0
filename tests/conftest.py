from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture()
def temp_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    (tmp_path / "configs").mkdir(parents=True, exist_ok=True)
    monkeypatch.chdir(tmp_path)
    for key in ("NODE_ENV", "BROWSERSYNC_PROXY", "SETTINGS_FILE"):
        monkeypatch.delenv(key, raising=False)
    return tmp_path
