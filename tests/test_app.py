# pyright: reportPrivateUsage=false

from __future__ import annotations

import signal
from pathlib import Path
from typing import Callable

import pytest

from withkit_assets import __main__ as main_module
from withkit_assets.application import app as app_module
from withkit_assets.application.app import BuildApp
from withkit_assets.config.settings_loader import SettingsLoader
from withkit_assets.domain.models.app_config import AppConfig


def _load_config(temp_workspace: Path, settings: str = "") -> AppConfig:
    settings_path = temp_workspace / "configs" / "settings.ini"
    _ = settings_path.write_text(settings, encoding="utf-8")
    return SettingsLoader.load(settings_path, environ={})


def _touch(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(content, encoding="utf-8")
    return path


class _FakeScheduler:
    def __init__(self) -> None:
        self.interval_calls: list[tuple[str, int]] = []
        self.jobs: list[Callable[[], object]] = []
        self.started: bool = False
        self.stopped: bool = False

    def schedule_interval(self, job_id: str, seconds: int, func: Callable[[], object]) -> None:
        self.interval_calls.append((job_id, seconds))
        self.jobs.append(func)

    def start(self) -> None:
        self.started = True

    def shutdown(self) -> None:
        self.stopped = True


def test_build_app_given_valid_sources_when_build_then_returns_zero_and_writes_output(
    temp_workspace: Path,
) -> None:
    _ = _touch(temp_workspace / "src" / "scss" / "global.scss", ".a { color: red; }")
    _ = _touch(temp_workspace / "style.css", "/*\nVersion: 0.0.1\n*/\n")
    _ = _touch(temp_workspace / "package.json", '{"name": "acme-child", "version": "3.0.0"}')
    app = BuildApp(_load_config(temp_workspace))

    assert app.build() == 0
    assert "color: red" in (temp_workspace / "build" / "css" / "global.css").read_text("utf-8")
    assert (temp_workspace / "build" / "css" / "global.asset.manifest").is_file()
    assert "Version: 3.0.0" in (temp_workspace / "style.css").read_text("utf-8")


def test_build_app_given_invalid_scss_when_build_then_returns_one(
    temp_workspace: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    _ = _touch(temp_workspace / "src" / "scss" / "global.scss", ".a { color: $missing; }")
    app = BuildApp(_load_config(temp_workspace))

    assert app.build() == 1
    assert "Build failed" in caplog.text
    assert not (temp_workspace / "build" / "css" / "global.css").exists()


def test_build_app_given_watch_when_started_then_schedules_interval_job(
    temp_workspace: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    scheduler = _FakeScheduler()
    monkeypatch.setattr(app_module, "APSchedulerRunner", lambda: scheduler)
    _ = _touch(temp_workspace / "src" / "scss" / "global.scss", ".a { color: red; }")
    app = BuildApp(
        _load_config(
            temp_workspace,
            "WATCH_INTERVAL_SECONDS=7\nBROWSERSYNC_PROXY=http://acme.local\nLOG_LEVEL=info",
        )
    )

    with caplog.at_level("INFO"):
        app.start_watch()

    assert scheduler.interval_calls == [("watch", 7)]
    assert scheduler.started is True
    assert "http://acme.local" in caplog.text
    assert scheduler.jobs[0]() is None

    _ = _touch(temp_workspace / "src" / "scss" / "screen.scss", ".b { color: blue; }")
    _ = scheduler.jobs[0]()
    assert (temp_workspace / "build" / "css" / "screen.css").is_file()

    app.shutdown()
    assert scheduler.stopped is True


def test_build_app_given_stop_signal_when_watching_then_shuts_down(
    temp_workspace: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    scheduler = _FakeScheduler()
    monkeypatch.setattr(app_module, "APSchedulerRunner", lambda: scheduler)
    handlers: dict[int, object] = {}

    def _fake_signal(signum: int, handler: object) -> object:
        handlers[signum] = handler
        return None

    monkeypatch.setattr(app_module.signal, "signal", _fake_signal)
    app = BuildApp(_load_config(temp_workspace))

    def _fake_sleep(_seconds: float) -> None:
        handler = handlers[signal.SIGTERM]
        assert callable(handler)
        _ = handler(signal.SIGTERM, None)

    monkeypatch.setattr(app_module.time, "sleep", _fake_sleep)

    assert app.watch() == 0
    assert scheduler.stopped is True


def test_build_app_given_frontend_context_when_planned_then_skips_editor_style(
    temp_workspace: Path,
) -> None:
    _ = _touch(temp_workspace / "build" / "css" / "blocks" / "core-quote.css", "q{}")
    app = BuildApp(_load_config(temp_workspace, "THEME_PREFIX=acme-child"))

    sink = app.plan_calls("frontend")

    handles = sink.handles()
    assert "acme-child-global-style" in handles
    assert "acme-child-global-script" in handles
    assert "acme-child-screen-style" in handles
    assert "acme-child-editor-style" not in handles
    assert "acme-child-core-quote-style" in handles
    assert "acme-child/test" in handles


def test_build_app_given_editor_context_when_planned_then_skips_screen_style(
    temp_workspace: Path,
) -> None:
    app = BuildApp(_load_config(temp_workspace, "THEME_PREFIX=acme-child"))

    handles = app.plan_calls("editor").handles()

    assert "acme-child-editor-style" in handles
    assert "acme-child-screen-style" not in handles
    with pytest.raises(ValueError):
        _ = app.plan_calls("admin")


def test_main_given_plan_command_when_run_then_prints_registrations(
    temp_workspace: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(app_module, "configure_logging", lambda *_args: None)
    _ = _load_config(temp_workspace, "THEME_PREFIX=acme-child")

    exit_code = main_module.main(["plan", "--context", "editor"])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "register_style" in output
    assert "acme-child-editor-style" in output


def test_main_given_settings_env_when_run_then_loads_that_file(
    temp_workspace: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(app_module, "configure_logging", lambda *_args: None)
    custom = _touch(temp_workspace / "custom.ini", "THEME_PREFIX=from-env")
    monkeypatch.setenv("SETTINGS_FILE", str(custom))

    assert main_module.main(["plan"]) == 0
    assert "from-env-screen-style" in capsys.readouterr().out


def test_main_given_help_when_formatted_then_watch_states_no_live_reload(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("COLUMNS", "120")

    help_text = main_module._parser().format_help()

    assert "rebuild on changes; no live-reload server" in help_text
