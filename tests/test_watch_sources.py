from __future__ import annotations

import logging
from pathlib import Path

import pytest

from withkit_assets.domain.models.build_mode import BuildMode
from withkit_assets.domain.models.results import BuildResult, TransformReport
from withkit_assets.domain.workflows.watch_sources import (
    WatchSources,
    build_delta,
    scan_sources,
)


class _FakeBuild:
    def __init__(self, outcomes: list[BuildResult | Exception]) -> None:
        self._outcomes: list[BuildResult | Exception] = outcomes
        self.calls: int = 0

    def __call__(self) -> BuildResult:
        outcome = self._outcomes[min(self.calls, len(self._outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _done() -> BuildResult:
    return BuildResult(
        mode=BuildMode.DEVELOPMENT,
        bundles=tuple(),
        transforms=TransformReport.empty(),
        version_stamped=False,
    )


def _touch(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(content, encoding="utf-8")
    return path


def test_build_delta_given_previous_and_current_when_called_then_returns_expected_sets() -> None:
    previous = {"a.scss": (1, 10), "b.scss": (2, 20)}
    current = {"b.scss": (2, 21), "c.scss": (3, 30)}

    delta = build_delta(previous, current)

    assert delta.added == ("c.scss",)
    assert delta.updated == ("b.scss",)
    assert delta.removed == ("a.scss",)
    assert delta.has_changes is True


def test_scan_sources_given_missing_root_when_scanned_then_skips_it(tmp_path: Path) -> None:
    source = _touch(tmp_path / "src" / "scss" / "global.scss", "a{}")

    snapshot = scan_sources([tmp_path / "missing", tmp_path / "src"])

    assert list(snapshot) == [str(source)]
    assert snapshot[str(source)][0] == 3


def test_watch_sources_given_no_changes_when_polled_then_does_not_build(tmp_path: Path) -> None:
    _ = _touch(tmp_path / "src" / "scss" / "global.scss")
    run_build = _FakeBuild([_done()])
    watch = WatchSources([tmp_path / "src"], run_build, logging.getLogger("test"))
    watch.prime()

    assert watch() is None
    assert run_build.calls == 0


def test_watch_sources_given_new_file_when_polled_then_rebuilds_once(tmp_path: Path) -> None:
    run_build = _FakeBuild([_done()])
    watch = WatchSources([tmp_path / "src"], run_build, logging.getLogger("test"))
    watch.prime()
    _ = _touch(tmp_path / "src" / "scss" / "blocks" / "core-quote.scss")

    assert watch() == _done()
    assert watch() is None
    assert run_build.calls == 1


def test_watch_sources_given_failing_build_when_polled_then_logs_and_waits_for_next_change(
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    run_build = _FakeBuild([RuntimeError("syntax error"), _done()])
    watch = WatchSources([tmp_path / "src"], run_build, logging.getLogger("test"))
    watch.prime()
    _ = _touch(tmp_path / "src" / "scss" / "global.scss")

    with caplog.at_level(logging.ERROR):
        assert watch() is None
    assert watch() is None
    assert run_build.calls == 1
    assert "syntax error" in caplog.text


def test_watch_sources_given_skipped_build_when_polled_then_retries_on_next_poll(
    tmp_path: Path,
) -> None:
    run_build = _FakeBuild([BuildResult.skipped_run(BuildMode.DEVELOPMENT), _done()])
    watch = WatchSources([tmp_path / "src"], run_build, logging.getLogger("test"))
    watch.prime()
    _ = _touch(tmp_path / "src" / "js" / "global.js")

    first = watch()
    second = watch()

    assert first is not None and first.skipped is True
    assert second == _done()
    assert run_build.calls == 2
