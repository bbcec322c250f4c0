from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Callable, final

from withkit_assets.domain.models.results import BuildResult, ScanDelta


def build_delta(
    previous: dict[str, tuple[int, int]],
    current: dict[str, tuple[int, int]],
) -> ScanDelta:
    previous_keys = set(previous)
    current_keys = set(current)

    added = sorted(current_keys - previous_keys)
    removed = sorted(previous_keys - current_keys)
    updated = sorted(
        key for key in previous_keys & current_keys if previous[key] != current[key]
    )

    return ScanDelta(added=tuple(added), updated=tuple(updated), removed=tuple(removed))


def scan_sources(roots: Iterable[Path]) -> dict[str, tuple[int, int]]:
    snapshot: dict[str, tuple[int, int]] = {}
    for root in roots:
        if not root.is_dir():
            continue
        for path in root.rglob("*"):
            try:
                if not path.is_file():
                    continue
                stat = path.stat()
            except OSError:
                continue
            snapshot[str(path)] = (int(stat.st_size), int(stat.st_mtime_ns))
    return snapshot


@final
class WatchSources:
    """Polling job: rebuild when the source trees change between two scans."""

    def __init__(
        self,
        roots: Iterable[Path],
        run_build: Callable[[], BuildResult],
        logger: logging.Logger,
    ) -> None:
        self._roots = tuple(roots)
        self._run_build = run_build
        self._logger = logger
        self._previous: dict[str, tuple[int, int]] = {}

    def prime(self) -> None:
        self._previous = scan_sources(self._roots)

    def __call__(self) -> BuildResult | None:
        current = scan_sources(self._roots)
        delta = build_delta(self._previous, current)
        if not delta.has_changes:
            return None

        self._logger.info(
            "Source change detected: added: %d, updated: %d, removed: %d",
            len(delta.added),
            len(delta.updated),
            len(delta.removed),
        )
        try:
            result = self._run_build()
        except Exception as exc:
            self._logger.error("Rebuild failed: %s", exc)
            self._previous = current
            return None
        if not result.skipped:
            self._previous = current
        return result
