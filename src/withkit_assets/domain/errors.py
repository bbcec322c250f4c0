from __future__ import annotations

from pathlib import Path


class FatalBuildError(RuntimeError):
    """Structural build failure; the whole run aborts with a non-zero exit."""


class EntryCollisionError(FatalBuildError):
    def __init__(self, key: str, first: tuple[Path, ...], second: tuple[Path, ...]) -> None:
        self.key = key
        self.first = first
        self.second = second
        sources = ", ".join(str(path) for path in (*first, *second))
        super().__init__(f"Build entry '{key}' is produced by more than one source: {sources}")


class TransformError(Exception):
    """A single asset could not be transformed; siblings are unaffected."""
