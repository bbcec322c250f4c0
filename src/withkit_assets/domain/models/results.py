from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from withkit_assets.domain.models.build_mode import BuildMode


@dataclass(frozen=True, slots=True)
class TransformReport:
    emitted: tuple[Path, ...]
    failed: tuple[Path, ...]

    @classmethod
    def empty(cls) -> "TransformReport":
        return cls(emitted=tuple(), failed=tuple())


@dataclass(frozen=True, slots=True)
class BuildResult:
    mode: BuildMode
    bundles: tuple[Path, ...]
    transforms: TransformReport
    version_stamped: bool
    skipped: bool = False

    @classmethod
    def skipped_run(cls, mode: BuildMode) -> "BuildResult":
        return cls(
            mode=mode,
            bundles=tuple(),
            transforms=TransformReport.empty(),
            version_stamped=False,
            skipped=True,
        )


@dataclass(frozen=True, slots=True)
class ScanDelta:
    added: tuple[str, ...]
    updated: tuple[str, ...]
    removed: tuple[str, ...]

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.updated or self.removed)
