from __future__ import annotations

import logging
from pathlib import Path
from typing import final

from filelock import FileLock, Timeout

from withkit_assets.application.repositories.build_output_repository import (
    BuildOutputRepository,
)
from withkit_assets.domain.models.app_config import RuntimePaths
from withkit_assets.domain.models.build_mode import BuildMode
from withkit_assets.domain.models.results import BuildResult, TransformReport
from withkit_assets.domain.workflows.compile_bundles import CompileBundles
from withkit_assets.domain.workflows.discover_entries import collect_build_entries
from withkit_assets.domain.workflows.stamp_version import stamp_version
from withkit_assets.domain.workflows.transform_assets import (
    TransformAssets,
    plan_transform_jobs,
)


@final
class RunBuild:
    def __init__(
        self,
        paths: RuntimePaths,
        mode: BuildMode,
        compile_bundles: CompileBundles,
        transform_assets: TransformAssets,
        output: BuildOutputRepository,
        lock_path: Path,
        lock_timeout_seconds: float,
        logger: logging.Logger,
        image_max_width: int,
        theme_version: str | None,
    ) -> None:
        self._paths = paths
        self._mode = mode
        self._compile_bundles = compile_bundles
        self._transform_assets = transform_assets
        self._output = output
        lock_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = FileLock(str(lock_path))
        self._lock_timeout_seconds = float(lock_timeout_seconds)
        self._logger = logger
        self._image_max_width = image_max_width
        self._theme_version = theme_version

    def _run_transforms(self) -> TransformReport:
        if self._mode is not BuildMode.PRODUCTION:
            return TransformReport.empty()
        jobs = plan_transform_jobs(
            images_dir=self._paths.images_source_dir,
            svg_dir=self._paths.svg_source_dir,
            build_dir=self._paths.build_dir,
            max_width=self._image_max_width,
        )
        return self._transform_assets(jobs)

    def _stamp_version(self) -> bool:
        if not self._theme_version:
            self._logger.debug("Version stamp skipped: no theme version configured")
            return False
        try:
            stamped = stamp_version(self._paths.style_css_path, self._theme_version)
        except OSError as exc:
            self._logger.warning(
                "Version stamp skipped: %s unreadable: %s", self._paths.style_css_path.name, exc
            )
            return False
        if stamped:
            self._logger.info(
                "Stamped %s with Version: %s",
                self._paths.style_css_path.name,
                self._theme_version,
            )
        return stamped

    def __call__(self) -> BuildResult:
        try:
            _ = self._lock.acquire(timeout=self._lock_timeout_seconds)
        except Timeout:
            self._logger.warning("Build skipped: another build is still running")
            return BuildResult.skipped_run(self._mode)

        try:
            entries = collect_build_entries(self._paths.source_roots, self._logger)
            bundles = self._compile_bundles(entries)

            self._output.ensure_layout()
            written = tuple(self._output.write_bundle(bundle) for bundle in bundles)
            transforms = self._run_transforms()
            stamped = self._stamp_version()

            self._logger.info(
                "Build completed (%s): bundles: %d, transformed: %d, transform failures: %d",
                self._mode.value,
                len(written),
                len(transforms.emitted),
                len(transforms.failed),
            )
            return BuildResult(
                mode=self._mode,
                bundles=written,
                transforms=transforms,
                version_stamped=stamped,
            )
        finally:
            self._lock.release()
