from __future__ import annotations

import logging
import traceback
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import final

from withkit_assets.application.repositories.build_output_repository import (
    BuildOutputRepository,
)
from withkit_assets.application.transforms.raster_transform import (
    RASTER_SUFFIXES,
    raster_transform_for,
    webp_copy_transform,
)
from withkit_assets.application.transforms.svg_transform import SvgMinifyTransform
from withkit_assets.domain.models.results import TransformReport
from withkit_assets.domain.models.transform_job import TransformJob

IMAGES_OUTPUT = "images"
WEBP_OUTPUT = "webp"
SVG_OUTPUT = "svg"


def _source_files(root: Path, suffixes: frozenset[str]) -> list[Path]:
    if not root.is_dir():
        return []
    return sorted(
        path for path in root.rglob("*") if path.is_file() and path.suffix.lower() in suffixes
    )


def plan_transform_jobs(
    images_dir: Path,
    svg_dir: Path,
    build_dir: Path,
    max_width: int,
) -> list[TransformJob]:
    jobs: list[TransformJob] = []
    webp_transform = webp_copy_transform(max_width)
    for source in _source_files(images_dir, RASTER_SUFFIXES):
        relative = source.relative_to(images_dir)
        jobs.append(
            TransformJob(
                source=source,
                destination=build_dir / IMAGES_OUTPUT / relative,
                transform=raster_transform_for(source.suffix, max_width),
            )
        )
        jobs.append(
            TransformJob(
                source=source,
                destination=build_dir / WEBP_OUTPUT / relative.with_suffix(".webp"),
                transform=webp_transform,
            )
        )

    svg_transform = SvgMinifyTransform()
    for source in _source_files(svg_dir, frozenset({".svg"})):
        jobs.append(
            TransformJob(
                source=source,
                destination=build_dir / SVG_OUTPUT / source.relative_to(svg_dir),
                transform=svg_transform,
            )
        )
    return jobs


@final
class TransformAssets:
    def __init__(
        self,
        output: BuildOutputRepository,
        logger: logging.Logger,
        worker_count: int,
    ) -> None:
        self._output = output
        self._logger = logger
        self._worker_count = max(1, int(worker_count))

    def _run_job(self, job: TransformJob) -> Path:
        content = job.source.read_bytes()
        transformed = job.transform.apply(content)
        return self._output.write_bytes(job.destination, transformed)

    def _run_isolated(self, job: TransformJob) -> Path | None:
        try:
            return self._run_job(job)
        except Exception as exc:
            self._logger.error(
                "Transform failed for %s -> %s: %s", job.source, job.destination, exc
            )
            return None

    def __call__(self, jobs: Sequence[TransformJob]) -> TransformReport:
        if not jobs:
            return TransformReport.empty()

        emitted: list[Path] = []
        failed: list[Path] = []

        if self._worker_count <= 1 or len(jobs) == 1:
            for job in jobs:
                written = self._run_isolated(job)
                if written is None:
                    failed.append(job.source)
                else:
                    emitted.append(written)
        else:
            with ThreadPoolExecutor(max_workers=self._worker_count) as executor:
                future_by_job = {executor.submit(self._run_isolated, job): job for job in jobs}
                for future in as_completed(future_by_job):
                    job = future_by_job[future]
                    try:
                        written = future.result()
                    except Exception:
                        self._logger.error(
                            "Unexpected transform worker failure for %s\n%s",
                            job.source,
                            traceback.format_exc(),
                        )
                        written = None
                    if written is None:
                        failed.append(job.source)
                    else:
                        emitted.append(written)

        if failed:
            self._logger.warning(
                "Transforms completed with failures: emitted: %d, failed: %d",
                len(emitted),
                len(failed),
            )
        else:
            self._logger.info("Transforms completed: emitted: %d", len(emitted))
        return TransformReport(emitted=tuple(sorted(emitted)), failed=tuple(sorted(failed)))
