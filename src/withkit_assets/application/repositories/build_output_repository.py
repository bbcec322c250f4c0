from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import final

from withkit_assets.application.repositories.manifest_contract import (
    dump_manifest,
    manifest_name_for,
)
from withkit_assets.domain.models.build_entry import CompiledBundle
from withkit_assets.domain.models.resolved_asset import AssetManifest


@final
class BuildOutputRepository:
    def __init__(self, build_dir: Path) -> None:
        self._build_dir = build_dir

    @property
    def build_dir(self) -> Path:
        return self._build_dir

    def ensure_layout(self) -> None:
        for directory in (
            self._build_dir,
            self._build_dir / "css",
            self._build_dir / "js",
        ):
            directory.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def write_bytes(destination: Path, content: bytes) -> Path:
        """Write through a sibling temp file so readers never see a partial file."""
        destination.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
        )
        try:
            with os.fdopen(fd, "wb") as stream:
                _ = stream.write(content)
            os.replace(tmp_name, destination)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return destination

    def write_bundle(self, bundle: CompiledBundle) -> Path:
        target = self._build_dir / bundle.entry.output_name
        manifest_path = self._build_dir / manifest_name_for(bundle.entry.output_name)
        _ = self.write_bytes(target, bundle.content)
        manifest = AssetManifest(dependencies=bundle.dependencies, version=bundle.version)
        _ = self.write_bytes(manifest_path, dump_manifest(manifest).encode("utf-8"))
        return target
