from __future__ import annotations

from pathlib import Path
from typing import final
from typing_extensions import override

from withkit_assets.domain.models.resolved_asset import Tier
from withkit_assets.domain.protocols.overridable_store_protocol import OverridableStoreProtocol


@final
class ThemeFilesystemStore(OverridableStoreProtocol):
    """Child-over-parent lookup on two theme roots.

    Keys are posix paths relative to a theme root, e.g. ``build/css/screen.css``.
    """

    def __init__(
        self,
        override_dir: Path,
        base_dir: Path,
        override_uri: str = "",
        base_uri: str = "",
    ) -> None:
        self._roots = {Tier.OVERRIDE: override_dir, Tier.BASE: base_dir}
        self._uris = {
            Tier.OVERRIDE: override_uri.rstrip("/"),
            Tier.BASE: (base_uri or override_uri).rstrip("/"),
        }

    @staticmethod
    def _normalize(key: str) -> str:
        return key.replace("\\", "/").lstrip("/")

    def root(self, tier: Tier) -> Path:
        return self._roots[tier]

    @override
    def resolve(self, key: str) -> tuple[Tier, Path] | None:
        relative = self._normalize(key)
        for tier in (Tier.OVERRIDE, Tier.BASE):
            candidate = self._roots[tier] / relative
            if candidate.is_file():
                return tier, candidate
        return None

    @override
    def uri_for(self, key: str) -> str:
        relative = self._normalize(key)
        located = self.resolve(relative)
        tier = located[0] if located is not None else Tier.BASE
        return f"{self._uris[tier]}/{relative}"

    @override
    def list_files(self, tier: Tier, relative_dir: str, suffix: str) -> list[str]:
        directory = self._roots[tier] / self._normalize(relative_dir)
        if not directory.is_dir():
            return []
        return sorted(
            entry.name
            for entry in directory.iterdir()
            if entry.is_file() and entry.name.endswith(suffix)
        )

    @override
    def list_dirs(self, tier: Tier, relative_dir: str) -> list[str]:
        directory = self._roots[tier] / self._normalize(relative_dir)
        if not directory.is_dir():
            return []
        return sorted(entry.name for entry in directory.iterdir() if entry.is_dir())

    @override
    def read_text(self, path: Path) -> str:
        return path.read_text("utf-8")

    @override
    def modified_at(self, path: Path) -> int:
        return int(path.stat().st_mtime)
