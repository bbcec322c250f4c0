from __future__ import annotations

from pathlib import Path
from typing import Protocol

from withkit_assets.domain.models.resolved_asset import Tier


class OverridableStoreProtocol(Protocol):
    def resolve(self, key: str) -> tuple[Tier, Path] | None: ...

    def uri_for(self, key: str) -> str: ...

    def list_files(self, tier: Tier, relative_dir: str, suffix: str) -> list[str]: ...

    def list_dirs(self, tier: Tier, relative_dir: str) -> list[str]: ...

    def read_text(self, path: Path) -> str: ...

    def modified_at(self, path: Path) -> int: ...
