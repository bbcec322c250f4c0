from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Literal

# False means "do not cache-bust" and must stay distinct from "".
AssetVersion = str | int | Literal[False]


class Tier(StrEnum):
    OVERRIDE = "override"
    BASE = "base"


@dataclass(frozen=True, slots=True)
class AssetManifest:
    dependencies: tuple[str, ...]
    version: str


@dataclass(frozen=True, slots=True)
class ResolvedAsset:
    relative_path: str
    path: Path | None
    tier: Tier | None
    dependencies: tuple[str, ...]
    version: AssetVersion
    modified_at: int | None

    @property
    def exists(self) -> bool:
        return self.path is not None

    @property
    def timestamp_version(self) -> int | Literal[False]:
        if self.modified_at is None:
            return False
        return self.modified_at
