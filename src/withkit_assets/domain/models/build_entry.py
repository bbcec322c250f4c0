from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

STYLESHEET_SOURCE_SUFFIX = ".scss"
SCRIPT_SOURCE_SUFFIX = ".js"


@dataclass(frozen=True, slots=True)
class BuildEntry:
    key: str
    sources: tuple[Path, ...]

    @property
    def is_stylesheet(self) -> bool:
        return all(source.suffix == STYLESHEET_SOURCE_SUFFIX for source in self.sources)

    @property
    def output_suffix(self) -> str:
        return ".css" if self.is_stylesheet else ".js"

    @property
    def output_name(self) -> str:
        return f"{self.key}{self.output_suffix}"


@dataclass(frozen=True, slots=True)
class CompiledBundle:
    entry: BuildEntry
    content: bytes
    dependencies: tuple[str, ...]
    version: str
