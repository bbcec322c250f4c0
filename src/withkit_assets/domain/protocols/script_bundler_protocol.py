from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True, slots=True)
class ScriptBundle:
    code: str
    dependencies: tuple[str, ...]


class ScriptBundlerProtocol(Protocol):
    def bundle(self, source: Path) -> ScriptBundle: ...
