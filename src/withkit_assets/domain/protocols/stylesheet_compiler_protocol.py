from __future__ import annotations

from pathlib import Path
from typing import Protocol


class StylesheetCompilerProtocol(Protocol):
    def compile(self, source: Path) -> str: ...
