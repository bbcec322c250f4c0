# pyright: reportMissingTypeStubs=false, reportUnknownMemberType=false, reportUnknownVariableType=false

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import final
from typing_extensions import override

import sass

from withkit_assets.domain.models.build_mode import BuildMode
from withkit_assets.domain.protocols.stylesheet_compiler_protocol import (
    StylesheetCompilerProtocol,
)


@final
class SassCompilerGateway(StylesheetCompilerProtocol):
    def __init__(self, mode: BuildMode, include_paths: Sequence[Path] = ()) -> None:
        self._mode = mode
        self._include_paths = [str(path) for path in include_paths]

    @property
    def output_style(self) -> str:
        return "compressed" if self._mode is BuildMode.PRODUCTION else "expanded"

    @override
    def compile(self, source: Path) -> str:
        if not source.is_file():
            raise FileNotFoundError(f"Stylesheet source not found: {source}")
        include_paths = [str(source.parent), *self._include_paths]
        css = sass.compile(
            filename=str(source),
            output_style=self.output_style,
            source_comments=self._mode is not BuildMode.PRODUCTION,
            include_paths=include_paths,
        )
        return str(css)
