from __future__ import annotations

import hashlib
import logging
from collections.abc import Sequence
from typing import final

from withkit_assets.domain.errors import FatalBuildError
from withkit_assets.domain.models.build_entry import BuildEntry, CompiledBundle
from withkit_assets.domain.protocols.script_bundler_protocol import ScriptBundlerProtocol
from withkit_assets.domain.protocols.stylesheet_compiler_protocol import (
    StylesheetCompilerProtocol,
)


def content_version(content: bytes) -> str:
    return hashlib.blake2b(content, digest_size=10).hexdigest()


@final
class CompileBundles:
    def __init__(
        self,
        stylesheet_compiler: StylesheetCompilerProtocol,
        script_bundler: ScriptBundlerProtocol,
        logger: logging.Logger,
    ) -> None:
        self._stylesheet_compiler = stylesheet_compiler
        self._script_bundler = script_bundler
        self._logger = logger

    def _compile_stylesheet(self, entry: BuildEntry) -> CompiledBundle:
        parts = [self._stylesheet_compiler.compile(source) for source in entry.sources]
        content = "\n".join(part.rstrip("\n") for part in parts).encode("utf-8")
        if content:
            content += b"\n"
        return CompiledBundle(
            entry=entry,
            content=content,
            dependencies=tuple(),
            version=content_version(content),
        )

    def _bundle_script(self, entry: BuildEntry) -> CompiledBundle:
        if len(entry.sources) != 1:
            raise FatalBuildError(f"Script entry {entry.key} must have exactly one source")
        bundle = self._script_bundler.bundle(entry.sources[0])
        content = bundle.code.encode("utf-8")
        return CompiledBundle(
            entry=entry,
            content=content,
            dependencies=bundle.dependencies,
            version=content_version(content),
        )

    def __call__(self, entries: Sequence[BuildEntry]) -> list[CompiledBundle]:
        """Compile everything in memory; any failure aborts before output is written."""
        compiled: list[CompiledBundle] = []
        for entry in entries:
            try:
                if entry.is_stylesheet:
                    bundle = self._compile_stylesheet(entry)
                else:
                    bundle = self._bundle_script(entry)
            except FatalBuildError:
                raise
            except Exception as exc:
                raise FatalBuildError(f"Failed to compile {entry.key}: {exc}") from exc
            self._logger.debug(
                "Compiled %s from %d source(s), version %s",
                entry.output_name,
                len(entry.sources),
                bundle.version,
            )
            compiled.append(bundle)
        return compiled
