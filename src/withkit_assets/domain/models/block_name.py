from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath


@dataclass(frozen=True, slots=True)
class ParsedBlockName:
    filename: str
    namespace: str
    name: str

    @property
    def stem(self) -> str:
        return f"{self.namespace}-{self.name}"

    @property
    def block_name(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True, slots=True)
class InvalidBlockFilename:
    filename: str
    reason: str


def parse_block_filename(filename: str) -> ParsedBlockName | InvalidBlockFilename:
    """Map ``namespace-blockname.css`` to ``namespace/blockname``.

    Only the first hyphen separates the namespace, so
    ``my-custom-block-name.css`` parses as ``my/custom-block-name``.
    """
    stem = PurePosixPath(filename).stem
    if "-" not in stem:
        return InvalidBlockFilename(filename, "filename has no hyphen")
    namespace, name = stem.split("-", 1)
    if not namespace or not name:
        return InvalidBlockFilename(filename, "empty namespace or block name")
    return ParsedBlockName(filename=filename, namespace=namespace, name=name)


def resolve_block_name(filename: str) -> str | None:
    parsed = parse_block_filename(filename)
    if isinstance(parsed, InvalidBlockFilename):
        return None
    return parsed.block_name
