from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from withkit_assets.domain.errors import EntryCollisionError, FatalBuildError
from withkit_assets.domain.models.build_entry import BuildEntry, STYLESHEET_SOURCE_SUFFIX

EntrySources = Path | tuple[Path, ...]

# Fixed bundles: output key -> source path relative to a source root.
FIXED_ENTRIES: tuple[tuple[str, str], ...] = (
    ("css/global", "scss/global.scss"),
    ("css/screen", "scss/screen.scss"),
    ("css/editor", "scss/editor.scss"),
    ("js/global", "js/global.js"),
)
BLOCKS_SOURCE = "scss/blocks"
BLOCKS_OUTPUT = "css/blocks"
BLOCK_STYLES_SOURCE = "scss/block-styles"
BLOCK_STYLES_OUTPUT = "css/block-styles"
SECTIONS_SOURCE = "scss/styles/sections"
SECTIONS_OUTPUT = "css/styles/sections"


def _children(directory: Path) -> list[Path]:
    if not directory.exists():
        return []
    try:
        return sorted(directory.iterdir(), key=lambda path: path.name)
    except OSError as exc:
        raise FatalBuildError(f"Cannot read source directory {directory}: {exc}") from exc


def _strip_source_suffix(name: str) -> str:
    return name[: -len(STYLESHEET_SOURCE_SUFFIX)]


def get_scss_files(directory: Path) -> list[Path]:
    """Stylesheet sources directly inside ``directory``; no recursion."""
    return [
        path
        for path in _children(directory)
        if path.is_file() and path.name.endswith(STYLESHEET_SOURCE_SUFFIX)
    ]


def get_recursive_block_entries(root: Path, output_dir: str) -> dict[str, Path]:
    entries: dict[str, Path] = {}
    for path in _children(root):
        if path.is_dir():
            entries.update(get_recursive_block_entries(path, f"{output_dir}/{path.name}"))
        elif path.is_file() and path.name.endswith(STYLESHEET_SOURCE_SUFFIX):
            entries[f"{output_dir}/{_strip_source_suffix(path.name)}"] = path
    return entries


def get_style_block_entries(root: Path, output_dir: str) -> dict[str, Path]:
    """One level of style folders, each holding flat stylesheet sources."""
    entries: dict[str, Path] = {}
    for style_dir in _children(root):
        if not style_dir.is_dir():
            continue
        for path in _children(style_dir):
            if path.is_file() and path.name.endswith(STYLESHEET_SOURCE_SUFFIX):
                key = f"{output_dir}/{style_dir.name}/{_strip_source_suffix(path.name)}"
                entries[key] = path
    return entries


def overlay_entries(
    base: Mapping[str, EntrySources], override: Mapping[str, EntrySources]
) -> dict[str, EntrySources]:
    merged = dict(base)
    merged.update(override)
    return merged


def _as_sources(value: EntrySources) -> tuple[Path, ...]:
    return value if isinstance(value, tuple) else (value,)


def merge_entries(*groups: Mapping[str, EntrySources]) -> dict[str, tuple[Path, ...]]:
    """Combine entry groups; the same key from two different sources is fatal."""
    merged: dict[str, tuple[Path, ...]] = {}
    for group in groups:
        for key, value in group.items():
            sources = _as_sources(value)
            existing = merged.get(key)
            if existing is not None and existing != sources:
                raise EntryCollisionError(key, existing, sources)
            merged[key] = sources
    return merged


def _fixed_entries(source_root: Path) -> dict[str, Path]:
    entries: dict[str, Path] = {}
    for key, relative in FIXED_ENTRIES:
        candidate = source_root / relative
        if candidate.is_file():
            entries[key] = candidate
    return entries


def _section_files(source_root: Path) -> dict[str, Path]:
    return {path.name: path for path in get_scss_files(source_root / SECTIONS_SOURCE)}


def collect_build_entries(
    source_roots: Iterable[Path], logger: logging.Logger
) -> list[BuildEntry]:
    """Discover every bundle across source roots given in base-then-override order."""
    roots = list(source_roots)
    for root in roots:
        if root.exists() and not root.is_dir():
            raise FatalBuildError(f"Source root is not a directory: {root}")

    fixed: dict[str, EntrySources] = {}
    blocks: dict[str, EntrySources] = {}
    block_styles: dict[str, EntrySources] = {}
    sections: dict[str, Path] = {}
    for root in roots:
        fixed = overlay_entries(fixed, _fixed_entries(root))
        blocks = overlay_entries(
            blocks, get_recursive_block_entries(root / BLOCKS_SOURCE, BLOCKS_OUTPUT)
        )
        block_styles = overlay_entries(
            block_styles,
            get_style_block_entries(root / BLOCK_STYLES_SOURCE, BLOCK_STYLES_OUTPUT),
        )
        sections.update(_section_files(root))

    for key, relative in FIXED_ENTRIES:
        if key not in fixed:
            logger.warning("Entry %s skipped: %s not found in any source root", key, relative)

    section_group: dict[str, EntrySources] = {}
    if sections:
        section_group[SECTIONS_OUTPUT] = tuple(sections[name] for name in sorted(sections))

    merged = merge_entries(fixed, blocks, block_styles, section_group)
    return [BuildEntry(key=key, sources=merged[key]) for key in sorted(merged)]
