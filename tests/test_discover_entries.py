from __future__ import annotations

import logging
from pathlib import Path

import pytest

from withkit_assets.domain.errors import EntryCollisionError, FatalBuildError
from withkit_assets.domain.workflows.discover_entries import (
    collect_build_entries,
    get_recursive_block_entries,
    get_scss_files,
    get_style_block_entries,
    merge_entries,
    overlay_entries,
)


def _touch(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(content, encoding="utf-8")
    return path


def test_get_recursive_block_entries_given_nested_tree_when_walked_then_keys_follow_folders(
    tmp_path: Path,
) -> None:
    root = tmp_path / "blocks"
    quote = _touch(root / "core-quote.scss")
    card = _touch(root / "acme" / "card.scss")
    _ = _touch(root / "acme" / "readme.md")

    entries = get_recursive_block_entries(root, "css/blocks")

    assert entries == {"css/blocks/core-quote": quote, "css/blocks/acme/card": card}


def test_get_recursive_block_entries_given_missing_root_when_walked_then_empty(
    tmp_path: Path,
) -> None:
    assert get_recursive_block_entries(tmp_path / "missing", "css/blocks") == {}


def test_get_style_block_entries_given_style_folders_when_walked_then_one_level_deep(
    tmp_path: Path,
) -> None:
    root = tmp_path / "block-styles"
    plain = _touch(root / "core-paragraph" / "with-test-block-style.scss")
    _ = _touch(root / "core-paragraph" / "nested" / "ignored.scss")
    _ = _touch(root / "stray.scss")

    entries = get_style_block_entries(root, "css/block-styles")

    assert entries == {"css/block-styles/core-paragraph/with-test-block-style": plain}


def test_get_scss_files_given_directory_when_listed_then_non_recursive_and_sorted(
    tmp_path: Path,
) -> None:
    root = tmp_path / "sections"
    second = _touch(root / "b-footer.scss")
    first = _touch(root / "a-header.scss")
    _ = _touch(root / "deep" / "c-hidden.scss")

    assert get_scss_files(root) == [first, second]


def test_overlay_entries_given_same_key_when_overlaid_then_override_wins(tmp_path: Path) -> None:
    base = {"css/blocks/core-quote": tmp_path / "parent.scss"}
    override = {"css/blocks/core-quote": tmp_path / "child.scss"}

    assert overlay_entries(base, override) == override


def test_merge_entries_given_same_key_from_two_sources_when_merged_then_raises(
    tmp_path: Path,
) -> None:
    with pytest.raises(EntryCollisionError) as raised:
        _ = merge_entries(
            {"css/blocks/core-quote": tmp_path / "a.scss"},
            {"css/blocks/core-quote": tmp_path / "b.scss"},
        )

    assert raised.value.key == "css/blocks/core-quote"
    assert isinstance(raised.value, FatalBuildError)


def test_collect_build_entries_given_parent_and_child_roots_when_collected_then_child_overrides(
    tmp_path: Path,
) -> None:
    parent = tmp_path / "parent" / "src"
    child = tmp_path / "child" / "src"
    _ = _touch(parent / "scss" / "global.scss")
    child_screen = _touch(child / "scss" / "screen.scss")
    _ = _touch(parent / "scss" / "screen.scss")
    _ = _touch(parent / "scss" / "editor.scss")
    _ = _touch(parent / "js" / "global.js")
    _ = _touch(parent / "scss" / "blocks" / "core-quote.scss")
    child_quote = _touch(child / "scss" / "blocks" / "core-quote.scss")
    parent_list = _touch(parent / "scss" / "blocks" / "core-list.scss")
    header = _touch(parent / "scss" / "styles" / "sections" / "header.scss")
    footer = _touch(child / "scss" / "styles" / "sections" / "footer.scss")

    entries = collect_build_entries([parent, child], logging.getLogger("test"))
    by_key = {entry.key: entry.sources for entry in entries}

    assert [entry.key for entry in entries] == sorted(by_key)
    assert by_key["css/screen"] == (child_screen,)
    assert by_key["css/blocks/core-quote"] == (child_quote,)
    assert by_key["css/blocks/core-list"] == (parent_list,)
    assert by_key["css/styles/sections"] == (footer, header)
    assert by_key["js/global"] == (parent / "js" / "global.js",)


def test_collect_build_entries_given_missing_fixed_source_when_collected_then_warns(
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    root = tmp_path / "src"
    _ = _touch(root / "scss" / "global.scss")

    with caplog.at_level(logging.WARNING):
        entries = collect_build_entries([root], logging.getLogger("test"))

    assert [entry.key for entry in entries] == ["css/global"]
    assert "css/editor" in caplog.text
    assert "js/global" in caplog.text


def test_collect_build_entries_given_identical_trees_when_collected_twice_then_same_result(
    tmp_path: Path,
) -> None:
    root = tmp_path / "src"
    for name in ("core-quote", "core-list", "acme-card"):
        _ = _touch(root / "scss" / "blocks" / f"{name}.scss")

    first = collect_build_entries([root], logging.getLogger("test"))
    second = collect_build_entries([root], logging.getLogger("test"))

    assert first == second


def test_collect_build_entries_given_root_is_a_file_when_collected_then_fatal(
    tmp_path: Path,
) -> None:
    root = _touch(tmp_path / "src")

    with pytest.raises(FatalBuildError):
        _ = collect_build_entries([root], logging.getLogger("test"))
