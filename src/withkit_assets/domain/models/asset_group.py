from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class LoadContext(StrEnum):
    FRONTEND = "frontend"
    EDITOR = "editor"
    BOTH = "both"


class AssetKind(StrEnum):
    STYLE = "style"
    SCRIPT = "script"


@dataclass(frozen=True, slots=True)
class AssetGroup:
    name: str
    relative_path: str
    kind: AssetKind
    load_context: LoadContext
    handle: str
    in_footer: bool = False


def default_asset_groups(prefix: str) -> tuple[AssetGroup, ...]:
    return (
        AssetGroup(
            name="global",
            relative_path="build/css/global.css",
            kind=AssetKind.STYLE,
            load_context=LoadContext.BOTH,
            handle=f"{prefix}-global-style",
        ),
        AssetGroup(
            name="global",
            relative_path="build/js/global.js",
            kind=AssetKind.SCRIPT,
            load_context=LoadContext.BOTH,
            handle=f"{prefix}-global-script",
            in_footer=True,
        ),
        AssetGroup(
            name="screen",
            relative_path="build/css/screen.css",
            kind=AssetKind.STYLE,
            load_context=LoadContext.FRONTEND,
            handle=f"{prefix}-screen-style",
        ),
        AssetGroup(
            name="editor",
            relative_path="build/css/editor.css",
            kind=AssetKind.STYLE,
            load_context=LoadContext.EDITOR,
            handle=f"{prefix}-editor-style",
        ),
    )
