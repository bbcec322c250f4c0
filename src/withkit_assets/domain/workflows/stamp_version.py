from __future__ import annotations

import json
import re
from pathlib import Path
from typing import cast

_VERSION_LINE = re.compile(rb"(Version:[ \t]*)([^\r\n]+)")


def stamp_version(style_path: Path, version: str) -> bool:
    """Rewrite the first ``Version:`` header; never insert one.

    Works on raw bytes so headers in any ASCII-compatible encoding survive
    untouched. Returns True only when the file was rewritten.
    """
    if not style_path.exists():
        return False
    original = style_path.read_bytes()
    stamp = version.encode("utf-8")
    updated, count = _VERSION_LINE.subn(lambda match: match.group(1) + stamp, original, count=1)
    if count == 0 or updated == original:
        return False
    _ = style_path.write_bytes(updated)
    return True


def resolve_theme_version(configured: str | None, package_json_path: Path) -> str | None:
    if configured and configured.strip():
        return configured.strip()
    if not package_json_path.exists():
        return None
    try:
        payload = cast(object, json.loads(package_json_path.read_text("utf-8")))
    except (OSError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    value = cast(dict[str, object], payload).get("version")
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()
