from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from withkit_assets.domain.models.resolved_asset import AssetVersion


class EnqueueSinkProtocol(Protocol):
    def register_style(
        self,
        handle: str,
        uri: str,
        dependencies: Sequence[str],
        version: AssetVersion,
    ) -> None: ...

    def register_script(
        self,
        handle: str,
        uri: str,
        dependencies: Sequence[str],
        version: AssetVersion,
        in_footer: bool,
    ) -> None: ...

    def register_block_style_variant(
        self, block_name: str, handle: str, uri: str, version: AssetVersion
    ) -> None: ...

    def register_pattern_category(self, slug: str, label: str, description: str) -> None: ...

    def register_block_style(
        self, block_type: str, name: str, label: str, style_handle: str
    ) -> None: ...
