from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import final
from typing_extensions import override

from withkit_assets.domain.models.resolved_asset import AssetVersion
from withkit_assets.domain.protocols.enqueue_sink_protocol import EnqueueSinkProtocol


@dataclass(frozen=True, slots=True)
class SinkCall:
    method: str
    handle: str
    arguments: tuple[tuple[str, object], ...]

    def argument(self, name: str) -> object:
        return dict(self.arguments)[name]


@final
class RecordingEnqueueSink(EnqueueSinkProtocol):
    def __init__(self) -> None:
        self.calls: list[SinkCall] = []

    def _record(self, method: str, handle: str, **arguments: object) -> None:
        self.calls.append(SinkCall(method, handle, tuple(arguments.items())))

    def handles(self, method: str | None = None) -> list[str]:
        return [call.handle for call in self.calls if method is None or call.method == method]

    @override
    def register_style(
        self,
        handle: str,
        uri: str,
        dependencies: Sequence[str],
        version: AssetVersion,
    ) -> None:
        self._record(
            "register_style",
            handle,
            uri=uri,
            dependencies=tuple(dependencies),
            version=version,
        )

    @override
    def register_script(
        self,
        handle: str,
        uri: str,
        dependencies: Sequence[str],
        version: AssetVersion,
        in_footer: bool,
    ) -> None:
        self._record(
            "register_script",
            handle,
            uri=uri,
            dependencies=tuple(dependencies),
            version=version,
            in_footer=in_footer,
        )

    @override
    def register_block_style_variant(
        self, block_name: str, handle: str, uri: str, version: AssetVersion
    ) -> None:
        self._record(
            "register_block_style_variant",
            handle,
            block_name=block_name,
            uri=uri,
            version=version,
        )

    @override
    def register_pattern_category(self, slug: str, label: str, description: str) -> None:
        self._record("register_pattern_category", slug, label=label, description=description)

    @override
    def register_block_style(
        self, block_type: str, name: str, label: str, style_handle: str
    ) -> None:
        self._record(
            "register_block_style",
            style_handle,
            block_type=block_type,
            name=name,
            label=label,
        )
