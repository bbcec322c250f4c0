from __future__ import annotations

from typing import Callable, Protocol

from withkit_assets.domain.models.request_context import RequestContext

HookCallback = Callable[[RequestContext], object]


class HookRegistryProtocol(Protocol):
    def add_action(
        self, hook: str, name: str, callback: HookCallback, priority: int = 10
    ) -> None: ...

    def remove_action(self, hook: str, name: str) -> bool: ...

    def do_action(self, hook: str, context: RequestContext) -> None: ...
