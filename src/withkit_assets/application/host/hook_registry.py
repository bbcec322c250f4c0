from __future__ import annotations

from dataclasses import dataclass, field
from typing import final
from typing_extensions import override

from withkit_assets.domain.models.request_context import RequestContext
from withkit_assets.domain.protocols.hook_registry_protocol import (
    HookCallback,
    HookRegistryProtocol,
)


@dataclass(order=True)
class _Registration:
    priority: int
    sequence: int
    name: str = field(compare=False)
    callback: HookCallback = field(compare=False)


@final
class InMemoryHookRegistry(HookRegistryProtocol):
    """Named callbacks per hook, run in priority then insertion order."""

    def __init__(self) -> None:
        self._hooks: dict[str, list[_Registration]] = {}
        self._sequence = 0

    @override
    def add_action(
        self, hook: str, name: str, callback: HookCallback, priority: int = 10
    ) -> None:
        registrations = self._hooks.setdefault(hook, [])
        registrations[:] = [item for item in registrations if item.name != name]
        self._sequence += 1
        registrations.append(_Registration(priority, self._sequence, name, callback))

    @override
    def remove_action(self, hook: str, name: str) -> bool:
        registrations = self._hooks.get(hook, [])
        remaining = [item for item in registrations if item.name != name]
        removed = len(remaining) != len(registrations)
        self._hooks[hook] = remaining
        return removed

    @override
    def do_action(self, hook: str, context: RequestContext) -> None:
        for registration in sorted(self._hooks.get(hook, [])):
            _ = registration.callback(context)

    def callbacks(self, hook: str) -> list[str]:
        return [item.name for item in sorted(self._hooks.get(hook, []))]
