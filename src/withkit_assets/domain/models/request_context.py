from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RequestContext:
    is_admin: bool = False
    is_block_editor: bool = False

    @classmethod
    def frontend(cls) -> "RequestContext":
        return cls(is_admin=False, is_block_editor=False)

    @classmethod
    def block_editor(cls) -> "RequestContext":
        return cls(is_admin=True, is_block_editor=True)
