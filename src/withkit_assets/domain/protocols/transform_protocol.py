from __future__ import annotations

from typing import Protocol


class TransformProtocol(Protocol):
    def apply(self, content: bytes) -> bytes: ...
