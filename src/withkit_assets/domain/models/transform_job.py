from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from withkit_assets.domain.protocols.transform_protocol import TransformProtocol


@dataclass(frozen=True, slots=True)
class TransformJob:
    source: Path
    destination: Path
    transform: TransformProtocol
