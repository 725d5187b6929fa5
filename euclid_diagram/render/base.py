from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Protocol


@dataclass(frozen=True)
class RenderRequest:
    """Everything a diagram engine needs for one picture."""

    substance: str
    domain: str
    style: str
    labels: Dict[str, str] = field(default_factory=dict)
    max_opt_steps: int = 500


class DiagramRenderer(Protocol):
    def render(self, request: RenderRequest) -> str:
        ...
