"""Configuration helpers for diagram rendering."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Optional


@dataclass
class DiagramConfig:
    """Rendering knobs shared by the request handler and the CLI."""

    renderer: str = "penrose"
    max_opt_steps: int = 500
    canvas_width: int = 400
    canvas_height: int = 400
    random_seed: int = 0
    domain_path: Optional[str] = None
    style_path: Optional[str] = None


_DIAGRAM_CONFIG = DiagramConfig()


def get_diagram_config() -> DiagramConfig:
    return copy.deepcopy(_DIAGRAM_CONFIG)


def set_diagram_config(config: DiagramConfig) -> None:
    global _DIAGRAM_CONFIG
    _DIAGRAM_CONFIG = copy.deepcopy(config)
