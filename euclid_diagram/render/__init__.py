"""Renderers turning substance programs into displayable markup."""

from typing import Optional

from .base import DiagramRenderer, RenderRequest
from .penrose import PenroseEmbedRenderer
from .svg import SvgPreviewRenderer
from ..config import DiagramConfig, get_diagram_config
from ..layout import LayoutOptions


def get_renderer(config: Optional[DiagramConfig] = None) -> DiagramRenderer:
    """Build the renderer named by ``config.renderer``."""

    config = config or get_diagram_config()
    if config.renderer == "penrose":
        return PenroseEmbedRenderer()
    if config.renderer == "svg":
        options = LayoutOptions(random_seed=config.random_seed, max_nfev=config.max_opt_steps)
        return SvgPreviewRenderer(options, width=config.canvas_width, height=config.canvas_height)
    raise ValueError(f"unknown renderer {config.renderer!r}")


__all__ = [
    "DiagramRenderer",
    "RenderRequest",
    "PenroseEmbedRenderer",
    "SvgPreviewRenderer",
    "get_renderer",
]
