"""Server-side SVG preview of a substance program."""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

from .base import RenderRequest
from .utils import escape_attr, escape_text, format_float
from ..layout import LayoutOptions, LayoutResult, layout_program
from ..parser import parse_substance

logger = logging.getLogger(__name__)

POINT_RADIUS = 2.5
LABEL_OFFSET = 8.0
LINE_COLOR = "#1f4e79"
CIRCLE_COLOR = "#7b2d26"

svg_tpl = (
    '<svg xmlns="http://www.w3.org/2000/svg" class="euclid-diagram" '
    'width="%d" height="%d" viewBox="0 0 %d %d">\n'
    '<g class="circles" fill="none" stroke="%s" stroke-width="1.5">\n%s</g>\n'
    '<g class="lines" stroke="%s" stroke-width="1.5">\n%s</g>\n'
    '<g class="points" fill="#000000">\n%s</g>\n'
    '<g class="labels" font-size="14" font-family="serif">\n%s</g>\n'
    "</svg>"
)


class SvgPreviewRenderer:
    """Lay out the program numerically and draw it as inline SVG."""

    def __init__(
        self,
        options: Optional[LayoutOptions] = None,
        *,
        width: int = 400,
        height: int = 400,
    ) -> None:
        self.options = options or LayoutOptions()
        self.width = width
        self.height = height

    def _to_canvas(self, x: float, y: float) -> Tuple[float, float]:
        return self.width / 2.0 + x, self.height / 2.0 - y

    def render(self, request: RenderRequest) -> str:
        program = parse_substance(request.substance)
        options = self.options
        if request.max_opt_steps and request.max_opt_steps != options.max_nfev:
            options = LayoutOptions(**{**vars(options), "max_nfev": request.max_opt_steps})
        result = layout_program(program, options)
        if not result.success:
            logger.warning("Preview layout is approximate (max residual %.3e)", result.max_residual)
        labels = request.labels if program.auto_label else {}
        return self.emit(result, labels)

    def emit(self, result: LayoutResult, labels) -> str:
        circles: List[str] = []
        lines: List[str] = []
        points: List[str] = []
        texts: List[str] = []

        def label(key: str, x: float, y: float) -> None:
            text = labels.get(key)
            if text:
                texts.append(
                    f'<text x="{format_float(x)}" y="{format_float(y)}" '
                    f'data-key="{escape_attr(key)}">{escape_text(text)}</text>\n'
                )

        for key, (cx, cy, r) in result.circles.items():
            sx, sy = self._to_canvas(cx, cy)
            circles.append(
                f'<circle cx="{format_float(sx)}" cy="{format_float(sy)}" r="{format_float(r)}" '
                f'data-key="{escape_attr(key)}"/>\n'
            )
            label(key, sx + r * math.sqrt(0.5) + LABEL_OFFSET / 2, sy - r * math.sqrt(0.5))

        reach = float(self.width + self.height)
        for key, (theta, offset) in result.lines.items():
            nx, ny = math.cos(theta), math.sin(theta)
            dx, dy = -ny, nx
            bx, by = offset * nx, offset * ny
            x1, y1 = self._to_canvas(bx - reach * dx, by - reach * dy)
            x2, y2 = self._to_canvas(bx + reach * dx, by + reach * dy)
            lines.append(
                f'<line x1="{format_float(x1)}" y1="{format_float(y1)}" '
                f'x2="{format_float(x2)}" y2="{format_float(y2)}" data-key="{escape_attr(key)}"/>\n'
            )
            lx, ly = self._to_canvas(bx + 0.3 * self.width * dx, by + 0.3 * self.height * dy)
            label(key, lx + LABEL_OFFSET, ly - LABEL_OFFSET)

        for key, (x, y) in result.points.items():
            sx, sy = self._to_canvas(x, y)
            points.append(
                f'<circle cx="{format_float(sx)}" cy="{format_float(sy)}" '
                f'r="{format_float(POINT_RADIUS)}" data-key="{escape_attr(key)}"/>\n'
            )
            label(key, sx + LABEL_OFFSET, sy - LABEL_OFFSET)

        return svg_tpl % (
            self.width,
            self.height,
            self.width,
            self.height,
            CIRCLE_COLOR,
            "".join(circles),
            LINE_COLOR,
            "".join(lines),
            "".join(points),
            "".join(texts),
        )
