"""Numeric preview layout for substance programs."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np
from scipy.optimize import least_squares

from .logging_utils import apply_debug_logging
from .matcher import EntityKind, PredicateShape
from .parser import SubstanceProgram

logger = logging.getLogger(__name__)

Point2D = Tuple[float, float]


class LayoutError(ValueError):
    """Raised when a program cannot be laid out."""


@dataclass
class LayoutOptions:
    scale: float = 100.0
    random_seed: int = 0
    max_nfev: int = 500
    softplus_k: float = 20.0
    min_separation: float = 0.3
    min_radius: float = 0.25
    between_margin: float = 0.15
    w_separation: float = 0.5
    w_anchor: float = 1e-3


@dataclass
class LayoutResult:
    points: Dict[str, Point2D] = field(default_factory=dict)
    lines: Dict[str, Tuple[float, float]] = field(default_factory=dict)  # (theta, offset)
    circles: Dict[str, Tuple[float, float, float]] = field(default_factory=dict)  # (cx, cy, r)
    success: bool = True
    max_residual: float = 0.0
    iterations: int = 0


def _softplus(x: np.ndarray, k: float) -> np.ndarray:
    return np.logaddexp(0.0, k * x) / k


class _Layout:
    """Packs entity parameters into one flat vector."""

    def __init__(self, program: SubstanceProgram) -> None:
        self.offsets: Dict[str, int] = {}
        self.kinds: Dict[str, EntityKind] = {}
        size = 0
        for kind, key in program.declarations:
            self.offsets[key] = size
            self.kinds[key] = kind
            size += {EntityKind.POINT: 2, EntityKind.LINE: 2, EntityKind.CIRCLE: 3}[kind]
        self.size = size

    def initial(self, rng: np.random.Generator) -> np.ndarray:
        x0 = np.zeros(self.size, dtype=float)
        for key, idx in self.offsets.items():
            kind = self.kinds[key]
            if kind is EntityKind.POINT:
                x0[idx:idx + 2] = rng.uniform(-1.0, 1.0, size=2)
            elif kind is EntityKind.LINE:
                x0[idx] = rng.uniform(0.0, math.pi)
                x0[idx + 1] = rng.uniform(-0.5, 0.5)
            else:
                x0[idx:idx + 2] = rng.uniform(-0.5, 0.5, size=2)
                x0[idx + 2] = 0.6
        return x0


def _residuals(
    params: np.ndarray,
    layout: _Layout,
    program: SubstanceProgram,
    options: LayoutOptions,
) -> np.ndarray:
    k = options.softplus_k
    out: List[float] = []

    def point(key: str) -> np.ndarray:
        idx = layout.offsets[key]
        return params[idx:idx + 2]

    for shape, keys in program.facts:
        if shape is PredicateShape.ON_LINE:
            p = point(keys[0])
            idx = layout.offsets[keys[1]]
            theta, offset = params[idx], params[idx + 1]
            out.append(p[0] * math.cos(theta) + p[1] * math.sin(theta) - offset)
        elif shape is PredicateShape.ON_CIRCLE:
            p = point(keys[0])
            idx = layout.offsets[keys[1]]
            center, radius = params[idx:idx + 2], params[idx + 2]
            out.append(float(np.hypot(*(p - center))) - radius)
        elif shape is PredicateShape.CENTER_CIRCLE:
            p = point(keys[0])
            idx = layout.offsets[keys[1]]
            out.extend(p - params[idx:idx + 2])
        elif shape is PredicateShape.BETWEEN:
            a, b, c = (point(key) for key in keys)
            ab = b - a
            ac = c - a
            out.append(ab[0] * ac[1] - ab[1] * ac[0])
            denom = max(float(ac @ ac), 1e-9)
            t = float(ab @ ac) / denom
            m = options.between_margin
            out.append(float(_softplus(np.array(m - t), k)))
            out.append(float(_softplus(np.array(t - (1.0 - m)), k)))

    point_keys = program.keys(EntityKind.POINT)
    for i, first in enumerate(point_keys):
        for second in point_keys[i + 1:]:
            dist = float(np.hypot(*(point(first) - point(second))))
            out.append(options.w_separation * float(_softplus(np.array(options.min_separation - dist), k)))

    for key in program.keys(EntityKind.CIRCLE):
        radius = params[layout.offsets[key] + 2]
        out.append(float(_softplus(np.array(options.min_radius - radius), k)))

    for key in point_keys:
        out.extend(options.w_anchor * point(key))

    return np.asarray(out, dtype=float)


def layout_program(program: SubstanceProgram, options: LayoutOptions) -> LayoutResult:
    """Place every declared entity so that the program's facts hold.

    Coordinates are solved in units of ``options.scale`` and scaled back on
    return. The result is deterministic for a fixed seed.
    """

    if not program.declarations:
        raise LayoutError("program declares no entities")
    if not program.facts:
        raise LayoutError("program states no facts")

    layout = _Layout(program)
    rng = np.random.default_rng(options.random_seed)
    x0 = layout.initial(rng)

    result = least_squares(
        _residuals,
        x0,
        args=(layout, program, options),
        method="trf",
        max_nfev=options.max_nfev,
    )
    final = _residuals(result.x, layout, program, options)
    max_residual = float(np.max(np.abs(final))) if final.size else 0.0
    if not result.success:
        logger.warning("least_squares did not converge: %s", result.message)

    s = options.scale
    out = LayoutResult(success=bool(result.success), max_residual=max_residual, iterations=int(result.nfev))
    for key, idx in layout.offsets.items():
        kind = layout.kinds[key]
        if kind is EntityKind.POINT:
            out.points[key] = (float(result.x[idx]) * s, float(result.x[idx + 1]) * s)
        elif kind is EntityKind.LINE:
            out.lines[key] = (float(result.x[idx]), float(result.x[idx + 1]) * s)
        else:
            out.circles[key] = (
                float(result.x[idx]) * s,
                float(result.x[idx + 1]) * s,
                abs(float(result.x[idx + 2])) * s,
            )
    return out


__all__ = ["LayoutError", "LayoutOptions", "LayoutResult", "layout_program"]

apply_debug_logging(globals(), logger=logger)
