"""Synthesis of substance programs from hypothesis lists."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import reduce
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .logging_utils import apply_debug_logging
from .matcher import match_predicates
from .printer import AUTO_LABEL_LINE, format_decl, format_fact, print_program
from .registry import Entity, EntityRegistry, Stringify
from .terms import Hypothesis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildState:
    """Accumulator threaded through :func:`step`."""

    registry: EntityRegistry
    lines: Tuple[str, ...] = (AUTO_LABEL_LINE,)
    fact_count: int = 0


@dataclass(frozen=True)
class DiagramProgram:
    lines: Tuple[str, ...]
    entities: Tuple[Entity, ...] = field(default_factory=tuple)
    fact_count: int = 0

    @property
    def text(self) -> str:
        return print_program(self)

    def labels(self, label: Optional[Callable[[Entity], str]] = None) -> Dict[str, str]:
        """Map every entity key to its display label (the key itself by default)."""

        label = label or (lambda entity: entity.key)
        return {entity.key: label(entity) for entity in self.entities}


def initial_state(stringify: Optional[Stringify] = None) -> BuildState:
    return BuildState(registry=EntityRegistry(stringify))


def step(state: BuildState, hyp: Hypothesis) -> BuildState:
    """Return a new state with the declarations and facts contributed by ``hyp``.

    ``state`` is left untouched; its registry is copied before any insert.
    """

    registry = state.registry.copy()
    emitted: List[str] = []
    facts = state.fact_count
    for match in match_predicates(hyp.type):
        keys = [registry.stringify(operand) for operand in match.operands]
        for key, (operand, kind) in zip(keys, match.operand_kinds()):
            entity, is_new = registry.insert(key, operand, kind)
            if is_new:
                emitted.append(format_decl(entity.kind, key))
        emitted.append(format_fact(match.shape, keys))
        facts += 1
    if not emitted:
        return state
    logger.debug("Hypothesis %s contributed %d line(s)", hyp.user_name, len(emitted))
    return BuildState(registry, state.lines + tuple(emitted), facts)


def build_diagram_program(
    hyps: Iterable[Hypothesis],
    stringify: Optional[Stringify] = None,
) -> Optional[DiagramProgram]:
    """Fold ``hyps`` into a substance program.

    Returns ``None`` when no hypothesis matched a predicate shape, so there is
    nothing to draw.
    """

    final = reduce(step, hyps, initial_state(stringify))
    if final.fact_count == 0:
        return None
    return DiagramProgram(
        lines=final.lines,
        entities=tuple(final.registry.entities()),
        fact_count=final.fact_count,
    )


__all__ = [
    "BuildState",
    "DiagramProgram",
    "initial_state",
    "step",
    "build_diagram_program",
]

apply_debug_logging(globals(), logger=logger, skip={"step"})
