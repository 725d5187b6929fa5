"""Classification of hypothesis types against the known predicate shapes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .terms import Term


class EntityKind(Enum):
    POINT = "Point"
    LINE = "Line"
    CIRCLE = "Circle"

    def __str__(self) -> str:
        return self.value


class PredicateShape(Enum):
    """Recognised predicates, in the order they are checked.

    Each member carries its head symbol and the entity kind of every operand,
    in the predicate's declared argument order.
    """

    ON_LINE = ("OnLine", (EntityKind.POINT, EntityKind.LINE))
    BETWEEN = ("Between", (EntityKind.POINT, EntityKind.POINT, EntityKind.POINT))
    ON_CIRCLE = ("OnCircle", (EntityKind.POINT, EntityKind.CIRCLE))
    CENTER_CIRCLE = ("CenterCircle", (EntityKind.POINT, EntityKind.CIRCLE))

    def __init__(self, symbol: str, operand_kinds: Tuple[EntityKind, ...]) -> None:
        self.symbol = symbol
        self.operand_kinds = operand_kinds

    @property
    def arity(self) -> int:
        return len(self.operand_kinds)

    def match(self, term: Term) -> Optional[Tuple[Term, ...]]:
        if term.head != self.symbol or term.arity != self.arity:
            return None
        return term.args

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["PredicateShape"]:
        for shape in cls:
            if shape.symbol == symbol:
                return shape
        return None


@dataclass(frozen=True)
class PredicateMatch:
    shape: PredicateShape
    operands: Tuple[Term, ...]

    def operand_kinds(self) -> Tuple[Tuple[Term, EntityKind], ...]:
        return tuple(zip(self.operands, self.shape.operand_kinds))


def match_predicates(term: Term) -> List[PredicateMatch]:
    """Return every shape matching ``term``, in shape order.

    Head symbols are currently distinct, so at most one match is produced, but
    each shape is still tested on its own.
    """

    matches: List[PredicateMatch] = []
    for shape in PredicateShape:
        operands = shape.match(term)
        if operands is not None:
            matches.append(PredicateMatch(shape, operands))
    return matches


__all__ = [
    "EntityKind",
    "PredicateShape",
    "PredicateMatch",
    "match_predicates",
]
