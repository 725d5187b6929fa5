from typing import TYPE_CHECKING, Sequence

from .matcher import EntityKind, PredicateShape
from .terms import Term

if TYPE_CHECKING:
    from .builder import DiagramProgram

AUTO_LABEL_LINE = "AutoLabel All"


def format_term(term: Term) -> str:
    """Default display oracle: ``f a (g b)`` style application syntax."""

    if not term.args:
        return term.head
    parts = [term.head]
    for arg in term.args:
        rendered = format_term(arg)
        parts.append(f"({rendered})" if arg.args else rendered)
    return " ".join(parts)


def format_decl(kind: EntityKind, key: str) -> str:
    return f"{kind.value} {key}"


def format_fact(shape: PredicateShape, keys: Sequence[str]) -> str:
    if len(keys) != shape.arity:
        raise ValueError(f"{shape.symbol} expects {shape.arity} keys, got {len(keys)}")
    return f"{shape.symbol}({', '.join(keys)})"


def print_program(program: "DiagramProgram") -> str:
    return "\n".join(program.lines) + "\n"
