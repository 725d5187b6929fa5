from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Span:
    line: int
    col: int


@dataclass(frozen=True)
class Term:
    """Application of ``head`` to ``args``; a constant has no arguments."""

    head: str
    args: Tuple["Term", ...] = ()

    @property
    def arity(self) -> int:
        return len(self.args)


def const(name: str) -> Term:
    return Term(name)


def app(head: str, *args: Term) -> Term:
    return Term(head, tuple(args))


@dataclass(frozen=True)
class Hypothesis:
    fvar_id: str
    user_name: str
    type: Term
    span: Optional[Span] = None


@dataclass
class Goal:
    mvar_id: str
    hyps: List[Hypothesis] = field(default_factory=list)
    target: Optional[Term] = None

    def hyp_by_name(self, user_name: str) -> Optional[Hypothesis]:
        """Return the last hypothesis called ``user_name`` (later ones shadow)."""

        for hyp in reversed(self.hyps):
            if hyp.user_name == user_name:
                return hyp
        return None


@dataclass
class ProofSnapshot:
    """Read-only view of the goals displayed at one document position."""

    goals: List[Goal] = field(default_factory=list)
    pos: Optional[str] = None

    def find_goal(self, mvar_id: str) -> Optional[Goal]:
        for goal in self.goals:
            if goal.mvar_id == mvar_id:
                return goal
        return None
