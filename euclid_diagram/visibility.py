"""Selected-location descriptors and the hypothesis visibility filter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Sequence, Set, Union

from .terms import Hypothesis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HypLocation:
    """A whole hypothesis selected in the goal view."""

    fvar_id: str

    def to_json(self) -> Dict[str, Any]:
        return {"hyp": self.fvar_id}


@dataclass(frozen=True)
class HypTypeLocation:
    """A subterm of a hypothesis's displayed type."""

    fvar_id: str
    pos: str = "/"

    def to_json(self) -> Dict[str, Any]:
        return {"hypType": [self.fvar_id, self.pos]}


@dataclass(frozen=True)
class TargetLocation:
    """A subterm of the goal target; never hides a hypothesis."""

    pos: str = "/"

    def to_json(self) -> Dict[str, Any]:
        return {"target": self.pos}


GoalLocation = Union[HypLocation, HypTypeLocation, TargetLocation]


@dataclass(frozen=True)
class GoalsLocation:
    """A location qualified by the goal it was selected in."""

    mvar_id: str
    loc: GoalLocation

    def to_json(self) -> Dict[str, Any]:
        return {"mvarId": self.mvar_id, "loc": self.loc.to_json()}

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "GoalsLocation":
        return cls(str(payload["mvarId"]), location_from_json(payload["loc"]))


def location_from_json(payload: Any) -> GoalLocation:
    if not isinstance(payload, dict) or len(payload) != 1:
        raise ValueError(f"invalid location payload {payload!r}")
    (tag, value), = payload.items()
    if tag == "hyp":
        return HypLocation(str(value))
    if tag == "hypType":
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise ValueError(f"invalid hypType payload {value!r}")
        return HypTypeLocation(str(value[0]), str(value[1]))
    if tag == "target":
        return TargetLocation(str(value))
    raise ValueError(f"unknown location tag {tag!r}")


def hidden_fvars(locs: Iterable[GoalLocation]) -> Set[str]:
    return {
        loc.fvar_id
        for loc in locs
        if isinstance(loc, (HypLocation, HypTypeLocation))
    }


def filter_hypotheses(
    hyps: Sequence[Hypothesis],
    locs: Iterable[GoalLocation],
) -> List[Hypothesis]:
    """Drop every hypothesis the user has selected, keeping context order."""

    hidden = hidden_fvars(locs)
    visible = [hyp for hyp in hyps if hyp.fvar_id not in hidden]
    if hidden:
        logger.debug("Hid %d of %d hypotheses", len(hyps) - len(visible), len(hyps))
    return visible


__all__ = [
    "HypLocation",
    "HypTypeLocation",
    "TargetLocation",
    "GoalLocation",
    "GoalsLocation",
    "location_from_json",
    "hidden_fvars",
    "filter_hypotheses",
]
