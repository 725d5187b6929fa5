"""Client-side controller for the Euclidean diagram panel."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .render.utils import escape_text
from .rpc import GET_EUCLIDEAN_GOAL, GoalLookupFailure, GoalRequest, GoalResponse, RpcError, Transport
from .visibility import GoalLocation, GoalsLocation

logger = logging.getLogger(__name__)

LOADING_HTML = '<div class="euclid-panel loading">Loading..</div>'
NO_DIAGRAM_HTML = '<div class="euclid-panel empty">No Euclidean goal.</div>'


class PanelState(Enum):
    IDLE = "idle"
    PENDING = "pending"
    RESOLVED = "resolved"
    ERRORED = "errored"


@dataclass(frozen=True)
class PanelProps:
    """Inputs the panel reacts to.

    ``goals`` are the identifiers of the displayed goals, and
    ``cursor_goal_id`` the goal carried by the current cursor location.
    """

    pos: str
    goals: Tuple[str, ...] = ()
    selected_locations: Tuple[GoalsLocation, ...] = ()
    cursor_goal_id: Optional[str] = None


def resolve_goal(props: PanelProps) -> str:
    for goal_id in props.goals:
        if goal_id == props.cursor_goal_id:
            return goal_id
    raise GoalLookupFailure(f"Could not find goal {props.cursor_goal_id!r}")


def locations_for_goal(locations: Sequence[GoalsLocation], goal_id: str) -> Tuple[GoalLocation, ...]:
    return tuple(sl.loc for sl in locations if sl.mvar_id == goal_id)


class PanelController:
    """Drive one panel instance through idle/pending/resolved/errored.

    Every request is tagged with a generation number; a response or failure
    whose generation is no longer the latest is dropped.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._props: Optional[PanelProps] = None
        self._generation = 0
        self.state = PanelState.IDLE
        self.response: Optional[GoalResponse] = None
        self.error: Optional[BaseException] = None

    @property
    def generation(self) -> int:
        return self._generation

    async def update(self, props: PanelProps) -> None:
        if props == self._props:
            return
        self._props = props
        self._generation += 1
        generation = self._generation
        self.state = PanelState.PENDING

        try:
            goal_id = resolve_goal(props)
        except GoalLookupFailure as exc:
            self._fail(generation, exc)
            return

        request = GoalRequest(props.pos, goal_id, locations_for_goal(props.selected_locations, goal_id))
        try:
            payload = await self._transport(GET_EUCLIDEAN_GOAL, request.to_json())
        except Exception as exc:
            self._fail(generation, exc)
            return

        if generation != self._generation:
            logger.debug("Dropping stale response for generation %d (latest %d)", generation, self._generation)
            return
        self.response = GoalResponse.from_json(payload)
        self.error = None
        self.state = PanelState.RESOLVED

    def _fail(self, generation: int, exc: BaseException) -> None:
        if generation != self._generation:
            logger.debug("Dropping stale failure for generation %d: %s", generation, exc)
            return
        logger.info("Euclidean panel request failed: %s", exc)
        self.error = exc
        self.response = None
        self.state = PanelState.ERRORED

    def render(self) -> str:
        if self.state is PanelState.IDLE:
            return ""
        if self.state is PanelState.PENDING:
            return LOADING_HTML
        if self.state is PanelState.ERRORED:
            return f'<div class="euclid-panel error"><pre>{escape_text(error_payload(self.error))}</pre></div>'
        if self.response is None or not self.response.html:
            return NO_DIAGRAM_HTML
        return self.response.html


def error_payload(error: Optional[BaseException]) -> str:
    if isinstance(error, RpcError):
        return json.dumps(error.to_json(), sort_keys=True)
    return f"{type(error).__name__}: {error}"


__all__ = [
    "PanelState",
    "PanelProps",
    "PanelController",
    "resolve_goal",
    "locations_for_goal",
    "error_payload",
]
