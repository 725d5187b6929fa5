"""The ``getEuclideanGoal`` request handler and a small RPC layer around it."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Union

from .builder import DiagramProgram, build_diagram_program
from .config import DiagramConfig, get_diagram_config
from .logging_utils import apply_debug_logging
from .reference import load_resources
from .registry import Entity, Stringify
from .render import DiagramRenderer, RenderRequest, get_renderer
from .terms import Goal, ProofSnapshot
from .visibility import GoalLocation, filter_hypotheses, location_from_json

logger = logging.getLogger(__name__)

GET_EUCLIDEAN_GOAL = "getEuclideanGoal"

RpcHandler = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]
Transport = Callable[[str, Dict[str, Any]], Awaitable[Dict[str, Any]]]
SnapshotSource = Union[Mapping[str, ProofSnapshot], Callable[[str], Optional[ProofSnapshot]]]


class GoalLookupFailure(LookupError):
    """The requested goal is not among the displayed goals."""


class RpcMethodNotFound(KeyError):
    pass


class RpcError(Exception):
    """Failure reported back through a transport."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def to_json(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


@dataclass(frozen=True)
class GoalRequest:
    context_ref: str
    goal_id: str
    locs: Sequence[GoalLocation] = field(default_factory=tuple)

    def to_json(self) -> Dict[str, Any]:
        return {
            "contextRef": self.context_ref,
            "goalId": self.goal_id,
            "locs": [loc.to_json() for loc in self.locs],
        }

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "GoalRequest":
        # "pos" is the older name of "contextRef".
        context_ref = payload.get("contextRef", payload.get("pos"))
        if context_ref is None:
            raise ValueError("GoalRequest missing field 'contextRef'")
        try:
            goal_id = payload["goalId"]
        except KeyError as exc:
            raise ValueError(f"GoalRequest missing field {exc.args[0]!r}") from exc
        locs = tuple(location_from_json(loc) for loc in payload.get("locs", []))
        return cls(str(context_ref), str(goal_id), locs)


@dataclass(frozen=True)
class GoalResponse:
    html: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return {"html": self.html}

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "GoalResponse":
        return cls(payload.get("html") or None)


def inspect_goal(
    goal: Goal,
    locs: Sequence[GoalLocation],
    stringify: Optional[Stringify] = None,
) -> Optional[DiagramProgram]:
    """Read-only pass over ``goal``: hide selected hypotheses, then build."""

    visible = filter_hypotheses(goal.hyps, locs)
    return build_diagram_program(visible, stringify)


async def get_euclidean_goal(
    snapshot: ProofSnapshot,
    request: GoalRequest,
    renderer: Optional[DiagramRenderer] = None,
    *,
    config: Optional[DiagramConfig] = None,
    stringify: Optional[Stringify] = None,
    label: Optional[Callable[[Entity], str]] = None,
) -> GoalResponse:
    goal = snapshot.find_goal(request.goal_id)
    if goal is None:
        raise GoalLookupFailure(f"Could not find goal {request.goal_id!r}")

    program = await asyncio.to_thread(inspect_goal, goal, request.locs, stringify)
    if program is None:
        logger.info("Goal %s has no Euclidean facts", request.goal_id)
        return GoalResponse(None)

    config = config or get_diagram_config()
    renderer = renderer or get_renderer(config)
    domain, style = load_resources(config.domain_path, config.style_path)
    render_request = RenderRequest(
        substance=program.text,
        domain=domain,
        style=style,
        labels=program.labels(label),
        max_opt_steps=config.max_opt_steps,
    )
    logger.info(
        "Rendering goal %s: %d entities, %d facts",
        request.goal_id,
        len(program.entities),
        program.fact_count,
    )
    return GoalResponse(renderer.render(render_request))


class RpcServer:
    """Dispatches method names to async handlers over one snapshot source."""

    def __init__(
        self,
        snapshots: SnapshotSource,
        renderer: Optional[DiagramRenderer] = None,
        config: Optional[DiagramConfig] = None,
    ) -> None:
        self._snapshots = snapshots
        self._renderer = renderer
        self._config = config
        self._methods: Dict[str, RpcHandler] = {}
        self.register(GET_EUCLIDEAN_GOAL, self._get_euclidean_goal)

    def register(self, method: str, handler: RpcHandler) -> None:
        self._methods[method] = handler

    def methods(self) -> List[str]:
        return sorted(self._methods)

    def snapshot(self, pos: str) -> ProofSnapshot:
        if callable(self._snapshots):
            found = self._snapshots(pos)
        else:
            found = self._snapshots.get(pos)
        if found is None:
            raise GoalLookupFailure(f"No proof state at {pos!r}")
        return found

    async def call(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        handler = self._methods.get(method)
        if handler is None:
            raise RpcMethodNotFound(method)
        return await handler(params)

    async def _get_euclidean_goal(self, params: Dict[str, Any]) -> Dict[str, Any]:
        request = GoalRequest.from_json(params)
        response = await get_euclidean_goal(
            self.snapshot(request.context_ref),
            request,
            self._renderer,
            config=self._config,
        )
        return response.to_json()


class LocalTransport:
    """In-process transport; payloads cross it as JSON text."""

    def __init__(self, server: RpcServer) -> None:
        self.server = server

    async def __call__(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        wire_params = json.loads(json.dumps(params))
        try:
            result = await self.server.call(method, wire_params)
        except RpcMethodNotFound as exc:
            raise RpcError("methodNotFound", f"No RPC method {method!r}") from exc
        except (GoalLookupFailure, ValueError) as exc:
            raise RpcError(type(exc).__name__, str(exc)) from exc
        return json.loads(json.dumps(result))


__all__ = [
    "GET_EUCLIDEAN_GOAL",
    "GoalLookupFailure",
    "RpcMethodNotFound",
    "RpcError",
    "GoalRequest",
    "GoalResponse",
    "inspect_goal",
    "get_euclidean_goal",
    "RpcServer",
    "LocalTransport",
    "Transport",
]

apply_debug_logging(globals(), logger=logger, wrap_methods=False)
