import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from euclid_diagram import (
    DiagramConfig,
    GoalRequest,
    HypLocation,
    get_euclidean_goal,
    parse_context,
)
from euclid_diagram.rpc import inspect_goal
from euclid_diagram.terms import Goal

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _hidden_locations(goal: Goal, names: Sequence[str]) -> List[HypLocation]:
    locs: List[HypLocation] = []
    for name in names:
        hyp = goal.hyp_by_name(name)
        if hyp is None:
            logger.warning("No hypothesis named %r in goal %s", name, goal.mvar_id)
            continue
        locs.append(HypLocation(hyp.fvar_id))
    return locs


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Draw the Euclidean facts of a proof context")
    parser.add_argument("path", help="Path to the proof context file")
    parser.add_argument(
        "--goal",
        help="Goal identifier (default: first goal in the file)",
    )
    parser.add_argument(
        "--hide",
        action="append",
        default=[],
        metavar="NAME",
        help="Hide the hypothesis with this name (repeatable)",
    )
    parser.add_argument(
        "--renderer",
        choices=["penrose", "svg"],
        default="penrose",
        help="Renderer used for --output-path (default: penrose)",
    )
    parser.add_argument(
        "--output-path",
        help="Write the rendered diagram markup to the given path",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for the SVG preview layout (default: 0)",
    )
    parser.add_argument(
        "--max-opt-steps",
        type=int,
        default=500,
        help="Optimisation budget passed to the renderer (default: 500)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    with open(args.path, encoding="utf-8") as fin:
        text = fin.read()

    logger.info("Parsing proof context from %s", args.path)
    snapshot = parse_context(text, pos=args.path)
    if not snapshot.goals:
        logger.error("No goals found in %s", args.path)
        raise SystemExit(1)

    goal_id = args.goal or snapshot.goals[0].mvar_id
    goal = snapshot.find_goal(goal_id)
    if goal is None:
        logger.error("Could not find goal %r", goal_id)
        raise SystemExit(1)

    locs = _hidden_locations(goal, args.hide)
    program = inspect_goal(goal, locs)
    if program is None:
        print("No Euclidean goal.")
        return

    print(program.text, end="")

    if args.output_path:
        config = DiagramConfig(
            renderer=args.renderer,
            max_opt_steps=args.max_opt_steps,
            random_seed=args.seed,
        )
        request = GoalRequest(args.path, goal_id, tuple(locs))
        response = asyncio.run(get_euclidean_goal(snapshot, request, config=config))
        output_path = Path(args.output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing %s diagram to %s", args.renderer, output_path)
        output_path.write_text(response.html or "", encoding="utf-8")
        print(f"Diagram written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
