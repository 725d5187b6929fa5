import asyncio

from . import (
    GoalsLocation,
    HypLocation,
    LocalTransport,
    PanelController,
    PanelProps,
    RpcServer,
    parse_context,
)
from .rpc import inspect_goal

DEMO = """
goal main
a b c : Point
L M : Line
C D E : Circle
h1 : Between a b c
h2 : OnLine a L
h3 : OnLine b M
h4 : OnLine c L
h5 : OnLine c M
h6 : OnCircle a C
h7 : OnCircle a D
h8 : CenterCircle b C
h9 : CenterCircle c E
"""


def run():
    snapshot = parse_context(DEMO, pos="demo")
    goal = snapshot.goals[0]
    print(f"Parsed goal: {goal.mvar_id} with {len(goal.hyps)} hypotheses\n")

    program = inspect_goal(goal, [])
    print(f"Substance program:\n{program.text}")

    hidden = goal.hyp_by_name("h6")
    program = inspect_goal(goal, [HypLocation(hidden.fvar_id)])
    print(f"With h6 hidden:\n{program.text}")

    panel = PanelController(LocalTransport(RpcServer({"demo": snapshot})))
    props = PanelProps(
        pos="demo",
        goals=(goal.mvar_id,),
        selected_locations=(GoalsLocation(goal.mvar_id, HypLocation(hidden.fvar_id)),),
        cursor_goal_id=goal.mvar_id,
    )
    asyncio.run(panel.update(props))
    print(f"Panel state: {panel.state.value}")
    print(panel.render())


if __name__ == "__main__":
    run()
