"""Example pipeline: parse a proof context and lay out its diagram numerically."""

from euclid_diagram import parse_context, parse_substance
from euclid_diagram.layout import LayoutOptions, layout_program
from euclid_diagram.rpc import inspect_goal

TEXT = """
# Circle through A centred at O, with B between A and C on line L
goal circle_chord
A B C O : Point
L : Line
ω : Circle
hABC : Between A B C
hA : OnLine A L
hC : OnLine C L
hO : CenterCircle O ω
hAω : OnCircle A ω
hCω : OnCircle C ω
"""


def main() -> None:
    snapshot = parse_context(TEXT)
    program = inspect_goal(snapshot.goals[0], [])
    print(f"Substance:\n{program.text}")

    result = layout_program(parse_substance(program.text), LayoutOptions(random_seed=123))
    print("Layout")
    print("Success:", result.success)
    print("Max residual:", result.max_residual)
    for name, (x, y) in result.points.items():
        print(f"{name}: ({x:.3f}, {y:.3f})")
    for name, (cx, cy, r) in result.circles.items():
        print(f"{name}: center=({cx:.3f}, {cy:.3f}) r={r:.3f}")


if __name__ == "__main__":
    main()
