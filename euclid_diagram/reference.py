"""Static domain schema and style sheet handed to the diagram engine."""

from pathlib import Path
from textwrap import dedent
from typing import Optional, Tuple

DOMAIN = dedent(
"""
type Point
type Line
type Circle

predicate Between(Point a, Point b, Point c)
predicate OnLine(Point a, Line L)
predicate OnCircle(Point a, Circle C)
predicate CenterCircle(Point a, Circle C)
"""
).lstrip()

STYLE = dedent(
"""
canvas {
  width = 400
  height = 400
}

forall Point p {
  vec2 p.x = (?, ?)
  p.icon = Circle {
    center: p.x
    r: 2.5
    fillColor: #000000ff
    strokeWidth: 0
  }
  p.text = Equation {
    string: p.label
    fontSize: "14px"
    center: p.x + (8, 8)
  }
  ensure lessThan(norm(p.x), 150)
}

forall Point p; Point q {
  ensure greaterThan(norm(p.x - q.x), 30)
}

forall Line L {
  vec2 L.p = (?, ?)
  scalar L.theta = ?
  vec2 L.dir = (cos(L.theta), sin(L.theta))
  L.icon = Line {
    start: L.p - 300 * L.dir
    end: L.p + 300 * L.dir
    strokeWidth: 1.5
    strokeColor: #1f4e79ff
  }
  L.text = Equation {
    string: L.label
    fontSize: "14px"
    center: L.p + 120 * L.dir + (10, 0)
  }
}

forall Circle C {
  vec2 C.c = (?, ?)
  scalar C.r = ?
  C.icon = Circle {
    center: C.c
    r: C.r
    fillColor: none()
    strokeWidth: 1.5
    strokeColor: #7b2d26ff
  }
  C.text = Equation {
    string: C.label
    fontSize: "14px"
    center: C.c + (C.r + 10, 0)
  }
  ensure greaterThan(C.r, 25)
  ensure lessThan(C.r, 150)
}

forall Point a; Point b; Point c
where Between(a, b, c) {
  ensure collinearOrdered(a.x, b.x, c.x)
  ensure greaterThan(norm(a.x - b.x), 30)
  ensure greaterThan(norm(b.x - c.x), 30)
}

forall Point a; Line L
where OnLine(a, L) {
  ensure equal(cross2D(L.dir, a.x - L.p), 0)
}

forall Point a; Circle C
where OnCircle(a, C) {
  ensure equal(norm(a.x - C.c), C.r)
}

forall Point a; Circle C
where CenterCircle(a, C) {
  ensure equal(norm(a.x - C.c), 0)
}
"""
).lstrip()


def load_resources(
    domain_path: Optional[str] = None,
    style_path: Optional[str] = None,
) -> Tuple[str, str]:
    """Return ``(domain, style)``, reading overrides from disk when given."""

    domain = Path(domain_path).read_text(encoding="utf-8") if domain_path else DOMAIN
    style = Path(style_path).read_text(encoding="utf-8") if style_path else STYLE
    return domain, style
