from euclid_diagram.builder import build_diagram_program, initial_state, step
from euclid_diagram.terms import Hypothesis, app, const

a, b, c = const('a'), const('b'), const('c')
L, M = const('L'), const('M')
C, D, E = const('C'), const('D'), const('E')

SCENARIO = [
    app('Between', a, b, c),
    app('OnLine', a, L),
    app('OnLine', b, M),
    app('OnLine', c, L),
    app('OnLine', c, M),
    app('OnCircle', a, C),
    app('OnCircle', a, D),
    app('CenterCircle', b, C),
    app('CenterCircle', c, E),
]

EXPECTED = """AutoLabel All
Point a
Point b
Point c
Between(a, b, c)
Line L
OnLine(a, L)
Line M
OnLine(b, M)
OnLine(c, L)
OnLine(c, M)
Circle C
OnCircle(a, C)
Circle D
OnCircle(a, D)
CenterCircle(b, C)
Circle E
CenterCircle(c, E)
"""


def hyps(*types):
    return [Hypothesis(f'_fvar.{i}', f'h{i}', t) for i, t in enumerate(types)]


def test_end_to_end_scenario_text():
    program = build_diagram_program(hyps(*SCENARIO))

    assert program is not None
    assert program.text == EXPECTED
    assert program.fact_count == 9
    assert [e.key for e in program.entities] == ['a', 'b', 'c', 'L', 'M', 'C', 'D', 'E']
    assert [e.order for e in program.entities] == list(range(8))


def test_building_twice_is_byte_identical():
    first = build_diagram_program(hyps(*SCENARIO))
    second = build_diagram_program(hyps(*SCENARIO))

    assert first.text == second.text


def test_shared_operand_declared_once():
    program = build_diagram_program(hyps(app('OnLine', a, L), app('OnCircle', a, C), app('CenterCircle', a, D)))

    assert program.lines.count('Point a') == 1


def test_duplicate_facts_are_kept():
    program = build_diagram_program(hyps(app('OnLine', a, L), app('OnLine', a, L)))

    assert program.lines == ('AutoLabel All', 'Point a', 'Line L', 'OnLine(a, L)', 'OnLine(a, L)')
    assert program.fact_count == 2


def test_empty_view_is_empty_diagram():
    assert build_diagram_program([]) is None


def test_only_unmatched_hypotheses_is_empty_diagram():
    view = hyps(const('Point'), app('Parallel', L, M), app('OnLine', a))

    assert build_diagram_program(view) is None


def test_unmatched_hypotheses_are_skipped():
    program = build_diagram_program(hyps(const('Point'), app('OnLine', a, L), app('Eq', a, b)))

    assert program.text == 'AutoLabel All\nPoint a\nLine L\nOnLine(a, L)\n'


def test_identically_printed_terms_collapse_to_one_entity():
    # Distinct terms that print the same are treated as one entity.
    view = hyps(app('OnLine', a, L), app('OnLine', b, L))
    program = build_diagram_program(view, stringify=lambda term: 'p' if term.head in ('a', 'b') else term.head)

    assert program.lines == ('AutoLabel All', 'Point p', 'Line L', 'OnLine(p, L)', 'OnLine(p, L)')
    assert program.entities[0].backing == a


def test_compound_operands_print_as_keys():
    view = hyps(app('OnCircle', app('midpoint', a, b), C))
    program = build_diagram_program(view)

    assert 'Point midpoint a b' in program.lines
    assert program.lines[-1] == 'OnCircle(midpoint a b, C)'


def test_step_threads_state_explicitly():
    state = initial_state()
    (h1, h2) = hyps(app('OnLine', a, L), const('Point'))

    after_first = step(state, h1)
    after_second = step(after_first, h2)

    assert state.lines == ('AutoLabel All',)
    assert after_first.lines == ('AutoLabel All', 'Point a', 'Line L', 'OnLine(a, L)')
    assert after_second is after_first
    assert after_first.fact_count == 1


def test_step_leaves_input_state_untouched():
    state = initial_state()
    (h1,) = hyps(app('OnLine', a, L))

    first = step(state, h1)
    second = step(state, h1)

    assert first.lines == second.lines == ('AutoLabel All', 'Point a', 'Line L', 'OnLine(a, L)')
    assert len(state.registry) == 0
    assert first.registry is not second.registry


def test_labels_default_to_keys():
    program = build_diagram_program(hyps(app('OnLine', a, L)))

    assert program.labels() == {'a': 'a', 'L': 'L'}
    assert program.labels(lambda entity: f'${entity.key}$') == {'a': '$a$', 'L': '$L$'}
