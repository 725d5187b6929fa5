import pytest

from euclid_diagram import parse_context, parse_substance
from euclid_diagram.matcher import EntityKind, PredicateShape
from euclid_diagram.parser import SubstanceSyntaxError
from euclid_diagram.terms import Term, app, const


def test_names_sharing_a_type_become_separate_hypotheses():
    snapshot = parse_context('a b c : Point\nh : Between a b c\n')
    (goal,) = snapshot.goals

    assert goal.mvar_id == 'main'
    assert [h.user_name for h in goal.hyps] == ['a', 'b', 'c', 'h']
    assert [h.fvar_id for h in goal.hyps] == ['_fvar.0', '_fvar.1', '_fvar.2', '_fvar.3']
    assert goal.hyps[0].type == const('Point')
    assert goal.hyps[3].type == app('Between', const('a'), const('b'), const('c'))
    assert goal.hyps[3].span.line == 2


def test_parenthesised_arguments_nest():
    (goal,) = parse_context("h : OnLine (midpoint a b') L").goals

    assert goal.hyps[0].type == app('OnLine', app('midpoint', const('a'), const("b'")), const('L'))


def test_goal_headers_and_targets():
    snapshot = parse_context(
        """
        # two goals
        goal g1
        a : Point
        ⊢ OnLine a L
        goal g2
        b : Point
        """
    )

    assert [g.mvar_id for g in snapshot.goals] == ['g1', 'g2']
    assert snapshot.find_goal('g1').target == app('OnLine', const('a'), const('L'))
    assert snapshot.find_goal('g2').target is None
    assert snapshot.find_goal('g3') is None
    assert snapshot.find_goal('g2').hyps[0].fvar_id == '_fvar.1'


def test_hypothesis_named_goal_is_allowed():
    (goal,) = parse_context('goal : OnLine a L').goals

    assert goal.hyps[0].user_name == 'goal'


def test_later_hypotheses_shadow_earlier_names():
    (goal,) = parse_context('h : OnLine a L\nh : OnLine b L').goals

    assert goal.hyp_by_name('h').fvar_id == '_fvar.1'


def test_duplicate_goal_is_rejected():
    with pytest.raises(SyntaxError) as excinfo:
        parse_context('goal g\ngoal g')

    assert "duplicate goal 'g'" in str(excinfo.value)


def test_error_reports_column_pointer():
    text = 'h1 : Between a b )'
    with pytest.raises(SyntaxError) as excinfo:
        parse_context(text)

    message = str(excinfo.value)
    assert "unexpected token ')'" in message
    lines = message.splitlines()
    assert lines[-2].strip() == text
    assert lines[-1].rstrip().endswith('^')
    assert len(lines[-1].rstrip()) == 4 + 18


@pytest.mark.parametrize('text', ['h : ', ': Point', 'h : (f a) b', 'h : a $ b', 'h : a.'])
def test_malformed_context_lines(text):
    with pytest.raises(SyntaxError):
        parse_context(text)


SUBSTANCE = """AutoLabel All
Point a
Point b
Line L
OnLine(a, L)
Between(a, b, a)
Circle C
CenterCircle(b, C)
"""


def test_substance_round_trip_structure():
    program = parse_substance(SUBSTANCE)

    assert program.auto_label is True
    assert program.declarations == [
        (EntityKind.POINT, 'a'),
        (EntityKind.POINT, 'b'),
        (EntityKind.LINE, 'L'),
        (EntityKind.CIRCLE, 'C'),
    ]
    assert program.facts == [
        (PredicateShape.ON_LINE, ('a', 'L')),
        (PredicateShape.BETWEEN, ('a', 'b', 'a')),
        (PredicateShape.CENTER_CIRCLE, ('b', 'C')),
    ]
    assert program.keys(EntityKind.POINT) == ['a', 'b']


def test_substance_keys_may_contain_spaces():
    program = parse_substance('Point midpoint a b\nLine L\nOnLine(midpoint a b, L)\n')

    assert program.facts == [(PredicateShape.ON_LINE, ('midpoint a b', 'L'))]


@pytest.mark.parametrize(
    'text, message',
    [
        ('Point a\nOnLine(a, L)', "'L' used before declaration"),
        ('Point a\nLine L\nBetween(a, L)', 'Between expects 3 arguments'),
        ('Point a\nPoint b\nOnLine(a, b)', "'b' is a Point, expected Line"),
        ('Point a\nParallel(a, a)', "unknown predicate 'Parallel'"),
        ('Point a\nPoint a', "'a' declared twice"),
        ('Square s', 'unrecognised statement'),
    ],
)
def test_substance_errors(text, message):
    with pytest.raises(SubstanceSyntaxError) as excinfo:
        parse_substance(text)

    assert message in str(excinfo.value)


def test_term_arity():
    assert Term('x').arity == 0
    assert app('f', const('a'), const('b')).arity == 2
