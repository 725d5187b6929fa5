import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .lexer import Token, tokenize_line
from .matcher import EntityKind, PredicateShape
from .terms import Goal, Hypothesis, ProofSnapshot, Span, Term

_ERROR_LOC_RE = re.compile(r"\[line (\d+), col (\d+)\]")

DEFAULT_GOAL_ID = 'main'


class Cursor:
    def __init__(self, tokens: List[Token]):
        self.toks = tokens
        self.i = 0

    def peek(self):
        return self.toks[self.i] if self.i < len(self.toks) else None

    def match(self, *types: str):
        if self.i < len(self.toks) and self.toks[self.i][0] in types:
            t = self.toks[self.i]
            self.i += 1
            return t
        return None

    def expect(self, *types: str):
        t = self.peek()
        if t and t[0] in types:
            self.i += 1
            return t
        want = '|'.join(types)
        if t:
            raise SyntaxError(f'[line {t[2]}, col {t[3]}] expected {want}, got {t[0]}')
        raise SyntaxError(f'Unexpected end of line: expected {want}')


def parse_atom(cur: Cursor) -> Term:
    t = cur.peek()
    if t and t[0] == 'LPAREN':
        cur.expect('LPAREN')
        inner = parse_term(cur)
        cur.expect('RPAREN')
        return inner
    tok = cur.expect('ID')
    return Term(tok[1])


def parse_term(cur: Cursor) -> Term:
    start = cur.peek()
    head = parse_atom(cur)
    args: List[Term] = []
    while True:
        t = cur.peek()
        if not t or t[0] not in ('ID', 'LPAREN'):
            break
        args.append(parse_atom(cur))
    if not args:
        return head
    if head.args:
        raise SyntaxError(
            f'[line {start[2]}, col {start[3]}] cannot apply a compound term; only names can be heads'
        )
    return Term(head.head, tuple(args))


def _has_colon(tokens: List[Token]) -> bool:
    return any(tok[0] == 'COLON' for tok in tokens)


@dataclass
class _ContextBuilder:
    goals: List[Goal] = field(default_factory=list)
    current: Optional[Goal] = None
    next_fvar: int = 0

    def goal(self) -> Goal:
        if self.current is None:
            self.current = Goal(DEFAULT_GOAL_ID)
            self.goals.append(self.current)
        return self.current

    def start_goal(self, mvar_id: str, span: Span) -> None:
        if any(goal.mvar_id == mvar_id for goal in self.goals):
            raise SyntaxError(f'[line {span.line}, col {span.col}] duplicate goal {mvar_id!r}')
        self.current = Goal(mvar_id)
        self.goals.append(self.current)

    def fresh_fvar(self) -> str:
        fvar = f'_fvar.{self.next_fvar}'
        self.next_fvar += 1
        return fvar


def _parse_context_line(tokens: List[Token], ctx: _ContextBuilder) -> None:
    cur = Cursor(tokens)
    t0 = cur.peek()

    if t0[0] == 'ID' and t0[1] == 'goal' and not _has_colon(tokens):
        cur.expect('ID')
        name = cur.expect('ID')
        ctx.start_goal(name[1], Span(t0[2], t0[3]))
    elif t0[0] == 'TURNSTILE':
        cur.expect('TURNSTILE')
        goal = ctx.goal()
        if goal.target is not None:
            raise SyntaxError(f'[line {t0[2]}, col {t0[3]}] goal {goal.mvar_id!r} already has a target')
        goal.target = parse_term(cur)
    else:
        names: List[Token] = [cur.expect('ID')]
        while True:
            nxt = cur.match('ID')
            if nxt is None:
                break
            names.append(nxt)
        cur.expect('COLON')
        type_ = parse_term(cur)
        goal = ctx.goal()
        for tok in names:
            goal.hyps.append(
                Hypothesis(ctx.fresh_fvar(), tok[1], type_, Span(tok[2], tok[3]))
            )

    trailing = cur.peek()
    if trailing:
        raise SyntaxError(f"[line {trailing[2]}, col {trailing[3]}] unexpected token {trailing[1]!r}")


def _augment_syntax_error(err: SyntaxError, line_text: str) -> Optional[SyntaxError]:
    message = str(err)
    if not line_text or "\n" in message:
        return None
    match = _ERROR_LOC_RE.search(message)
    if not match:
        return None
    col = max(int(match.group(2)), 1)
    caret_line = " " * (col - 1) + "^"
    snippet = f"    {line_text.rstrip()}\n    {caret_line}"
    return err.__class__(f"{message}\n{snippet}")


def parse_context(text: str, pos: Optional[str] = None) -> ProofSnapshot:
    """Parse a textual proof context into a :class:`ProofSnapshot`.

    Each non-empty line is one of ``goal <id>``, ``⊢ <term>`` or
    ``<name> [<name> ...] : <term>``.  Hypotheses receive fresh ``_fvar.<n>``
    identifiers in file order.
    """

    ctx = _ContextBuilder()
    for i, raw in enumerate(text.splitlines(), start=1):
        try:
            tokens = tokenize_line(raw, i)
            if not tokens:
                continue
            _parse_context_line(tokens, ctx)
        except SyntaxError as err:
            augmented = _augment_syntax_error(err, raw)
            if augmented is None:
                raise
            raise augmented from None
    return ProofSnapshot(goals=ctx.goals, pos=pos)


class SubstanceSyntaxError(SyntaxError):
    """Raised when substance program text does not follow the line grammar."""


@dataclass
class SubstanceProgram:
    auto_label: bool = False
    declarations: List[Tuple[EntityKind, str]] = field(default_factory=list)
    facts: List[Tuple[PredicateShape, Tuple[str, ...]]] = field(default_factory=list)

    def keys(self, kind: EntityKind) -> List[str]:
        return [key for k, key in self.declarations if k is kind]


_AUTO_LABEL_RE = re.compile(r'^AutoLabel\s+All$')
_DECL_RE = re.compile(r'^(Point|Line|Circle)\s+(\S.*)$')
_FACT_RE = re.compile(r'^([A-Za-z]+)\((.*)\)$')


def parse_substance(text: str) -> SubstanceProgram:
    """Read back a substance program produced by :func:`print_program`."""

    program = SubstanceProgram()
    declared = {}
    for i, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        col = raw.index(line[0]) + 1
        if _AUTO_LABEL_RE.match(line):
            program.auto_label = True
            continue
        m = _DECL_RE.match(line)
        if m:
            kind = EntityKind(m.group(1))
            key = m.group(2).rstrip()
            if key in declared:
                raise SubstanceSyntaxError(f'[line {i}, col {col}] {key!r} declared twice')
            declared[key] = kind
            program.declarations.append((kind, key))
            continue
        m = _FACT_RE.match(line)
        if not m:
            raise SubstanceSyntaxError(f'[line {i}, col {col}] unrecognised statement {line!r}')
        shape = PredicateShape.from_symbol(m.group(1))
        if shape is None:
            raise SubstanceSyntaxError(f'[line {i}, col {col}] unknown predicate {m.group(1)!r}')
        keys = tuple(part.strip() for part in m.group(2).split(','))
        if len(keys) != shape.arity:
            raise SubstanceSyntaxError(
                f'[line {i}, col {col}] {shape.symbol} expects {shape.arity} arguments, got {len(keys)}'
            )
        for key, kind in zip(keys, shape.operand_kinds):
            if key not in declared:
                raise SubstanceSyntaxError(f'[line {i}, col {col}] {key!r} used before declaration')
            if declared[key] is not kind:
                raise SubstanceSyntaxError(
                    f'[line {i}, col {col}] {key!r} is a {declared[key].value}, expected {kind.value}'
                )
        program.facts.append((shape, keys))
    return program
