import re
from typing import List, Tuple

Token = Tuple[str, str, int, int]  # (type, value, line, col)

SYMBOLS = {
    '(': 'LPAREN',
    ')': 'RPAREN',
    ',': 'COMMA',
    ':': 'COLON',
    '⊢': 'TURNSTILE',
}

WS = ' \t\r'

# Identifiers may carry dots (namespaces), primes and subscript-style digits.
_id_re = re.compile(r"[^\W\d][\w'.]*")


def tokenize_line(s: str, line_no: int) -> List[Token]:
    tokens: List[Token] = []
    i = 0
    n = len(s)
    while i < n:
        ch = s[i]
        col = i + 1
        if ch == '#':
            break
        if ch in WS:
            i += 1
            continue
        m = _id_re.match(s, i)
        if m:
            val = m.group(0)
            if val.endswith('.'):
                raise SyntaxError(f'[line {line_no}, col {col}] identifier cannot end with ".": {val!r}')
            tokens.append(('ID', val, line_no, col))
            i = m.end()
            continue
        if ch in SYMBOLS:
            tokens.append((SYMBOLS[ch], ch, line_no, col))
            i += 1
            continue
        raise SyntaxError(f'[line {line_no}, col {col}] unexpected character: {ch!r}')
    return tokens
