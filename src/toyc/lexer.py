from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from ply import lex

from toyc.errors import LexicalErrorKind

MAX_LEXEME_LENGTH = 99

reserved = {
    'if': 'IF',
    'int': 'INT',
    'print': 'PRINT',
    'else': 'ELSE',
    'repeat': 'REPEAT',
    'until': 'UNTIL',
    'for': 'FOR',
    'while': 'WHILE',
    'break': 'BREAK',
    'factorial': 'FACTORIAL',
    'return': 'RETURN',
    'void': 'VOID',
    'float': 'FLOAT',
    'char': 'CHAR',
    'const': 'CONST',
    'string': 'STRING',
}

tokens = [
    'NUMBER', 'IDENTIFIER', 'STRING_LITERAL',
    'OPERATOR', 'COMPARISON', 'EQUALS',
    'SEMICOLON', 'LPAREN', 'RPAREN', 'LBRACE', 'RBRACE', 'LBRACK', 'RBRACK',
    'EOF', 'ERROR',
] + list(reserved.values())

TYPE_KEYWORDS = ('INT', 'FLOAT', 'CHAR', 'STRING')

_ARITHMETIC = '+-*/'
_ESCAPES = {'n': '\n', 't': '\t', '\\': '\\', '"': '"'}


@dataclass(frozen=True)
class Token:
    kind: str
    lexeme: str
    line: int
    error: Optional[LexicalErrorKind] = None

    def __repr__(self):
        if self.error:
            return f"Token({self.kind}, {self.lexeme!r}, line={self.line}, error={self.error.name})"
        return f"Token({self.kind}, {self.lexeme!r}, line={self.line})"


def _unescape(body: str) -> Tuple[str, bool]:
    """Translate escape sequences; report whether an unknown one was seen."""
    out = []
    unknown = False
    i = 0
    while i < len(body):
        c = body[i]
        if c == '\\' and i + 1 < len(body):
            nxt = body[i + 1]
            if nxt in _ESCAPES:
                out.append(_ESCAPES[nxt])
            else:
                unknown = True
                out.append(nxt)
            i += 2
            continue
        if c != '\\':
            out.append(c)
        i += 1
    return ''.join(out), unknown


def _too_long(t) -> bool:
    return len(t.value) > t.lexer.max_lexeme_length


t_ignore = ' \t\r'

t_SEMICOLON = r';'
t_LPAREN = r'\('
t_RPAREN = r'\)'
t_LBRACE = r'\{'
t_RBRACE = r'\}'
t_LBRACK = r'\['
t_RBRACK = r'\]'
t_COMPARISON = r'==|!=|\|\||<=|>=|<|>|!'
t_EQUALS = r'='


def t_newline(t):
    r'\n+'
    t.lexer.lineno += len(t.value)


def t_NUMBER(t):
    r'[0-9]+'
    if _too_long(t):
        t.lex_error = LexicalErrorKind.INVALID_NUMBER
    return t


def t_IDENTIFIER(t):
    r'[A-Za-z_][A-Za-z0-9_]*'
    t.type = reserved.get(t.value, 'IDENTIFIER')
    if _too_long(t):
        t.lex_error = LexicalErrorKind.INVALID_IDENTIFIER
    return t


def t_STRING_LITERAL(t):
    r'"(?:[^"\\]|\\[\s\S])*"'
    t.lexer.lineno += t.value.count('\n')
    t.value, unknown = _unescape(t.value[1:-1])
    if unknown:
        t.lex_error = LexicalErrorKind.UNKNOWN_ESCAPE_SEQUENCE
    elif _too_long(t):
        t.lex_error = LexicalErrorKind.LEXEME_TOO_LONG
    return t


def t_unterminated_string(t):
    r'"(?:[^"\\]|\\[\s\S])*\\?\Z'
    t.lexer.lineno += t.value.count('\n')
    t.value, _ = _unescape(t.value[1:])
    t.type = 'ERROR'
    t.lex_error = LexicalErrorKind.UNTERMINATED_STRING
    return t


def t_OPERATOR(t):
    r'[-+*/]'
    data = t.lexer.lexdata
    pos = t.lexer.lexpos
    # a run like "++" is reported on its first character, which is consumed alone
    if pos < len(data) and data[pos] in _ARITHMETIC:
        t.type = 'ERROR'
        t.lex_error = LexicalErrorKind.CONSECUTIVE_OPERATORS
    return t


def t_error(t):
    t.type = 'ERROR'
    t.value = t.value[0]
    t.lex_error = LexicalErrorKind.INVALID_CHAR
    t.lexer.skip(1)
    return t


_master = lex.lex()
_master.max_lexeme_length = MAX_LEXEME_LENGTH


def _to_token(tok) -> Token:
    return Token(tok.type, tok.value, tok.lineno, getattr(tok, 'lex_error', None))


class Lexer:
    """Token cursor over one source buffer."""

    def __init__(self, data: str = '', max_lexeme_length: int = MAX_LEXEME_LENGTH):
        self._lexer = _master.clone()
        self._lexer.max_lexeme_length = max_lexeme_length
        self.input(data)

    def input(self, data: str):
        self._lexer.input(data)
        self._lexer.lineno = 1

    @property
    def position(self) -> int:
        return self._lexer.lexpos

    @property
    def line(self) -> int:
        return self._lexer.lineno

    def next_token(self) -> Token:
        tok = self._lexer.token()
        if tok is None:
            # ply steps past the end on every call; EOF must not move the cursor
            self._lexer.lexpos = len(self._lexer.lexdata)
            return Token('EOF', 'EOF', self._lexer.lineno)
        return _to_token(tok)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.kind == 'EOF':
                return


def next_token(buffer: str, position: int = 0, line: int = 1,
               max_lexeme_length: int = MAX_LEXEME_LENGTH) -> Tuple[Token, int, int]:
    """Lex one token at `position`; returns the token and the advanced (position, line)."""
    lexer = Lexer(buffer, max_lexeme_length)
    lexer._lexer.lexpos = position
    lexer._lexer.lineno = line
    token = lexer.next_token()
    return token, lexer.position, lexer.line


def tokenize(data: str, max_lexeme_length: int = MAX_LEXEME_LENGTH) -> List[Token]:
    return list(Lexer(data, max_lexeme_length))
