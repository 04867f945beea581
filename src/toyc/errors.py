from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LexicalErrorKind(Enum):
    INVALID_CHAR = "invalid_char"
    INVALID_NUMBER = "invalid_number"
    CONSECUTIVE_OPERATORS = "consecutive_operators"
    INVALID_IDENTIFIER = "invalid_identifier"
    UNTERMINATED_STRING = "unterminated_string"
    UNKNOWN_ESCAPE_SEQUENCE = "unknown_escape_sequence"
    LEXEME_TOO_LONG = "lexeme_too_long"


class SyntaxErrorKind(Enum):
    UNEXPECTED_TOKEN = "unexpected_token"
    MISSING_SEMICOLON = "missing_semicolon"
    MISSING_IDENTIFIER = "missing_identifier"
    MISSING_EQUALS = "missing_equals"
    MISSING_LPAREN = "missing_lparen"
    MISSING_RPAREN = "missing_rparen"
    MISSING_LBRACE = "missing_lbrace"
    MISSING_RBRACE = "missing_rbrace"
    MISSING_LBRACK = "missing_lbrack"
    MISSING_RBRACK = "missing_rbrack"
    MISSING_UNTIL = "missing_until"
    INVALID_EXPRESSION = "invalid_expression"
    INVALID_STATEMENT = "invalid_statement"
    INVALID_COMPARISON = "invalid_comparison"
    RESERVED_KEYWORD = "reserved_keyword"


class SemanticErrorKind(Enum):
    UNDECLARED_VARIABLE = "undeclared_variable"
    REDECLARED_VARIABLE = "redeclared_variable"
    TYPE_MISMATCH = "type_mismatch"
    UNINITIALIZED_VARIABLE = "uninitialized_variable"
    INVALID_OPERATION = "invalid_operation"
    UNKNOWN_STATEMENT = "unknown_statement"


_LEXICAL_MESSAGES = {
    LexicalErrorKind.INVALID_CHAR: "Invalid character '{lexeme}'",
    LexicalErrorKind.INVALID_NUMBER: "Invalid number format",
    LexicalErrorKind.CONSECUTIVE_OPERATORS: "Consecutive operators not allowed",
    LexicalErrorKind.INVALID_IDENTIFIER: "Invalid identifier",
    LexicalErrorKind.UNTERMINATED_STRING: "Unterminated string",
    LexicalErrorKind.UNKNOWN_ESCAPE_SEQUENCE: "Unknown escape sequence",
    LexicalErrorKind.LEXEME_TOO_LONG: "String literal too long",
}

_SYNTAX_MESSAGES = {
    SyntaxErrorKind.UNEXPECTED_TOKEN: "Unexpected token '{lexeme}'",
    SyntaxErrorKind.MISSING_SEMICOLON: "Missing semicolon before '{lexeme}'",
    SyntaxErrorKind.MISSING_IDENTIFIER: "Expected identifier before '{lexeme}'",
    SyntaxErrorKind.MISSING_EQUALS: "Expected '=' before '{lexeme}'",
    SyntaxErrorKind.MISSING_LPAREN: "Expected '(' before '{lexeme}'",
    SyntaxErrorKind.MISSING_RPAREN: "Expected ')' before '{lexeme}'",
    SyntaxErrorKind.MISSING_LBRACE: "Expected '{{' before '{lexeme}'",
    SyntaxErrorKind.MISSING_RBRACE: "Expected '}}' before '{lexeme}'",
    SyntaxErrorKind.MISSING_LBRACK: "Expected '[' before '{lexeme}'",
    SyntaxErrorKind.MISSING_RBRACK: "Expected ']' before '{lexeme}'",
    SyntaxErrorKind.MISSING_UNTIL: "Expected 'until' before '{lexeme}'",
    SyntaxErrorKind.INVALID_EXPRESSION: "Invalid expression at '{lexeme}'",
    SyntaxErrorKind.INVALID_STATEMENT: "Invalid statement at '{lexeme}'",
    SyntaxErrorKind.INVALID_COMPARISON: "Invalid comparison at '{lexeme}'",
    SyntaxErrorKind.RESERVED_KEYWORD: "'{lexeme}' is reserved but not supported",
}

_SEMANTIC_MESSAGES = {
    SemanticErrorKind.UNDECLARED_VARIABLE: "Undeclared variable '{name}'",
    SemanticErrorKind.REDECLARED_VARIABLE: "Variable '{name}' already declared in this scope",
    SemanticErrorKind.TYPE_MISMATCH: "Type mismatch involving '{name}'",
    SemanticErrorKind.UNINITIALIZED_VARIABLE: "Variable '{name}' may be used uninitialized",
    SemanticErrorKind.INVALID_OPERATION: "Invalid operation involving '{name}'",
    SemanticErrorKind.UNKNOWN_STATEMENT: "Unknown statement '{name}'",
}


def lexical_message(kind: LexicalErrorKind, lexeme: str) -> str:
    return _LEXICAL_MESSAGES[kind].format(lexeme=lexeme)


class CompileError(Exception):
    """Fatal front-end error, tagged with the source line it was found on."""
    stage = "Compile"

    def __init__(self, message: str, line: int):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self):
        return f"{self.stage} Error at line {self.line}: {self.message}"


class LexicalError(CompileError):
    """A token with a lexical error tag was consumed by the parser."""
    stage = "Lexical"

    def __init__(self, kind: LexicalErrorKind, token):
        super().__init__(lexical_message(kind, token.lexeme), token.line)
        self.kind = kind
        self.token = token


class ParseError(CompileError):
    stage = "Parse"

    def __init__(self, kind: SyntaxErrorKind, token):
        super().__init__(_SYNTAX_MESSAGES[kind].format(lexeme=token.lexeme), token.line)
        self.kind = kind
        self.token = token


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal semantic finding."""
    kind: SemanticErrorKind
    name: str
    line: int
    stage: str = "Semantic"
    detail: Optional[str] = None

    @property
    def message(self) -> str:
        text = _SEMANTIC_MESSAGES[self.kind].format(name=self.name)
        if self.detail:
            text = f"{text} ({self.detail})"
        return text

    def __str__(self):
        return f"{self.stage} Error at line {self.line}: {self.message}"
