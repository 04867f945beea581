from typing import Optional

from toyc.ast_nodes import *
from toyc.errors import LexicalError, ParseError, SyntaxErrorKind
from toyc.lexer import MAX_LEXEME_LENGTH, TYPE_KEYWORDS, Lexer, Token
from toyc.my_types import type_from_name

# expected token kind -> error reported when it is absent
_MISSING = {
    'SEMICOLON': SyntaxErrorKind.MISSING_SEMICOLON,
    'IDENTIFIER': SyntaxErrorKind.MISSING_IDENTIFIER,
    'EQUALS': SyntaxErrorKind.MISSING_EQUALS,
    'LPAREN': SyntaxErrorKind.MISSING_LPAREN,
    'RPAREN': SyntaxErrorKind.MISSING_RPAREN,
    'LBRACE': SyntaxErrorKind.MISSING_LBRACE,
    'RBRACE': SyntaxErrorKind.MISSING_RBRACE,
    'LBRACK': SyntaxErrorKind.MISSING_LBRACK,
    'RBRACK': SyntaxErrorKind.MISSING_RBRACK,
    'UNTIL': SyntaxErrorKind.MISSING_UNTIL,
}

# lexed, but no grammar rule uses them
RESERVED = ('ELSE', 'FOR', 'BREAK', 'RETURN', 'VOID', 'CONST', 'LBRACK', 'RBRACK')

_STATEMENT_RULES = {
    'IDENTIFIER': '_parse_assignment',
    'LBRACE': '_parse_block',
    'IF': '_parse_if',
    'WHILE': '_parse_while',
    'REPEAT': '_parse_repeat',
    'PRINT': '_parse_print',
    'FACTORIAL': '_parse_factorial',
    'OPERATOR': '_parse_expression_statement',
}


class Parser:
    """Recursive descent parser with one token of lookahead."""

    def __init__(self, max_lexeme_length: int = MAX_LEXEME_LENGTH):
        self.max_lexeme_length = max_lexeme_length
        self.lexer: Optional[Lexer] = None
        self.current: Optional[Token] = None

    def initialize(self, source: str):
        """Reset the cursor to the start of `source` and prime the lookahead."""
        self.lexer = Lexer(source, self.max_lexeme_length)
        self.current = self.lexer.next_token()

    # ==================== Token cursor ====================

    def advance(self) -> Token:
        """Consume the lookahead token and pull the next one."""
        token = self.current
        if token.error:
            raise LexicalError(token.error, token)
        self.current = self.lexer.next_token()
        return token

    def match(self, kind: str) -> bool:
        return self.current.kind == kind

    def expect(self, kind: str) -> Token:
        if not self.match(kind):
            self.error(_MISSING.get(kind, SyntaxErrorKind.UNEXPECTED_TOKEN))
        return self.advance()

    def error(self, kind: SyntaxErrorKind):
        token = self.current
        # a bad token reached by the grammar is reported as what it is
        if token.error:
            raise LexicalError(token.error, token)
        raise ParseError(kind, token)

    # ==================== Program structure ====================

    def parse_program(self) -> Program:
        program = Program([], line=self.current.line)
        while not self.match('EOF'):
            program.stmts.append(self.parse_statement())
        return program

    def parse_statement(self):
        kind = self.current.kind
        if kind in TYPE_KEYWORDS:
            return self._parse_declaration()
        rule = _STATEMENT_RULES.get(kind)
        if rule is not None:
            return getattr(self, rule)()
        if kind in RESERVED:
            self.error(SyntaxErrorKind.RESERVED_KEYWORD)
        self.error(SyntaxErrorKind.UNEXPECTED_TOKEN)

    def _parse_block(self) -> Block:
        start = self.expect('LBRACE')
        block = Block([], line=start.line)
        while not self.match('RBRACE'):
            if self.match('EOF'):
                self.error(SyntaxErrorKind.MISSING_RBRACE)
            block.stmts.append(self.parse_statement())
        self.advance()
        return block

    def _parse_body(self):
        """Body of if/while: a block or exactly one statement."""
        if self.match('LBRACE'):
            return self._parse_block()
        if self.match('EOF') or self.match('RBRACE'):
            self.error(SyntaxErrorKind.INVALID_STATEMENT)
        return self.parse_statement()

    # ==================== Statements ====================

    def _parse_declaration(self) -> VarDecl:
        type_token = self.advance()
        if not self.match('IDENTIFIER'):
            self.error(SyntaxErrorKind.MISSING_IDENTIFIER)
        name = self.advance()
        self.expect('SEMICOLON')
        return VarDecl(name.lexeme, type_from_name(type_token.lexeme), line=name.line)

    def _parse_assignment(self) -> Assign:
        name = self.advance()
        target = Ident(name.lexeme, line=name.line)
        self.expect('EQUALS')
        expr = self.parse_expression()
        self.expect('SEMICOLON')
        return Assign(target, expr, line=name.line)

    def _parse_if(self) -> IfStmt:
        start = self.advance()
        self.expect('LPAREN')
        cond = self.parse_expression()
        self.expect('RPAREN')
        return IfStmt(cond, self._parse_body(), line=start.line)

    def _parse_while(self) -> WhileStmt:
        start = self.advance()
        self.expect('LPAREN')
        cond = self.parse_expression()
        self.expect('RPAREN')
        return WhileStmt(cond, self._parse_body(), line=start.line)

    def _parse_repeat(self) -> RepeatStmt:
        start = self.advance()
        if not self.match('LBRACE'):
            self.error(SyntaxErrorKind.MISSING_LBRACE)
        body = self._parse_block()
        self.expect('UNTIL')
        self.expect('LPAREN')
        cond = self.parse_expression()
        if not isinstance(cond, Condition):
            cond = Condition(cond, line=start.line)
        self.expect('RPAREN')
        self.expect('SEMICOLON')
        return RepeatStmt(body, cond, line=start.line)

    def _parse_print(self) -> PrintStmt:
        start = self.advance()
        expr = self.parse_expression()
        self.expect('SEMICOLON')
        return PrintStmt(expr, line=start.line)

    def _parse_factorial(self) -> FactorialCall:
        start = self.advance()
        self.expect('LPAREN')
        arg = self.parse_expression()
        self.expect('RPAREN')
        self.expect('SEMICOLON')
        return FactorialCall(arg, line=start.line)

    def _parse_expression_statement(self):
        expr = self.parse_expression()
        self.expect('SEMICOLON')
        return expr

    # ==================== Expressions ====================

    def parse_expression(self):
        """Flat left-to-right chain: no operator binds tighter than another."""
        node = self._parse_primary()
        while self.match('OPERATOR') or self.match('COMPARISON'):
            op = self.advance()
            right = self._parse_primary()
            if op.kind == 'COMPARISON':
                node = Condition(Comparison(op.lexeme, node, right, line=op.line), line=op.line)
            else:
                node = BinOp(op.lexeme, node, right, line=op.line)
        return node

    def _parse_primary(self):
        token = self.current
        if token.kind == 'LPAREN':
            self.advance()
            expr = self.parse_expression()
            if not self.match('RPAREN'):
                self.error(SyntaxErrorKind.MISSING_RPAREN)
            self.advance()
            return expr
        if token.kind == 'NUMBER':
            self.advance()
            return NumberLiteral(token.lexeme, line=token.line)
        if token.kind == 'STRING_LITERAL':
            self.advance()
            return StringLiteral(token.lexeme, line=token.line)
        if token.kind == 'IDENTIFIER':
            self.advance()
            return Ident(token.lexeme, line=token.line)
        self.error(SyntaxErrorKind.INVALID_EXPRESSION)


def parse(data: str, max_lexeme_length: int = MAX_LEXEME_LENGTH) -> Program:
    parser = Parser(max_lexeme_length)
    parser.initialize(data)
    return parser.parse_program()
