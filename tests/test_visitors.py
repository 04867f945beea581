"""AST and token renderer tests."""

from toyc.lexer import tokenize
from toyc.parser import parse
from toyc.visitors import ASTPrinter, print_ast, print_tokens


def test_print_ast_layout():
    out = print_ast(parse("int x; x = 5; print x;"))
    assert out == (
        "Program\n"
        "  VarDecl: x (int)\n"
        "  Assign\n"
        "    Identifier: x\n"
        "    Number: 5\n"
        "  Print\n"
        "    Identifier: x\n"
    )


def test_print_ast_control_flow():
    out = print_ast(parse('if (a == 1) { print "s"; } repeat { } until (b);'))
    assert out == (
        "Program\n"
        "  If\n"
        "    Condition\n"
        "      Comparison: ==\n"
        "        Identifier: a\n"
        "        Number: 1\n"
        "    Block\n"
        "      Print\n"
        "        String: 's'\n"
        "  Repeat-Until\n"
        "    Block\n"
        "    Condition\n"
        "      Identifier: b\n"
    )


def test_print_ast_with_lines():
    out = print_ast(parse("int x;\nx = 1 + 2;"), show_lines=True)
    lines = out.splitlines()
    assert lines[1] == "  VarDecl: x (int) [line 1]"
    assert lines[3] == "    Identifier: x [line 2]"
    assert lines[4] == "    BinaryOp: + [line 2]"


def test_colored_output_uses_ansi_codes():
    out = ASTPrinter(use_colors=True).print(parse("int x;"))
    assert "\033[33m" in out
    assert out.endswith("\033[0m\n")


def test_print_tokens():
    out = print_tokens(tokenize("x = 1;"))
    assert out.splitlines() == [
        "Token: IDENTIFIER | Lexeme: 'x' | Line: 1",
        "Token: EQUALS | Lexeme: '=' | Line: 1",
        "Token: NUMBER | Lexeme: '1' | Line: 1",
        "Token: SEMICOLON | Lexeme: ';' | Line: 1",
        "Token: EOF | Lexeme: 'EOF' | Line: 1",
    ]


def test_print_tokens_shows_lexical_errors():
    out = print_tokens(tokenize("1++2 $"))
    lines = out.splitlines()
    assert lines[1] == "Lexical Error at line 1: Consecutive operators not allowed"
    assert lines[4] == "Lexical Error at line 1: Invalid character '$'"
