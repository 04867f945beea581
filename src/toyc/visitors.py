import io
from typing import Any, Iterable

from toyc.ast_nodes import *
from toyc.errors import lexical_message


class ASTPrinter:
    """
    Tree printer: one line per node, children indented below their parent.
    Supports:
    - source line of each node (show_lines)
    - colored output (use_colors)
    """

    def __init__(self, show_lines=False, use_colors=False, indent_size=2):
        self.show_lines = show_lines
        self.use_colors = use_colors
        self.indent_size = indent_size
        self.output = io.StringIO()

        if use_colors:
            self.colors = {
                'type': '\033[36m',  # cyan - declared types
                'node': '\033[33m',  # yellow - node names
                'value': '\033[32m',  # green - names and literals
                'comment': '\033[90m',  # grey - line numbers
                'reset': '\033[0m'
            }
        else:
            self.colors = {k: '' for k in ['type', 'node', 'value', 'comment', 'reset']}

    def print(self, node: Any) -> str:
        """Render the tree rooted at `node`"""
        self.output = io.StringIO()
        self._visit(node, 0)
        return self.output.getvalue()

    def _write(self, text: str):
        self.output.write(text)

    def _color(self, text: str, color: str) -> str:
        return f"{self.colors[color]}{text}{self.colors['reset']}"

    def _line(self, node: Any, depth: int, label: str, value: str = None, type_info: str = None):
        self._write(" " * (depth * self.indent_size))
        self._write(self._color(label, 'node'))
        if value is not None:
            self._write(": " + self._color(value, 'value'))
        if type_info:
            self._write(" " + self._color(f"({type_info})", 'type'))
        if self.show_lines:
            self._write(" " + self._color(f"[line {node.line}]", 'comment'))
        self._write("\n")

    def _visit(self, node: Any, depth: int):
        method_name = f'_visit_{node.__class__.__name__}'
        visitor = getattr(self, method_name, self._visit_generic)
        visitor(node, depth)

    def _visit_children(self, node: Any, depth: int):
        for child in children(node):
            self._visit(child, depth)

    def _visit_generic(self, node: Any, depth: int):
        self._line(node, depth, node.__class__.__name__)
        self._visit_children(node, depth + 1)

    def _visit_RepeatStmt(self, node: RepeatStmt, depth: int):
        self._line(node, depth, "Repeat-Until")
        self._visit_children(node, depth + 1)

    def _visit_PrintStmt(self, node: PrintStmt, depth: int):
        self._line(node, depth, "Print")
        self._visit_children(node, depth + 1)

    def _visit_FactorialCall(self, node: FactorialCall, depth: int):
        self._line(node, depth, "Factorial")
        self._visit_children(node, depth + 1)

    def _visit_IfStmt(self, node: IfStmt, depth: int):
        self._line(node, depth, "If")
        self._visit_children(node, depth + 1)

    def _visit_WhileStmt(self, node: WhileStmt, depth: int):
        self._line(node, depth, "While")
        self._visit_children(node, depth + 1)

    def _visit_VarDecl(self, node: VarDecl, depth: int):
        self._line(node, depth, "VarDecl", node.name, type_info=repr(node.var_type))

    def _visit_BinOp(self, node: BinOp, depth: int):
        self._line(node, depth, "BinaryOp", node.op)
        self._visit_children(node, depth + 1)

    def _visit_Comparison(self, node: Comparison, depth: int):
        self._line(node, depth, "Comparison", node.op)
        self._visit_children(node, depth + 1)

    def _visit_NumberLiteral(self, node: NumberLiteral, depth: int):
        self._line(node, depth, "Number", node.value)

    def _visit_StringLiteral(self, node: StringLiteral, depth: int):
        self._line(node, depth, "String", repr(node.value))

    def _visit_Ident(self, node: Ident, depth: int):
        self._line(node, depth, "Identifier", node.name)


def print_ast(node: Any, show_lines: bool = False, use_colors: bool = False) -> str:
    """
    Convenience wrapper around ASTPrinter.

    Usage:
        from toyc.visitors import print_ast
        print(print_ast(parse(source)))
    """
    printer = ASTPrinter(show_lines=show_lines, use_colors=use_colors)
    return printer.print(node)


def print_tokens(tokens: Iterable, use_colors: bool = False) -> str:
    """One line per token; error-tagged tokens show their lexical error instead."""
    red = '\033[31m' if use_colors else ''
    reset = '\033[0m' if use_colors else ''
    lines = []
    for token in tokens:
        if token.error:
            lines.append(f"{red}Lexical Error at line {token.line}: "
                         f"{lexical_message(token.error, token.lexeme)}{reset}")
        else:
            lines.append(f"Token: {token.kind} | Lexeme: {token.lexeme!r} | Line: {token.line}")
    return "\n".join(lines) + "\n"
