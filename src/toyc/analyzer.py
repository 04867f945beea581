from functools import partial
from typing import Callable, List, Optional

from toyc.ast_nodes import *
from toyc.errors import Diagnostic, SemanticErrorKind
from toyc.my_types import *
from toyc.scope import ScopeManager

Reporter = Callable[..., bool]


def _name_of(node) -> str:
    """Short source-like label for a node, used in diagnostics."""
    if isinstance(node, Ident):
        return node.name
    if isinstance(node, (NumberLiteral, StringLiteral)):
        return node.value
    if isinstance(node, (BinOp, Comparison)):
        return node.op
    if isinstance(node, Condition):
        return _name_of(node.expr)
    return node.__class__.__name__


class ExpressionAnalyzer:
    """Expression checks - used by SemanticAnalyzer"""

    def __init__(self, scope: ScopeManager, report: Reporter):
        self.scope = scope
        self.report = report

    def check(self, expr) -> bool:
        method_name = f'_check_{expr.__class__.__name__}'
        method = getattr(self, method_name, self._check_generic)
        return method(expr)

    def _check_generic(self, expr) -> bool:
        return self.report(SemanticErrorKind.INVALID_OPERATION, _name_of(expr), getattr(expr, 'line', 0),
                           detail="not an expression")

    def _check_NumberLiteral(self, expr: NumberLiteral) -> bool:
        return True

    def _check_StringLiteral(self, expr: StringLiteral) -> bool:
        return True

    def _check_Ident(self, expr: Ident) -> bool:
        symbol = self.scope.lookup(expr.name)
        if symbol is None:
            return self.report(SemanticErrorKind.UNDECLARED_VARIABLE, expr.name, expr.line)
        if not symbol.initialized:
            return self.report(SemanticErrorKind.UNINITIALIZED_VARIABLE, expr.name, expr.line)
        return True

    def _check_Condition(self, expr: Condition) -> bool:
        return self.check(expr.expr)

    def _check_BinOp(self, expr: BinOp) -> bool:
        return self._check_operands(expr)

    def _check_Comparison(self, expr: Comparison) -> bool:
        return self._check_operands(expr)

    def _check_operands(self, expr) -> bool:
        # both sides are always visited so each reports its own errors
        left_ok = self.check(expr.left)
        right_ok = self.check(expr.right)
        if not (left_ok and right_ok):
            return False

        left_type = self.type_of(expr.left)
        right_type = self.type_of(expr.right)
        if left_type.is_string() and right_type.is_string() and expr.op != '+':
            return self.report(SemanticErrorKind.INVALID_OPERATION, expr.op, expr.line,
                               detail=f"{left_type} {expr.op} {right_type}")
        if not left_type.compatible_with(right_type, expr.op):
            return self.report(SemanticErrorKind.TYPE_MISMATCH, expr.op, expr.line,
                               detail=f"{left_type} {expr.op} {right_type}")
        return True

    def type_of(self, expr) -> Optional[TypeDesc]:
        """Effective type of an expression; None when it names an undeclared variable."""
        if isinstance(expr, Ident):
            symbol = self.scope.lookup(expr.name)
            return symbol.type_ if symbol else None
        if isinstance(expr, StringLiteral):
            return STRING
        if isinstance(expr, BinOp):
            left_type = self.type_of(expr.left)
            right_type = self.type_of(expr.right)
            if left_type is None or right_type is None:
                return None
            if expr.op == '+' and left_type.is_string() and right_type.is_string():
                return STRING
            return NUMERIC
        return NUMERIC


class SemanticAnalyzer:
    """
    Semantic analyzer.
    Every check returns a bool; errors are recorded and the walk carries on,
    so one run reports everything it can find.
    """

    def __init__(self, verbose: bool = True):
        self.verbose = verbose
        self.diagnostics: List[Diagnostic] = []
        self.scope = ScopeManager()
        self.expr_analyzer = ExpressionAnalyzer(self.scope, self._report)
        self._work: List = []

    def analyze(self, program: Program) -> bool:
        """Main entry: True when the whole program passes."""
        self.diagnostics = []
        self.scope = ScopeManager()
        self.expr_analyzer = ExpressionAnalyzer(self.scope, self._report)

        self.scope.push()
        result = self._walk(program.stmts)
        self.scope.pop()
        return result

    def _report(self, kind: SemanticErrorKind, name: str, line: int, detail: Optional[str] = None) -> bool:
        diagnostic = Diagnostic(kind, name, line, detail=detail)
        self.diagnostics.append(diagnostic)
        if self.verbose:
            print(diagnostic)
        return False

    def _walk(self, stmts) -> bool:
        """
        Pre-order statement walk over an explicit work stack.
        Work items are statement nodes or zero-argument checks; nested
        statements are scheduled, never recursed into.
        """
        self._work = []
        self._schedule(*stmts)
        result = True
        while self._work:
            item = self._work.pop()
            ok = item() if callable(item) else self._analyze_stmt(item)
            result = ok and result
        return result

    def _schedule(self, *items):
        """Queue items to run next, in the given order."""
        self._work.extend(reversed(items))

    def _analyze_stmt(self, stmt) -> bool:
        """Statement dispatch"""
        method_name = f'_analyze_{stmt.__class__.__name__}'
        method = getattr(self, method_name, self._analyze_generic)
        return method(stmt)

    def _analyze_generic(self, stmt) -> bool:
        return self._report(SemanticErrorKind.UNKNOWN_STATEMENT, stmt.__class__.__name__, getattr(stmt, 'line', 0))

    def _analyze_VarDecl(self, node: VarDecl) -> bool:
        existing = self.scope.lookup_current(node.name)
        if existing:
            return self._report(SemanticErrorKind.REDECLARED_VARIABLE, node.name, node.line,
                                detail=f"first declared at line {existing.line}")
        self.scope.declare(node.name, node.var_type, node.line)
        return True

    def _analyze_Assign(self, node: Assign) -> bool:
        name = node.target.name
        symbol = self.scope.lookup(name)
        if symbol is None:
            return self._report(SemanticErrorKind.UNDECLARED_VARIABLE, name, node.line)

        expr_ok = self.expr_analyzer.check(node.expr)
        expr_type = self.expr_analyzer.type_of(node.expr)
        if expr_type is not None and not symbol.type_.compatible_with(expr_type):
            return self._report(SemanticErrorKind.TYPE_MISMATCH, name, node.line,
                                detail=f"cannot assign {expr_type} to {symbol.type_}")

        # only an assignment that checks and type-checks initializes
        if expr_ok:
            symbol.initialized = True
        return expr_ok

    def _analyze_Block(self, node: Block) -> bool:
        self.scope.push()
        self._schedule(*node.stmts, self._leave_scope)
        return True

    def _leave_scope(self) -> bool:
        self.scope.pop()
        return True

    def _analyze_IfStmt(self, node: IfStmt) -> bool:
        self._schedule(node.body)
        return self.expr_analyzer.check(node.cond)

    def _analyze_WhileStmt(self, node: WhileStmt) -> bool:
        self._schedule(node.body)
        return self.expr_analyzer.check(node.cond)

    def _analyze_RepeatStmt(self, node: RepeatStmt) -> bool:
        # body before condition, in execution order
        self._schedule(node.body, partial(self.expr_analyzer.check, node.cond))
        return True

    def _analyze_PrintStmt(self, node: PrintStmt) -> bool:
        return self.expr_analyzer.check(node.expr)

    def _analyze_FactorialCall(self, node: FactorialCall) -> bool:
        return self.expr_analyzer.check(node.arg)


def analyze(program: Program, verbose: bool = True) -> bool:
    return SemanticAnalyzer(verbose=verbose).analyze(program)
