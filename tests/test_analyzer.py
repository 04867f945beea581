"""Semantic analysis tests."""

from toyc.analyzer import SemanticAnalyzer, analyze
from toyc.ast_nodes import NumberLiteral, Program
from toyc.errors import SemanticErrorKind
from toyc.parser import parse


def kinds(diagnostics) -> list:
    return [d.kind for d in diagnostics]


def test_declarations_and_same_type_assignments_pass(check):
    ok, diagnostics = check(
        'int a; float b; char c; string s;'
        'a = 1; b = 2; c = 3; s = "x";'
    )
    assert ok
    assert diagnostics == []


def test_numeric_types_interchange(check):
    ok, diagnostics = check("int a; float b; char c; a = 1; b = a; c = b * a;")
    assert ok
    assert diagnostics == []


def test_declare_assign_print(check):
    ok, diagnostics = check("int x; x = 5; print x;")
    assert ok
    assert diagnostics == []


def test_assignment_to_undeclared_variable(check):
    ok, diagnostics = check("x = 5;")
    assert not ok
    assert kinds(diagnostics) == [SemanticErrorKind.UNDECLARED_VARIABLE]
    assert diagnostics[0].line == 1
    assert diagnostics[0].name == "x"


def test_redeclaration_reports_second_line(check):
    ok, diagnostics = check("int x;\nint x;")
    assert not ok
    assert kinds(diagnostics) == [SemanticErrorKind.REDECLARED_VARIABLE]
    assert diagnostics[0].line == 2


def test_string_concatenation_passes(check):
    ok, diagnostics = check('string s; s = "a" + "b";')
    assert ok
    assert diagnostics == []


def test_string_concatenation_chain_passes(check):
    ok, _ = check('string s; string t; s = "a"; t = s + "b" + s;')
    assert ok


def test_assigning_number_variable_to_string_is_a_mismatch(check):
    ok, diagnostics = check("string s; int n; s = n;")
    assert not ok
    assert SemanticErrorKind.TYPE_MISMATCH in kinds(diagnostics)
    mismatch = [d for d in diagnostics if d.kind is SemanticErrorKind.TYPE_MISMATCH][0]
    assert mismatch.name == "s"


def test_assigning_literal_of_wrong_class(check):
    ok, diagnostics = check('string s; int n; s = 1; n = "one";')
    assert not ok
    assert kinds(diagnostics) == [SemanticErrorKind.TYPE_MISMATCH, SemanticErrorKind.TYPE_MISMATCH]


def test_mixed_operands_are_a_mismatch(check):
    ok, diagnostics = check('int n; string s; n = 1; s = "a"; print n + s;')
    assert not ok
    assert kinds(diagnostics) == [SemanticErrorKind.TYPE_MISMATCH]


def test_strings_only_support_plus(check):
    ok, diagnostics = check('string a; a = "x"; print a - "y"; print a == "x";')
    assert not ok
    assert kinds(diagnostics) == [SemanticErrorKind.INVALID_OPERATION, SemanticErrorKind.INVALID_OPERATION]


def test_numeric_comparison_passes(check):
    ok, _ = check("int a; float b; a = 1; b = 2; print a <= b;")
    assert ok


def test_reading_uninitialized_variable(check):
    ok, diagnostics = check("int x; print x;")
    assert not ok
    assert kinds(diagnostics) == [SemanticErrorKind.UNINITIALIZED_VARIABLE]


def test_reading_undeclared_variable(check):
    ok, diagnostics = check("print y;")
    assert not ok
    assert kinds(diagnostics) == [SemanticErrorKind.UNDECLARED_VARIABLE]


def test_both_operands_are_checked(check):
    ok, diagnostics = check("print a + b;")
    assert not ok
    assert [d.name for d in diagnostics] == ["a", "b"]


def test_analysis_continues_after_errors(check):
    ok, diagnostics = check("print a;\nprint b;\nint c;\nc = 1;")
    assert not ok
    assert [d.line for d in diagnostics] == [1, 2]


def test_undeclared_rhs_does_not_add_a_mismatch(check):
    ok, diagnostics = check("string s; s = missing;")
    assert not ok
    assert kinds(diagnostics) == [SemanticErrorKind.UNDECLARED_VARIABLE]


def test_block_local_is_invisible_after_block(check):
    ok, diagnostics = check("{ int y; y = 1; }\ny = 2;")
    assert not ok
    assert kinds(diagnostics) == [SemanticErrorKind.UNDECLARED_VARIABLE]
    assert diagnostics[0].line == 2


def test_outer_variable_survives_block(check):
    ok, diagnostics = check("int x; x = 1; { print x; x = 2; } print x;")
    assert ok
    assert diagnostics == []


def test_initialization_inside_block_persists(check):
    ok, _ = check("int x; { x = 1; } print x;")
    assert ok


def test_shadowing_in_nested_scope(check):
    ok, diagnostics = check('int x; x = 1; { string x; x = "s"; } x = 2;')
    assert ok
    assert diagnostics == []


def test_same_name_in_inner_scope_is_not_a_redeclaration(check):
    ok, _ = check("int x; { int x; }")
    assert ok


def test_redeclaration_inside_block(check):
    ok, diagnostics = check("{ int x; int x; }")
    assert not ok
    assert kinds(diagnostics) == [SemanticErrorKind.REDECLARED_VARIABLE]


def test_if_with_declared_and_initialized_variable(check):
    ok, diagnostics = check("int x; x = 0; if (x == 1) { x = 2; }")
    assert ok
    assert diagnostics == []


def test_while_with_single_statement_body(check):
    ok, _ = check("int x; x = 1; while (x < 3) x = x + 1;")
    assert ok


def test_repeat_body_is_checked_before_condition(check):
    ok, diagnostics = check("int i; repeat { i = 1; } until (i > 3);")
    assert ok
    assert diagnostics == []


def test_repeat_block_locals_are_gone_in_condition(check):
    ok, diagnostics = check("repeat { int i; i = 1; } until (i > 3);")
    assert not ok
    assert kinds(diagnostics) == [SemanticErrorKind.UNDECLARED_VARIABLE]


def test_factorial_argument_is_checked(check):
    ok, diagnostics = check("factorial(n);")
    assert not ok
    assert kinds(diagnostics) == [SemanticErrorKind.UNDECLARED_VARIABLE]
    ok, _ = check("int n; n = 5; factorial(n);")
    assert ok


def test_unknown_statement_kind():
    analyzer = SemanticAnalyzer(verbose=False)
    ok = analyzer.analyze(Program([NumberLiteral("1", line=4)]))
    assert not ok
    assert kinds(analyzer.diagnostics) == [SemanticErrorKind.UNKNOWN_STATEMENT]
    assert analyzer.diagnostics[0].line == 4


def test_each_run_starts_with_a_fresh_symbol_table():
    analyzer = SemanticAnalyzer(verbose=False)
    assert analyzer.analyze(parse("int x;"))
    assert analyzer.analyze(parse("int x;"))
    assert analyzer.diagnostics == []


def test_diagnostics_are_printed(capsys):
    assert not analyze(parse("x = 5;"))
    out = capsys.readouterr().out
    assert out == "Semantic Error at line 1: Undeclared variable 'x'\n"


def test_quiet_analysis_prints_nothing(capsys):
    assert not analyze(parse("x = 5;"), verbose=False)
    assert capsys.readouterr().out == ""


def test_mismatched_assignment_leaves_target_uninitialized(check):
    ok, diagnostics = check("string s; int n; n = 1; s = n; print s;")
    assert not ok
    assert kinds(diagnostics) == [
        SemanticErrorKind.TYPE_MISMATCH,
        SemanticErrorKind.UNINITIALIZED_VARIABLE,
    ]
    assert diagnostics[1].name == "s"


def test_deeply_nested_blocks(check):
    depth = 400
    ok, diagnostics = check("{" * depth + "}" * depth)
    assert ok
    assert diagnostics == []


def test_deeply_nested_scopes_are_popped(check):
    depth = 300
    source = "int x; x = 1;" + "{ int x; x = 2;" * depth + "}" * depth + "print x; print y;"
    analyzer = SemanticAnalyzer(verbose=False)
    assert not analyzer.analyze(parse(source))
    assert kinds(analyzer.diagnostics) == [SemanticErrorKind.UNDECLARED_VARIABLE]
    assert analyzer.scope.depth == -1
