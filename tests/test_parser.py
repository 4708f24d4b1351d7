import pytest
from lark import UnexpectedInput

from dusk.frontend.ast_expressions import ArrayLiteral, Binary, Call, Index, Literal, Unary, Var
from dusk.frontend.ast_statements import (
    Assignment,
    ExpressionStatement,
    FunctionDeclaration,
    If,
    Program,
    Return,
    VariableDeclaration,
    While,
)
from dusk.frontend.parser import parse_program, parse_tree
from dusk.frontend.position import Position


def only_expression(source: str):
    program = parse_program(source)
    [statement] = program.declarations
    assert isinstance(statement, ExpressionStatement)
    return statement.expression


# ===== Program Structure =====
def test_parse_empty_program() -> None:
    program = parse_program("")
    assert isinstance(program, Program)
    assert program.declarations == []


def test_parse_function_declaration() -> None:
    program = parse_program("fun add(a, b) { return a + b; } fun nothing() {}")

    [add, nothing] = program.declarations
    assert isinstance(add, FunctionDeclaration)
    assert add.name == "add"
    assert add.params == ["a", "b"]
    assert isinstance(add.body.declarations[0], Return)
    assert isinstance(nothing, FunctionDeclaration)
    assert nothing.params == []
    assert nothing.body.declarations == []


# ===== Statement Syntax =====
def test_semicolons_are_required_for_simple_statements() -> None:
    source = """
    fun bad() {
      var x = 1
      return x;
    }
    """
    with pytest.raises(UnexpectedInput):
        parse_tree(source)


def test_parse_var_assignment_while_and_if_else_chain() -> None:
    program = parse_program(
        """
        var i = 0;
        while i < 3 { i = i + 1; }
        if i == 1 { println("one"); } else if i == 2 { println("two"); } else { println("many"); }
        """
    )
    [declaration, loop, branch] = program.declarations

    assert isinstance(declaration, VariableDeclaration)
    assert isinstance(loop, While)
    assert isinstance(loop.body.declarations[0], Assignment)
    assert isinstance(branch, If)
    assert isinstance(branch.else_branch, If)
    assert branch.else_branch.else_branch is not None


def test_return_without_value() -> None:
    program = parse_program("fun f() { return; }")
    function_declaration = program.declarations[0]
    assert isinstance(function_declaration, FunctionDeclaration)

    assert function_declaration.body.declarations[0] == Return(value=None)


def test_comments_are_ignored() -> None:
    program = parse_program("// nothing here\nvar x = 1; // trailing\n")

    assert len(program.declarations) == 1


# ===== Expression Parsing =====
def test_precedence_mul_before_add() -> None:
    expression = only_expression("1 + 2 * 3;")

    assert isinstance(expression, Binary)
    assert expression.op == "+"
    assert expression.left == Literal(1)
    assert isinstance(expression.right, Binary)
    assert expression.right.op == "*"


def test_comparison_binds_looser_than_arithmetic() -> None:
    expression = only_expression("len(xs) - 1 >= 0;")

    assert isinstance(expression, Binary)
    assert expression.op == ">="
    assert isinstance(expression.left, Binary)
    assert expression.left.op == "-"


def test_parse_calls_with_and_without_arguments() -> None:
    assert only_expression("readln();") == Call(callee_name="readln", args=[])
    assert only_expression('push(xs, "a");') == Call(
        callee_name="push", args=[Var("xs"), Literal("a")]
    )


def test_parse_array_literal_and_index() -> None:
    expression = only_expression("[1, [2], []][1][0];")

    assert isinstance(expression, Index)
    assert expression.index == Literal(0)
    assert isinstance(expression.target, Index)
    assert expression.target.target == ArrayLiteral(
        [Literal(1), ArrayLiteral([Literal(2)]), ArrayLiteral([])]
    )


def test_parse_literals() -> None:
    assert only_expression('"a\\nb";') == Literal("a\nb")
    assert only_expression("true;") == Literal(True)
    assert only_expression("false;") == Literal(False)
    assert only_expression("nil;") == Literal(None)


def test_parse_unary_operators() -> None:
    expression = only_expression("!-x;")

    assert expression == Unary(Unary(Var("x"), "-"), "!")


def test_keywords_do_not_swallow_longer_names() -> None:
    assert only_expression("variable;") == Var("variable")
    assert only_expression("nil_value;") == Var("nil_value")


# ===== Source Positions =====
def test_expressions_carry_source_positions() -> None:
    program = parse_program("var x = 1;\nvar y = x + missing;")
    declaration = program.declarations[1]
    assert isinstance(declaration, VariableDeclaration)
    initializer = declaration.initializer
    assert isinstance(initializer, Binary)

    assert initializer.position == Position(line=2, column=9)
    assert isinstance(initializer.right, Var)
    assert initializer.right.position == Position(line=2, column=13)
