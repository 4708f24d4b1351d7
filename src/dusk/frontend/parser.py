import ast
from functools import lru_cache
from importlib.resources import files
from typing import Any, cast

from lark import Lark, Token, Transformer, Tree, v_args
from lark.tree import Meta

from .ast_expressions import (
    ArrayLiteral,
    Binary,
    BinaryOp,
    Call,
    Expression,
    Index,
    Literal,
    Unary,
    Var,
)
from .ast_statements import (
    Assignment,
    Block,
    Declaration,
    ExpressionStatement,
    FunctionDeclaration,
    If,
    Program,
    Return,
    Statement,
    VariableDeclaration,
    While,
)
from .position import NO_POSITION, Position
from .semantic import validate_program


def _meta_position(meta: Meta) -> Position:
    if getattr(meta, "empty", True):
        return NO_POSITION
    return Position(line=meta.line, column=meta.column)


def _token_position(token: Token) -> Position:
    if token.line is None or token.column is None:
        return NO_POSITION
    return Position(line=token.line, column=token.column)


class AstTransformer(Transformer[Token, object]):
    def start(self, children: list[object]) -> Program:
        program = children[0]
        assert isinstance(program, Program)
        return program

    def program(self, children: list[object]) -> Program:
        declarations = [self._as_declaration(child) for child in children]
        return Program(declarations=declarations)

    def declaration(self, children: list[object]) -> object:
        [declaration] = children
        return declaration

    def statement(self, children: list[object]) -> object:
        [statement] = children
        return statement

    def parameters(self, children: list[object]) -> list[str]:
        return [str(child) for child in children]

    def fun_declaration(self, children: list[object]) -> FunctionDeclaration:
        if len(children) == 2:
            [name, body] = children
            params: list[str] = []
        else:
            [name, params_value, body] = children
            params = [] if params_value is None else cast(list[str], params_value)
        assert isinstance(name, Token)
        assert isinstance(body, Block)
        return FunctionDeclaration(name=str(name), params=params, body=body)

    def block(self, children: list[object]) -> Block:
        declarations = [self._as_declaration(child) for child in children]
        return Block(declarations=declarations)

    def var_declaration(self, children: list[object]) -> VariableDeclaration:
        [name, initializer] = children
        assert isinstance(name, Token)
        return VariableDeclaration(name=str(name), initializer=self._as_expression(initializer))

    def assign(self, children: list[object]) -> Assignment:
        [name, value] = children
        assert isinstance(name, Token)
        return Assignment(
            name=str(name),
            value=self._as_expression(value),
            position=_token_position(name),
        )

    def expression_statement(self, children: list[object]) -> ExpressionStatement:
        [expr] = children
        return ExpressionStatement(expression=self._as_expression(expr))

    def return_statement(self, children: list[object]) -> Return:
        if not children:
            return Return(value=None)
        [value] = children
        if value is None:
            return Return(value=None)
        return Return(value=self._as_expression(value))

    def if_statement(self, children: list[object]) -> If:
        if len(children) == 2:
            [condition, then_branch] = children
            else_branch = None
        else:
            [condition, then_branch, else_branch] = children
        return If(
            condition=self._as_expression(condition),
            then_branch=self._as_statement(then_branch),
            else_branch=None
            if else_branch is None
            else self._as_statement(else_branch),
        )

    def while_statement(self, children: list[object]) -> While:
        [condition, body] = children
        return While(condition=self._as_expression(condition), body=self._as_statement(body))

    def arguments(self, children: list[object]) -> list[Expression]:
        return [self._as_expression(child) for child in children]

    @v_args(meta=True)
    def eq(self, meta: Meta, children: list[object]) -> Expression:
        return self._binary(meta, children, "==")

    @v_args(meta=True)
    def ne(self, meta: Meta, children: list[object]) -> Expression:
        return self._binary(meta, children, "!=")

    @v_args(meta=True)
    def lt(self, meta: Meta, children: list[object]) -> Expression:
        return self._binary(meta, children, "<")

    @v_args(meta=True)
    def le(self, meta: Meta, children: list[object]) -> Expression:
        return self._binary(meta, children, "<=")

    @v_args(meta=True)
    def gt(self, meta: Meta, children: list[object]) -> Expression:
        return self._binary(meta, children, ">")

    @v_args(meta=True)
    def ge(self, meta: Meta, children: list[object]) -> Expression:
        return self._binary(meta, children, ">=")

    @v_args(meta=True)
    def add(self, meta: Meta, children: list[object]) -> Expression:
        return self._binary(meta, children, "+")

    @v_args(meta=True)
    def sub(self, meta: Meta, children: list[object]) -> Expression:
        return self._binary(meta, children, "-")

    @v_args(meta=True)
    def mul(self, meta: Meta, children: list[object]) -> Expression:
        return self._binary(meta, children, "*")

    @v_args(meta=True)
    def div(self, meta: Meta, children: list[object]) -> Expression:
        return self._binary(meta, children, "/")

    @v_args(meta=True)
    def mod(self, meta: Meta, children: list[object]) -> Expression:
        return self._binary(meta, children, "%")

    def _binary(self, meta: Meta, children: list[object], op: BinaryOp) -> Expression:
        [left, right] = children
        return Binary(
            self._as_expression(left),
            self._as_expression(right),
            op,
            position=_meta_position(meta),
        )

    @v_args(meta=True)
    def neg(self, meta: Meta, children: list[object]) -> Unary:
        [expr] = children
        return Unary(self._as_expression(expr), "-", position=_meta_position(meta))

    @v_args(meta=True)
    def not_(self, meta: Meta, children: list[object]) -> Unary:
        [expr] = children
        return Unary(self._as_expression(expr), "!", position=_meta_position(meta))

    @v_args(meta=True)
    def index(self, meta: Meta, children: list[object]) -> Index:
        [target, index] = children
        return Index(
            self._as_expression(target),
            self._as_expression(index),
            position=_meta_position(meta),
        )

    def call(self, children: list[object]) -> Call:
        if len(children) == 1:
            [name] = children
            args: list[Expression] = []
        else:
            [name, args_value] = children
            args = [] if args_value is None else cast(list[Expression], args_value)
        assert isinstance(name, Token)
        return Call(callee_name=str(name), args=args, position=_token_position(name))

    def array(self, children: list[object]) -> ArrayLiteral:
        elements_value = children[0] if children else None
        elements = [] if elements_value is None else cast(list[Expression], elements_value)
        return ArrayLiteral(elements)

    def var(self, children: list[object]) -> Var:
        [name] = children
        assert isinstance(name, Token)
        return Var(str(name), position=_token_position(name))

    def number(self, children: list[object]) -> Literal:
        [number] = children
        assert isinstance(number, Token)
        return Literal(int(str(number)))

    def string(self, children: list[object]) -> Literal:
        [value] = children
        assert isinstance(value, Token)
        return Literal(ast.literal_eval(str(value)))

    def true(self, children: list[object]) -> Literal:
        return Literal(True)

    def false(self, children: list[object]) -> Literal:
        return Literal(False)

    def nil(self, children: list[object]) -> Literal:
        return Literal(None)

    def _as_expression(self, value: object) -> Expression:
        assert isinstance(value, Expression)
        return value

    def _as_statement(self, value: object) -> Statement:
        assert isinstance(
            value,
            (
                Block,
                VariableDeclaration,
                Assignment,
                ExpressionStatement,
                If,
                While,
                Return,
            ),
        )
        return value

    def _as_declaration(self, value: object) -> Declaration:
        if isinstance(value, FunctionDeclaration):
            return value
        return self._as_statement(value)


def _load_grammar_text() -> str:
    grammar_file = files("dusk.frontend").joinpath("grammar.lark")
    return grammar_file.read_text(encoding="utf-8")


@lru_cache(maxsize=1)
def get_parser() -> Lark:
    grammar = _load_grammar_text()
    return Lark(grammar, start="start", parser="lalr", propagate_positions=True)


def parse_tree(source: str) -> Tree[Token]:
    parser: Any = get_parser()
    tree = parser.parse(source)
    return cast(Tree[Token], tree)


def parse_program(source: str) -> Program:
    parsed = parse_tree(source)
    program = AstTransformer().transform(parsed)
    assert isinstance(program, Program)
    return program


def parse_and_validate(source: str) -> Program:
    program = parse_program(source)
    validate_program(program)
    return program
