from dataclasses import dataclass

from ..frontend.ast_statements import (
    Assignment,
    Block,
    Declaration,
    ExpressionStatement,
    FunctionDeclaration,
    If,
    Return,
    Statement,
    VariableDeclaration,
    While,
)
from ..frontend.ast_expressions import Expression
from ..frontend.position import Position
from ..writer import indented_output
from .core import Env, ErrorSignal, RuntimeContext
from .expression_evaluator import eval_expr
from .objects import NIL, Error, Function, Object, is_truthy, new_error


class ReturnSignal(Exception):
    def __init__(self, value: Object) -> None:
        super().__init__()
        self.value = value


@dataclass(frozen=True, slots=True, eq=False)
class FunctionValue(Function):
    declaration: FunctionDeclaration
    env: Env

    def call(self, args: list[Object], context: RuntimeContext, position: Position) -> Object:
        declaration = self.declaration

        if len(args) != len(declaration.params):
            return new_error(
                f"wrong number of arguments for {declaration.name}: "
                f"expected {len(declaration.params)}, got {len(args)}",
                position,
            )

        call_env = Env(parent_env=self.env, name=declaration.name)
        for param, value in zip(declaration.params, args, strict=True):
            call_env.define(param, value)

        try:
            with indented_output(context.writer):
                execute_block(declaration.body, call_env, context, own_environment=False)
        except ReturnSignal as returned:
            return returned.value
        except ErrorSignal as failed:
            return failed.error

        return NIL

    def inspect(self) -> str:
        return f"fun {self.declaration.name}({', '.join(self.declaration.params)})"


def execute_declaration(
    declaration: Declaration,
    env: Env,
    context: RuntimeContext,
) -> None:
    if isinstance(declaration, FunctionDeclaration):
        env.define(declaration.name, FunctionValue(declaration=declaration, env=env))
        return

    execute_statement(declaration, env, context)


def execute_block(
    block: Block,
    env: Env,
    context: RuntimeContext,
    own_environment: bool = True,
) -> None:
    block_env = env
    if own_environment:
        block_env = Env(parent_env=env, name="block")

    for declaration in block.declarations:
        execute_declaration(declaration, block_env, context)


def execute_statement(
    statement: Statement,
    env: Env,
    context: RuntimeContext,
) -> None:
    if isinstance(statement, Block):
        execute_block(statement, env, context, own_environment=True)
        return

    if isinstance(statement, VariableDeclaration):
        env.define(statement.name, _eval_or_abort(statement.initializer, env, context))
        return

    if isinstance(statement, Assignment):
        value = _eval_or_abort(statement.value, env, context)
        try:
            env[statement.name] = value
        except KeyError:
            raise ErrorSignal(
                new_error(f"identifier not found: {statement.name}", statement.position)
            ) from None
        return

    if isinstance(statement, ExpressionStatement):
        _eval_or_abort(statement.expression, env, context)
        return

    if isinstance(statement, If):
        if is_truthy(_eval_or_abort(statement.condition, env, context)):
            execute_statement(statement.then_branch, env, context)
        elif statement.else_branch is not None:
            execute_statement(statement.else_branch, env, context)
        return

    if isinstance(statement, While):
        while is_truthy(_eval_or_abort(statement.condition, env, context)):
            execute_statement(statement.body, env, context)
        return

    if isinstance(statement, Return):
        returned: Object = NIL
        if statement.value is not None:
            returned = _eval_or_abort(statement.value, env, context)
        raise ReturnSignal(returned)

    raise TypeError(f"Unsupported statement type: {type(statement).__name__}")


def _eval_or_abort(expr: Expression, env: Env, context: RuntimeContext) -> Object:
    value = eval_expr(expr, env, context)
    if isinstance(value, Error):
        raise ErrorSignal(value)
    return value
