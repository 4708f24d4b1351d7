from typing import Callable

from ..frontend.ast_expressions import (
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
from ..frontend.position import Position
from .builtins import lookup_builtin
from .core import Env, RuntimeContext
from .objects import (
    FALSE,
    NIL,
    TRUE,
    Array,
    Builtin,
    Error,
    Function,
    Integer,
    Object,
    String,
    is_truthy,
    native_bool,
    new_error,
)


def wrap_int64(value: int) -> int:
    """Reduces an arbitrary int to the signed 64-bit range, two's complement style."""
    return (value + 2**63) % 2**64 - 2**63


def _truncating_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _truncating_mod(a: int, b: int) -> int:
    return a - b * _truncating_div(a, b)


_integer_ops: dict[BinaryOp, Callable[[int, int], Object]] = {
    "+": lambda a, b: Integer(wrap_int64(a + b)),
    "-": lambda a, b: Integer(wrap_int64(a - b)),
    "*": lambda a, b: Integer(wrap_int64(a * b)),
    "/": lambda a, b: Integer(wrap_int64(_truncating_div(a, b))),
    "%": lambda a, b: Integer(wrap_int64(_truncating_mod(a, b))),
    "<": lambda a, b: native_bool(a < b),
    "<=": lambda a, b: native_bool(a <= b),
    ">": lambda a, b: native_bool(a > b),
    ">=": lambda a, b: native_bool(a >= b),
}


def literal_to_object(value: object) -> Object:
    if value is None:
        return NIL
    if isinstance(value, bool):
        return TRUE if value else FALSE
    if isinstance(value, int):
        return Integer(wrap_int64(value))
    if isinstance(value, str):
        return String(value)
    raise TypeError(f"Unsupported literal type: {type(value).__name__}")


def resolve_name(name: str, env: Env, position: Position) -> Object:
    try:
        return env[name]
    except KeyError:
        pass

    builtin = lookup_builtin(name)
    if builtin is None:
        return new_error(f"identifier not found: {name}", position)
    return builtin


def eval_expr(expr: Expression, env: Env, context: RuntimeContext) -> Object:
    if isinstance(expr, Literal):
        return literal_to_object(expr.value)

    if isinstance(expr, Var):
        return resolve_name(expr.name, env, expr.position)

    if isinstance(expr, ArrayLiteral):
        elements: list[Object] = []
        for element_expr in expr.elements:
            element = eval_expr(element_expr, env, context)
            if isinstance(element, Error):
                return element
            elements.append(element)
        return Array(elements)

    if isinstance(expr, Call):
        return _eval_call(expr, env, context)

    if isinstance(expr, Index):
        target = eval_expr(expr.target, env, context)
        if isinstance(target, Error):
            return target
        index = eval_expr(expr.index, env, context)
        if isinstance(index, Error):
            return index
        return _eval_index(target, index, expr.position)

    if isinstance(expr, Unary):
        value = eval_expr(expr.expr, env, context)
        if isinstance(value, Error):
            return value
        result = _eval_unary(expr, value)
        context.writer.debugln(f"[{expr.op}({value.inspect()}) => {result.inspect()}]")
        return result

    if isinstance(expr, Binary):
        left_value = eval_expr(expr.left, env, context)
        if isinstance(left_value, Error):
            return left_value
        right_value = eval_expr(expr.right, env, context)
        if isinstance(right_value, Error):
            return right_value
        result = _eval_binary(expr, left_value, right_value)
        context.writer.debugln(
            f"[({left_value.inspect()}) {expr.op} ({right_value.inspect()}) => {result.inspect()}]"
        )
        return result

    raise TypeError(f"Unsupported expression type: {type(expr).__name__}")


def _eval_call(expr: Call, env: Env, context: RuntimeContext) -> Object:
    callee = resolve_name(expr.callee_name, env, expr.position)
    if isinstance(callee, Error):
        return callee

    args: list[Object] = []
    for arg_expr in expr.args:
        arg = eval_expr(arg_expr, env, context)
        if isinstance(arg, Error):
            return arg
        args.append(arg)

    if isinstance(callee, Builtin):
        result = callee(*args, writer=context.writer)
    elif isinstance(callee, Function):
        result = callee.call(args, context, expr.position)
    else:
        return new_error(f"not a function: {callee.type_name}", expr.position)

    rendered_args = ", ".join(arg.inspect() for arg in args)
    context.writer.debugln(f"[{expr.callee_name}({rendered_args}) => {result.inspect()}]")
    return result


def _eval_index(target: Object, index: Object, position: Position) -> Object:
    if not isinstance(index, Integer):
        return new_error(f"index must be an INTEGER, got {index.type_name}", position)

    if isinstance(target, Array):
        if 0 <= index.value < len(target.elements):
            return target.elements[index.value]
        return NIL

    if isinstance(target, String):
        data = target.to_bytes()
        if 0 <= index.value < len(data):
            return String.from_bytes(data[index.value : index.value + 1])
        return NIL

    return new_error(f"index operator not supported: {target.type_name}", position)


def _eval_unary(expr: Unary, value: Object) -> Object:
    if expr.op == "!":
        return native_bool(not is_truthy(value))

    if isinstance(value, Integer):
        return Integer(wrap_int64(-value.value))
    return new_error(f"unknown operator: -{value.type_name}", expr.position)


def _eval_binary(expr: Binary, left: Object, right: Object) -> Object:
    if expr.op == "==":
        return native_bool(_equal(left, right))
    if expr.op == "!=":
        return native_bool(not _equal(left, right))

    if isinstance(left, Integer) and isinstance(right, Integer):
        if expr.op in ("/", "%") and right.value == 0:
            return new_error("division by zero", expr.position)
        return _integer_ops[expr.op](left.value, right.value)

    if isinstance(left, String) and isinstance(right, String) and expr.op == "+":
        return String.from_bytes(left.to_bytes() + right.to_bytes())

    if left.type_name != right.type_name:
        return new_error(
            f"type mismatch: {left.type_name} {expr.op} {right.type_name}", expr.position
        )
    return new_error(
        f"unknown operator: {left.type_name} {expr.op} {right.type_name}", expr.position
    )


def _equal(left: Object, right: Object) -> bool:
    if left is NIL or right is NIL:
        return left is right
    if isinstance(left, Array) and isinstance(right, Array):
        return left is right
    return left == right
