from dataclasses import dataclass, field
from typing import Any, Literal as TypingLiteral

from .position import NO_POSITION, Position

BinaryOp = TypingLiteral["+", "-", "*", "/", "%", "==", "!=", "<", "<=", ">", ">="]
UnaryOp = TypingLiteral["-", "!"]


class Expression:
    pass


@dataclass(frozen=True, slots=True)
class Call(Expression):
    callee_name: str
    args: list[Expression]
    position: Position = field(default=NO_POSITION, compare=False)


@dataclass(frozen=True, slots=True)
class Var(Expression):
    name: str
    position: Position = field(default=NO_POSITION, compare=False)


# `value` is a plain Python int, str, bool or None.
@dataclass(frozen=True, slots=True)
class Literal(Expression):
    value: Any


@dataclass(frozen=True, slots=True)
class ArrayLiteral(Expression):
    elements: list[Expression]


@dataclass(frozen=True, slots=True)
class Index(Expression):
    target: Expression
    index: Expression
    position: Position = field(default=NO_POSITION, compare=False)


@dataclass(frozen=True, slots=True)
class Binary(Expression):
    left: Expression
    right: Expression
    op: BinaryOp
    position: Position = field(default=NO_POSITION, compare=False)


@dataclass(frozen=True, slots=True)
class Unary(Expression):
    expr: Expression
    op: UnaryOp
    position: Position = field(default=NO_POSITION, compare=False)
