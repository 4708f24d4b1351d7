from dataclasses import dataclass, field

from .ast_expressions import Expression
from .position import NO_POSITION, Position


@dataclass(frozen=True, slots=True)
class Program:
    declarations: list["Declaration"]


@dataclass(frozen=True, slots=True)
class FunctionDeclaration:
    name: str
    params: list[str]
    body: "Block"


@dataclass(frozen=True, slots=True)
class Block:
    declarations: list["Declaration"]


@dataclass(frozen=True, slots=True)
class VariableDeclaration:
    name: str
    initializer: Expression


@dataclass(frozen=True, slots=True)
class Assignment:
    name: str
    value: Expression
    position: Position = field(default=NO_POSITION, compare=False)


# An expression can be used for its side effects even when its value is ignored.
# Examples:
# - println("hello");
# - set(board, 0, "x");
@dataclass(frozen=True, slots=True)
class ExpressionStatement:
    expression: Expression


@dataclass(frozen=True, slots=True)
class If:
    condition: Expression
    then_branch: "Statement"
    else_branch: "Statement | None"


@dataclass(frozen=True, slots=True)
class While:
    condition: Expression
    body: "Statement"


@dataclass(frozen=True, slots=True)
class Return:
    value: Expression | None


Statement = (
    Block
    | VariableDeclaration
    | Assignment
    | ExpressionStatement
    | If
    | While
    | Return
)

Declaration = FunctionDeclaration | Statement
