from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, ClassVar, Literal as TypingLiteral

from ..frontend.position import NO_POSITION, Position

if TYPE_CHECKING:
    from ..writer import IndentingWriter
    from .core import RuntimeContext

ObjectType = TypingLiteral[
    "INTEGER",
    "BOOLEAN",
    "STRING",
    "ARRAY",
    "NIL",
    "ERROR",
    "BUILTIN",
    "FUNCTION",
]


class Object:
    """A runtime value of the interpreted language."""

    __slots__ = ()

    type_name: ClassVar[ObjectType]

    def inspect(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.inspect()


@dataclass(frozen=True, slots=True)
class Integer(Object):
    type_name: ClassVar[ObjectType] = "INTEGER"

    value: int

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Boolean(Object):
    type_name: ClassVar[ObjectType] = "BOOLEAN"

    value: bool

    def inspect(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, slots=True)
class String(Object):
    type_name: ClassVar[ObjectType] = "STRING"

    value: str

    def to_bytes(self) -> bytes:
        # surrogateescape keeps partial UTF-8 sequences from slicing intact.
        return self.value.encode("utf-8", "surrogateescape")

    @classmethod
    def from_bytes(cls, data: bytes) -> "String":
        return cls(data.decode("utf-8", "surrogateescape"))

    def inspect(self) -> str:
        return self.to_bytes().decode("utf-8", "replace")


# The only mutable variant: `set` writes into `elements` in place, and every
# holder of the same Array sees the change.
@dataclass(slots=True)
class Array(Object):
    type_name: ClassVar[ObjectType] = "ARRAY"

    elements: list[Object] = field(default_factory=list)

    def inspect(self) -> str:
        return "[" + ", ".join(element.inspect() for element in self.elements) + "]"


class NilObject(Object):
    __slots__ = ()

    type_name: ClassVar[ObjectType] = "NIL"

    def inspect(self) -> str:
        return "nil"

    def __repr__(self) -> str:
        return "NIL"


NIL = NilObject()


@dataclass(frozen=True, slots=True)
class Error(Object):
    type_name: ClassVar[ObjectType] = "ERROR"

    message: str
    position: Position = NO_POSITION

    def inspect(self) -> str:
        if self.position.is_zero():
            return self.message
        return f"{self.position}: {self.message}"


BuiltinFunction = Callable[..., Object]


@dataclass(frozen=True, slots=True)
class Builtin(Object):
    type_name: ClassVar[ObjectType] = "BUILTIN"

    name: str
    fn: BuiltinFunction = field(repr=False)
    # Readers take the caller's trace writer as a `writer` keyword.
    traced: bool = False

    def __call__(self, *args: Object, writer: "IndentingWriter | None" = None) -> Object:
        if self.traced:
            return self.fn(*args, writer=writer)
        return self.fn(*args)

    def inspect(self) -> str:
        return f"<builtin {self.name}>"


class Function(Object):
    """A callable defined in dusk source; see statement_executor.FunctionValue."""

    __slots__ = ()

    type_name: ClassVar[ObjectType] = "FUNCTION"

    def call(
        self, args: list[Object], context: "RuntimeContext", position: Position
    ) -> Object:
        raise NotImplementedError


TRUE = Boolean(True)
FALSE = Boolean(False)


def native_bool(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_truthy(value: Object) -> bool:
    if value is NIL:
        return False
    if isinstance(value, Boolean):
        return value.value
    return True


def new_error(message: str, position: Position = NO_POSITION) -> Error:
    return Error(message=message, position=position)
