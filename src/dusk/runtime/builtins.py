import sys
from types import MappingProxyType
from typing import Mapping

from ..writer import IndentingWriter
from .objects import (
    NIL,
    Array,
    Builtin,
    BuiltinFunction,
    Error,
    Integer,
    Object,
    String,
    new_error,
)

_READ_FAILURES = (OSError, UnicodeDecodeError, ValueError)


def _check_arity(args: tuple[Object, ...], expected: int) -> Error | None:
    if len(args) != expected:
        return new_error(
            f"wrong number of arguments. got '{len(args)}', expected '{expected}'"
        )
    return None


def _unsupported(function_name: str, arg: Object) -> Error:
    return new_error(f"argument to '{function_name}' not supported, got '{arg.type_name}'")


# Read failures are not reported to the program, only traced.
def _trace_failure(writer: IndentingWriter | None, function_name: str, exc: Exception) -> None:
    if writer is None:
        writer = IndentingWriter()
    writer.debugln(f"[{function_name} failed: {exc}]")


# ===== Sequences =====
# Strings are measured and sliced as UTF-8 bytes.
def length(*args: Object) -> Object:
    if error := _check_arity(args, 1):
        return error

    arg = args[0]
    if isinstance(arg, String):
        return Integer(len(arg.to_bytes()))
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    return _unsupported("len", arg)


def first(*args: Object) -> Object:
    if error := _check_arity(args, 1):
        return error

    arg = args[0]
    if isinstance(arg, String):
        data = arg.to_bytes()
        return String.from_bytes(data[:1]) if data else NIL
    if isinstance(arg, Array):
        return arg.elements[0] if arg.elements else NIL
    return _unsupported("first", arg)


def last(*args: Object) -> Object:
    if error := _check_arity(args, 1):
        return error

    arg = args[0]
    if isinstance(arg, String):
        data = arg.to_bytes()
        return String.from_bytes(data[-1:]) if data else NIL
    if isinstance(arg, Array):
        return arg.elements[-1] if arg.elements else NIL
    return _unsupported("last", arg)


def rest(*args: Object) -> Object:
    if error := _check_arity(args, 1):
        return error

    arg = args[0]
    if isinstance(arg, String):
        data = arg.to_bytes()
        return String.from_bytes(data[1:]) if data else NIL
    if isinstance(arg, Array):
        return Array(arg.elements[1:]) if arg.elements else NIL
    return _unsupported("rest", arg)


def push(*args: Object) -> Object:
    if error := _check_arity(args, 2):
        return error

    container, value = args
    if isinstance(container, String):
        if isinstance(value, String):
            return String.from_bytes(container.to_bytes() + value.to_bytes())
        return new_error(f"cannot push '{value.type_name}' to string")
    if isinstance(container, Array):
        return Array([*container.elements, value])
    return _unsupported("push", container)


# ===== Arrays =====
def alloc(*args: Object) -> Object:
    if error := _check_arity(args, 2):
        return error

    count, fill = args
    if not isinstance(count, Integer):
        return _unsupported("alloc", count)
    if count.value < 0:
        return NIL
    # Every slot refers to the same fill object; arrays are not copied.
    return Array([fill] * count.value)


def set_element(*args: Object) -> Object:
    if error := _check_arity(args, 3):
        return error

    array, index, value = args
    if not isinstance(array, Array):
        return _unsupported("set", array)
    if not isinstance(index, Integer):
        return new_error(f"second argument to 'set' not supported, got '{index.type_name}'")
    if not 0 <= index.value < len(array.elements):
        return new_error(
            f"index out of range. got '{index.value}', length '{len(array.elements)}'"
        )

    array.elements[index.value] = value
    return NIL


# ===== Console I/O =====
def print_values(*args: Object) -> Object:
    for arg in args:
        print(arg, end="", file=sys.stdout)
    return NIL


def println_values(*args: Object) -> Object:
    for arg in args:
        print(arg, file=sys.stdout)
    return NIL


def readln(*args: Object, writer: IndentingWriter | None = None) -> Object:
    if error := _check_arity(args, 0):
        return error

    try:
        line = sys.stdin.readline()
    except _READ_FAILURES as exc:
        _trace_failure(writer, "readln", exc)
        line = ""
    return String(line.removesuffix("\n").removesuffix("\r"))


def read(*args: Object, writer: IndentingWriter | None = None) -> Object:
    if error := _check_arity(args, 0):
        return error

    token: list[str] = []
    pending = ""
    try:
        while True:
            char = pending or sys.stdin.read(1)
            pending = ""
            if char == "\r":
                # "\r\n" ends the line as a single terminator.
                following = sys.stdin.read(1)
                if following in ("", "\n"):
                    break
                if token:
                    break
                pending = following
                continue
            if not char or char == "\n":
                break
            if char.isspace():
                if token:
                    break
                continue
            token.append(char)
    except _READ_FAILURES as exc:
        _trace_failure(writer, "read", exc)
    return String("".join(token))


def readc(*args: Object, writer: IndentingWriter | None = None) -> Object:
    if error := _check_arity(args, 0):
        return error

    try:
        char = sys.stdin.read(1)
    except _READ_FAILURES as exc:
        _trace_failure(writer, "readc", exc)
        char = ""
    return String(char)


def readall(*args: Object, writer: IndentingWriter | None = None) -> Object:
    if error := _check_arity(args, 0):
        return error

    chunks: list[str] = []
    try:
        while chunk := sys.stdin.read(4096):
            chunks.append(chunk)
    except _READ_FAILURES as exc:
        _trace_failure(writer, "readall", exc)
    return String("".join(chunks))


def _registry(
    functions: dict[str, BuiltinFunction], traced: frozenset[str]
) -> Mapping[str, Builtin]:
    return MappingProxyType(
        {name: Builtin(name, fn, traced=name in traced) for name, fn in functions.items()}
    )


BUILTINS: Mapping[str, Builtin] = _registry(
    {
        "len": length,
        "first": first,
        "last": last,
        "rest": rest,
        "push": push,
        "alloc": alloc,
        "set": set_element,
        "println": println_values,
        "print": print_values,
        "readln": readln,
        "read": read,
        "readc": readc,
        "readall": readall,
    },
    traced=frozenset({"readln", "read", "readc", "readall"}),
)


def lookup_builtin(name: str) -> Builtin | None:
    return BUILTINS.get(name)
