from .builtins import BUILTINS, lookup_builtin
from .core import Env, ProgramState, RuntimeContext
from .interpreter import run, run_for_cli
from .objects import (
    FALSE,
    NIL,
    TRUE,
    Array,
    Boolean,
    Builtin,
    Error,
    Function,
    Integer,
    Object,
    String,
    new_error,
)

__all__ = [
    "BUILTINS",
    "FALSE",
    "NIL",
    "TRUE",
    "Array",
    "Boolean",
    "Builtin",
    "Env",
    "Error",
    "Function",
    "Integer",
    "Object",
    "ProgramState",
    "RuntimeContext",
    "String",
    "lookup_builtin",
    "new_error",
    "run",
    "run_for_cli",
]
