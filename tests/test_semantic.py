import pytest

from dusk.frontend.parser import parse_and_validate
from dusk.frontend.semantic import SemanticError


# ===== Top-Level Restrictions =====
def test_top_level_return_is_rejected() -> None:
    with pytest.raises(SemanticError, match=r"(?i)(?=.*return)(?=.*function)"):
        parse_and_validate("return 1;")


def test_return_nested_in_top_level_block_is_rejected() -> None:
    with pytest.raises(SemanticError, match=r"(?i)return"):
        parse_and_validate("while true { if true { return; } }")


# ===== Function Declaration Rules =====
def test_duplicate_parameter_names_are_rejected_semantically() -> None:
    source = "fun dup(x, x) { return x; }"
    with pytest.raises(SemanticError, match=r"(?i)(?=.*duplicate)(?=.*parameter)"):
        parse_and_validate(source)


def test_semantic_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        parse_and_validate("return;")


# ===== Nested Declaration Rules =====
def test_return_is_allowed_in_nested_function_context() -> None:
    source = "fun outer() { fun inner(x) { return x; } return 1; }"
    parse_and_validate(source)


def test_return_is_allowed_in_loops_inside_functions() -> None:
    parse_and_validate("fun f() { while true { return 1; } }")
