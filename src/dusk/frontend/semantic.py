from .ast_statements import (
    Block,
    Declaration,
    FunctionDeclaration,
    If,
    Program,
    Return,
    Statement,
    While,
)


class SemanticError(ValueError):
    """Raised when parsed source violates language semantic rules."""


def validate_program(program: Program) -> None:
    for declaration in program.declarations:
        _validate_declaration(declaration, inside_function=False)


def _validate_declaration(declaration: Declaration, inside_function: bool) -> None:
    if isinstance(declaration, FunctionDeclaration):
        _validate_function_declaration(declaration)
        _validate_block(declaration.body, inside_function=True)
        return

    _validate_statement(declaration, inside_function)


def _validate_function_declaration(declaration: FunctionDeclaration) -> None:
    seen: set[str] = set()
    duplicates: set[str] = set()
    for name in declaration.params:
        if name in seen:
            duplicates.add(name)
        seen.add(name)

    if duplicates:
        raise SemanticError(
            f"duplicate parameter names in {declaration.name}: {sorted(duplicates)}"
        )


def _validate_block(block: Block, inside_function: bool) -> None:
    for declaration in block.declarations:
        _validate_declaration(declaration, inside_function)


def _validate_statement(statement: Statement, inside_function: bool) -> None:
    if isinstance(statement, Block):
        _validate_block(statement, inside_function)
        return

    if isinstance(statement, If):
        _validate_statement(statement.then_branch, inside_function)
        if statement.else_branch is not None:
            _validate_statement(statement.else_branch, inside_function)
        return

    if isinstance(statement, While):
        _validate_statement(statement.body, inside_function)
        return

    if isinstance(statement, Return) and not inside_function:
        raise SemanticError("return is only allowed inside functions")
