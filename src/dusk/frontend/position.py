from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    line: int = 0
    column: int = 0

    def is_zero(self) -> bool:
        return self.line == 0 and self.column == 0

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


# Builtins have no syntactic location, so their errors carry this.
NO_POSITION = Position()
