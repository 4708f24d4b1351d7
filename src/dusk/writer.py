from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from typing import Iterator, TextIO

DEBUG_ENV_VAR = "DUSK_DEBUG"


def debug_from_env() -> bool:
    return os.environ.get(DEBUG_ENV_VAR, "").strip().lower() in ("1", "true", "yes", "on")


class IndentingWriter:
    """Trace output for the interpreter.

    Messages only go out when debugging is on, and they go to stderr unless a
    stream is given, so traces never interleave with what a program prints.
    """

    def __init__(
        self,
        indent_size: int = 3,
        debug: bool | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._indent_size = indent_size
        self._indents = 0
        self.enabled = debug_from_env() if debug is None else debug
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # sys.stderr is looked up late so pytest's capture sees the output.
        return self._stream if self._stream is not None else sys.stderr

    def debug(self, message: str) -> None:
        if self.enabled:
            self._print_indentation()
            print(message, end="", file=self.stream)

    def debugln(self, message: str) -> None:
        if self.enabled:
            self.debug(message)
            print(file=self.stream)

    def indent(self) -> None:
        if self.enabled:
            self._indents += 1

    def dedent(self) -> None:
        if self.enabled and self._indents > 0:
            self._indents -= 1

    def _print_indentation(self) -> None:
        print(" " * self._indent_size * self._indents, end="", file=self.stream)


@contextmanager
def indented_output(output_writer: IndentingWriter) -> Iterator[None]:
    output_writer.indent()
    try:
        yield
    finally:
        output_writer.dedent()
