from io import StringIO

import pytest

from dusk.runtime.interpreter import run_for_cli
from .helpers import assert_keywords_in_output


def test_interpret_source_reports_syntax_error_to_stderr() -> None:
    stderr = StringIO()
    state = run_for_cli("fun broken( { return 1; }", stderr=stderr)

    assert state is None
    assert_keywords_in_output(("syntax", "error"), stderr)


def test_interpret_source_reports_semantic_error_to_stderr() -> None:
    stderr = StringIO()
    state = run_for_cli("return 1;", stderr=stderr)

    assert state is None
    assert_keywords_in_output(("syntax", "return"), stderr)


def test_interpret_source_reports_runtime_error_to_stderr() -> None:
    stderr = StringIO()
    state = run_for_cli('var s = push("ab", 3);', stderr=stderr)

    assert state is None
    assert stderr.getvalue() == "Runtime error: cannot push 'INTEGER' to string\n"


def test_interpret_source_returns_state_on_success(capsys: pytest.CaptureFixture[str]) -> None:
    stderr = StringIO()
    state = run_for_cli('println("ok");', stderr=stderr)

    assert state is not None
    assert state.error is None
    assert stderr.getvalue() == ""
    assert capsys.readouterr().out == "ok\n"
