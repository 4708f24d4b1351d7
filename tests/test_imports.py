import os
import subprocess
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
ENV = {**os.environ, "PYTHONPATH": str(ROOT / "src")}


def test_import_dusk_has_no_stdout_side_effects() -> None:
    proc = subprocess.run(
        [sys.executable, "-c", "import dusk"],
        capture_output=True,
        text=True,
        cwd=ROOT,
        env=ENV,
        check=False,
    )
    assert proc.returncode == 0
    assert proc.stdout == ""


def test_run_program_in_subprocess_reads_and_writes_standard_streams() -> None:
    script = "from dusk import run; run('var all = readall(); print(len(all), \":\", all);')"
    proc = subprocess.run(
        [sys.executable, "-c", script],
        input="ab\ncd",
        capture_output=True,
        text=True,
        cwd=ROOT,
        env=ENV,
        check=False,
    )
    assert proc.returncode == 0
    assert proc.stdout == "5:ab\ncd"
