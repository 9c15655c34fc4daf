# tasks.py
"""
Developer task runner using Invoke.
Run `inv --list` to see tasks.

Key tasks:
  inv parse --input data/input/<turn>.<clan>.report.docx
  inv batch --indir data/input
  inv text --input data/input/<turn>.<clan>.report.docx
  inv test
  inv clean
"""

from invoke import task
from pathlib import Path
import shutil
import sys


REPO = Path(__file__).parent
INDIR = REPO / "data" / "input"
OUTDIR = REPO / "data" / "output"


def _python():
    """Return the python executable inside the current venv."""
    return sys.executable or "python"


@task(
    help={
        "input": "Path to a .docx or .txt turn report",
        "outdir": "Where to write report .json (default: data/output)",
    }
)
def parse(c, input, outdir=str(OUTDIR)):
    """Parse one turn report into JSON."""
    c.run(
        f'"{_python()}" -m pipeline.runner --input "{input}" --outdir "{outdir}"',
        pty=False,
    )


@task(
    help={
        "indir": "Directory of turn reports (default: data/input)",
        "outdir": "Where to write report .json (default: data/output)",
    }
)
def batch(c, indir=str(INDIR), outdir=str(OUTDIR)):
    """Parse every report in a directory."""
    c.run(
        f'"{_python()}" -m pipeline.runner --indir "{indir}" --outdir "{outdir}"',
        pty=False,
    )


@task(help={"input": "Path to a .docx or .txt turn report"})
def text(c, input):
    """Write the mapping lines of one report next to it as .txt."""
    c.run(f'"{_python()}" tnproc.py docx2text "{input}"', pty=False)


@task
def test(c):
    """Run unit tests with pytest."""
    c.run(f'"{_python()}" -m pytest -q', pty=False)


@task
def clean(c):
    """Delete generated report JSON."""
    if OUTDIR.exists():
        shutil.rmtree(OUTDIR)
        print(f"Removed {OUTDIR}")
    # Recreate empty dir to keep structure predictable
    OUTDIR.mkdir(parents=True, exist_ok=True)
