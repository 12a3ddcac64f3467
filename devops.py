"""Development tasks for debris.

Usage: python devops.py <task>
Tasks: fmt, lint, test, clean
"""

import shutil
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent

# Generated by the tools below; never user data
ARTIFACT_DIRS = (".pytest_cache", ".ruff_cache", ".mypy_cache", "build", "dist", "htmlcov")


def _run(commands: list[list[str]]) -> None:
    """Execute commands in order, exiting with the first failing return code."""
    for cmd in commands:
        print(f"$ {' '.join(cmd)}")
        try:
            subprocess.run(cmd, check=True, cwd=ROOT)  # nosec: B603, B607
        except subprocess.CalledProcessError as e:
            print(f"Command failed: {' '.join(e.cmd)}", file=sys.stderr)
            sys.exit(e.returncode)


def format_code() -> None:
    _run([["ruff", "format", "."], ["ruff", "check", "--fix", "."]])


def lint() -> None:
    _run([["ruff", "format", "--check", "."], ["ruff", "check", "."]])


def test() -> None:
    _run([["pytest", "-q"]])


def clean() -> None:
    """Remove bytecode and tool caches from the working tree."""
    removed = 0
    for cache in ROOT.rglob("__pycache__"):
        shutil.rmtree(cache, ignore_errors=True)
        removed += 1
    for name in ARTIFACT_DIRS:
        target = ROOT / name
        if target.is_dir():
            shutil.rmtree(target)
            removed += 1
    print(f"Removed {removed} cache directories.")


TASKS = {"fmt": format_code, "lint": lint, "test": test, "clean": clean}


def main(argv: list[str]) -> int:
    if len(argv) != 1 or argv[0] not in TASKS:
        print(__doc__, file=sys.stderr)
        return 2
    TASKS[argv[0]]()
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
