"""Development tasks for filekeeper.

Usage: uv run devops.py <task>
Tasks: fmt, lint, test, clean
"""

import subprocess
import sys

SOURCES = ["app", "tests"]

TASKS: dict[str, list[list[str]]] = {
    "fmt": [
        ["ruff", "format", *SOURCES],
        ["ruff", "check", "--fix", *SOURCES],
    ],
    "lint": [
        ["ruff", "format", "--check", *SOURCES],
        ["ruff", "check", *SOURCES],
    ],
    "test": [
        ["uv", "run", "pytest", "-q"],
    ],
    "clean": [
        ["find", ".", "-type", "d", "-name", "__pycache__", "-exec", "rm", "-rf", "{}", "+"],
        ["rm", "-rf", ".pytest_cache", ".ruff_cache", "build", "dist"],
    ],
}


def run_task(name: str) -> None:
    """Run the commands of a task in order, stopping at the first failure."""
    for cmd in TASKS[name]:
        try:
            subprocess.run(cmd, check=True)  # nosec: B603, B607
        except subprocess.CalledProcessError as e:
            print(f"{name}: '{' '.join(e.cmd)}' exited with {e.returncode}", file=sys.stderr)
            sys.exit(e.returncode)


if __name__ == "__main__":
    if len(sys.argv) != 2 or sys.argv[1] not in TASKS:
        print(__doc__, file=sys.stderr)
        sys.exit(2)
    run_task(sys.argv[1])
