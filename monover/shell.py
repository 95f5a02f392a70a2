"""Shell and git utilities.

Provides a thin wrapper around subprocess for running git inside an
explicitly given repository, plus console output helpers.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import NoReturn


def git(*args: str, cwd: Path, check: bool = True) -> str:
    """Run a git command in ``cwd`` and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "tag", "--list").
        cwd: Directory to run git in. Never inferred from the process cwd.
        check: If True (default), raise on non-zero exit. Set to False
               for commands that may legitimately fail (e.g., tag lookup).

    Returns:
        Stripped stdout from the git command.
    """
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=check
    )
    return result.stdout.strip()


def step(msg: str) -> None:
    """Print a visually distinct step header."""
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def warn(msg: str) -> None:
    """Print a non-fatal warning to stderr."""
    print(f"WARNING: {msg}", file=sys.stderr)


def fatal(msg: str) -> NoReturn:
    """Print an error message and exit with code 1.

    Use for unrecoverable errors that should halt the whole run.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)
