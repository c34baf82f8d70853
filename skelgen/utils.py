"""Shared utility functions for skelgen.

Provides blocking command execution and the Rich console helpers used for
user-facing output.  The change report written while generating goes through
the same shared console unless the caller supplies its own.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from rich.console import Console

console = Console()

# ---------------------------------------------------------------------------
# Command execution
# ---------------------------------------------------------------------------


def run_command(
    cmd: str | list[str],
    cwd: str | Path | None = None,
    timeout: float | None = None,
    input: bytes | None = None,
    env: dict[str, str] | None = None,
) -> tuple[int, bytes, str]:
    """Run a command and wait for it to exit.

    Args:
        cmd: Shell command string or list of arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds, or ``None`` to wait forever.
        input: Bytes fed to the child's stdin.
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  Stdout is returned as raw
        bytes so callers that pipe source text through a tool get it back
        untouched; stderr is decoded and stripped.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    process = subprocess.run(
        cmd,
        shell=isinstance(cmd, str),
        cwd=str(cwd) if cwd else None,
        env=merged_env,
        input=input,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        timeout=timeout,
    )

    stderr_str = (process.stderr or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode, process.stdout or b"", stderr_str)


def format_command(cmd: str | list[str]) -> str:
    """Render *cmd* as a single display string."""
    return cmd if isinstance(cmd, str) else " ".join(cmd)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
