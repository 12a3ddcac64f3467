"""Subprocess helpers for the external agent CLIs.

Agent CLIs run headless: stdin is closed, output is captured as text and
every call carries a timeout.
"""

import shutil
import subprocess
import time
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of one command.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
        duration: Wall-clock seconds the command ran.
    """

    stdout: str
    stderr: str
    returncode: int
    duration: float = field(default=0.0, compare=False)

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0

    @property
    def error_summary(self) -> str:
        """Last non-empty stderr line, or the exit code if stderr is empty."""
        lines = [line.strip() for line in self.stderr.splitlines() if line.strip()]
        if lines:
            return lines[-1]
        return f"exited with code {self.returncode}"


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
    cwd: str | None = None,
) -> CommandResult:
    """Run a command without a terminal and capture its output.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for command.
        cwd: Working directory for the command. If None, uses current directory.

    Returns:
        CommandResult with output, exit code and duration.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    started = time.monotonic()
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
        cwd=cwd,
        stdin=subprocess.DEVNULL,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
        duration=time.monotonic() - started,
    )


def find_command(name: str) -> str | None:
    """Resolve a command on PATH, returning its absolute path."""
    return shutil.which(name)


def command_exists(name: str) -> bool:
    return find_command(name) is not None
