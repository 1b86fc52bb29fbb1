"""Subprocess execution returning Result values.

Both external commands the release workflow depends on (the flutter build
and ``git rev-parse``) go through ``run``. A non-zero exit, a missing
executable and a timeout all come back as a ``ProcessError`` carrying the
diagnostic text.

Usage:
    match run(["git", "-C", str(flutter_dir), "rev-parse", "HEAD"], cwd=flutter_dir):
        case Ok(stdout):
            sha = stdout.strip()
        case Err(error):
            print(error.diagnostic)
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from shipfw.core.result import Err, Ok, Result

__all__ = ["NO_EXIT_STATUS", "ProcessError", "run"]

NO_EXIT_STATUS = -1
"""``returncode`` of a command that never produced an exit status."""


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that could not start, timed out, or exited non-zero."""

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        shown = self.command if len(self.command) <= 3 else (*self.command[:3], "...")
        return f"{' '.join(shown)} failed (exit {self.returncode})"

    @property
    def diagnostic(self) -> str:
        """Best available explanation: stderr, else stdout, else the summary line."""
        return self.stderr.strip() or self.stdout.strip() or str(self)


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` with captured output decoded as UTF-8; Ok carries stdout.

    Undecodable bytes are replaced, never raised.

    ``timeout=None`` waits indefinitely. Builds rely on that and leave
    cancellation to the operator (Ctrl-C).
    """
    argv = tuple(cmd)
    try:
        proc = subprocess.run(
            argv,
            cwd=cwd,
            env=env,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        # e.stdout holds raw bytes, not decoded.
        partial = e.stdout or b""
        if isinstance(partial, bytes):
            partial = partial.decode("utf-8", "replace")
        return Err(
            ProcessError(argv, NO_EXIT_STATUS, partial, f"Command timed out after {timeout}s")
        )
    except OSError as e:
        return Err(ProcessError(argv, NO_EXIT_STATUS, "", str(e)))

    if proc.returncode == 0:
        return Ok(proc.stdout)
    return Err(ProcessError(argv, proc.returncode, proc.stdout, proc.stderr))
