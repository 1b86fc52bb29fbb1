"""Read-only git access to a single checkout.

The release workflow only ever asks git one question: which commit is the
flutter toolchain checkout on. The answer is stored on the release record so
a published artifact can be traced back to the exact engine that built it.

Usage:
    repo = Repository(flutter_dir)
    match repo.head_revision():
        case Ok(sha):
            print(sha)
        case Err(e):
            print(e.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from shipfw.core.result import Err, Ok, Result
from shipfw.platform.process import ProcessError
from shipfw.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git invocation.

    Attributes:
        command: The git subcommand that failed
        message: stderr of the failed command, verbatim
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git checkout at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """True if ``path`` holds a git checkout (``.git`` dir or worktree file)."""
        return (self.path / ".git").exists()

    def head_revision(self) -> Result[str, GitError]:
        """Full SHA of HEAD."""
        result = self._run(["rev-parse", "HEAD"])
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="rev-parse HEAD",
                        message=e.stderr.strip() or "git rev-parse failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                sha = stdout.strip()
                if not sha:
                    return Err(GitError(command="rev-parse HEAD", message="empty revision"))
                return Ok(sha)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(
            ["git", "-C", str(self.path), *args], cwd=self.path, timeout=_GIT_TIMEOUT_SECONDS
        )
