"""Commit enumeration: lists the commits of a revision range.

``CommitEnumerator`` is the seam the recorder depends on.
``GitCommitEnumerator`` implements it with the ``git`` command-line client
(``rev-parse`` and ``rev-list``).
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class CommitEnumerationError(RuntimeError):
    """Raised when the commits of a repository cannot be listed."""


class CommitEnumerator(Protocol):
    """Lists commit hashes of a repository."""

    def head(self, repository: Path) -> str:
        """Return the hash of the checked-out commit."""
        ...

    def commits(
        self,
        repository: Path,
        head: str,
        since: str | None = None,
        max_count: int | None = None,
    ) -> list[str]:
        """Return commits reachable from ``head`` but not from ``since``, newest first."""
        ...


class GitCommitEnumerator:
    """``CommitEnumerator`` backed by the ``git`` executable.

    Parameters
    ----------
    git:
        Name or path of the git executable.
    timeout:
        Seconds to wait for a single git invocation.
    """

    def __init__(self, git: str = "git", timeout: float = 60.0) -> None:
        self._git = git
        self._timeout = timeout

    @staticmethod
    def is_available(git: str = "git") -> bool:
        return shutil.which(git) is not None

    def _run(self, repository: Path, *arguments: str) -> str:
        command = [self._git, "-C", str(repository), *arguments]
        logger.debug("Running %s", " ".join(command))
        try:
            completed = subprocess.run(
                command,
                check=True,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.CalledProcessError as exc:
            raise CommitEnumerationError(
                f"git {' '.join(arguments)} failed in {repository}: "
                f"{exc.stderr.strip() or exc.returncode}"
            ) from exc
        except (subprocess.SubprocessError, OSError) as exc:
            raise CommitEnumerationError(
                f"git {' '.join(arguments)} could not run in {repository}: {exc}"
            ) from exc
        return completed.stdout.strip()

    def head(self, repository: Path) -> str:
        return self._run(repository, "rev-parse", "HEAD")

    def commits(
        self,
        repository: Path,
        head: str,
        since: str | None = None,
        max_count: int | None = None,
    ) -> list[str]:
        arguments = ["rev-list"]
        if max_count is not None:
            arguments.append(f"--max-count={max_count}")
        arguments.append(head)
        if since:
            arguments.append(f"^{since}")
        output = self._run(repository, *arguments)
        return output.splitlines() if output else []
