"""Remote storage of a local git repository, backed by the git executable."""

import logging
import os
import subprocess
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git cannot be run or a repository cannot be opened."""
    pass


class RemoteCreateError(GitError):
    """Raised when git refuses to add a remote."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Failed to add remote {name}: {reason}")


def _git(*args: str, cwd: Optional[str] = None) -> Tuple[bool, str, str]:
    """Run a git command, return (success, stdout, stderr)."""
    try:
        result = subprocess.run(
            ["git"] + list(args),
            capture_output=True, text=True, cwd=cwd,
        )
    except FileNotFoundError as e:
        raise GitError("git executable not found") from e
    return result.returncode == 0, result.stdout.strip(), result.stderr.strip()


class GitRemoteStore:
    """Reads and adds remotes of one local repository. Never updates or deletes."""

    def __init__(self, path: str):
        """
        Args:
            path: Top-level directory of the repository
        """
        self.path = path

    @classmethod
    def discover(cls, start: str = ".") -> "GitRemoteStore":
        """
        Open the repository containing `start`, searching parent directories.

        Raises:
            GitError: If `start` is not inside a git work tree
        """
        ok, out, err = _git("rev-parse", "--show-toplevel", cwd=os.path.abspath(start))
        if not ok or not out:
            raise GitError(f"Failed to open repository at {start}: {err or 'not a git repository'}")
        logger.info(f"Using repository {out}")
        return cls(out)

    def list_remote_names(self) -> List[str]:
        """Names of the configured remotes, in git's order."""
        ok, out, err = _git("remote", cwd=self.path)
        if not ok:
            raise GitError(f"Failed to get remotes: {err}")
        return [line for line in out.splitlines() if line]

    def create_remote(self, name: str, url: str):
        """
        Add a new remote.

        Raises:
            RemoteCreateError: If git rejects the name or URL, or the remote exists
        """
        ok, _, err = _git("remote", "add", name, url, cwd=self.path)
        if not ok:
            logger.error(f"git remote add {name} failed: {err}")
            raise RemoteCreateError(name, err or "git remote add failed")
        logger.debug(f"Added remote {name} -> {url}")
