"""Run git as an external process in the current working directory."""
import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union

from dfx.errors import ShellError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def run_git(args: Sequence[str], cwd: Optional[PathLike] = None) -> str:
    """
    Run `git <args>` and return stdout with trailing whitespace stripped.
    Raises ShellError on a non-zero exit or when git cannot be started. No retries.
    """
    argv = ["git", *args]
    logger.debug("running %s", " ".join(argv))
    try:
        result = subprocess.run(
            argv,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        # git missing from PATH, or cwd gone
        logger.warning("could not start git: %s", exc)
        raise ShellError(127, str(exc)) from exc
    if result.returncode != 0:
        logger.debug("git exited %s: %s", result.returncode, (result.stderr or "").strip())
        raise ShellError(result.returncode, result.stderr or "")
    return (result.stdout or "").rstrip()


def is_git_repository(cwd: Optional[PathLike] = None) -> bool:
    """True if cwd is inside a git work tree. Git's error output is captured, never shown."""
    try:
        run_git(["rev-parse", "--is-inside-work-tree"], cwd=cwd)
    except ShellError:
        return False
    return True
