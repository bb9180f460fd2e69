"""Fetch recent commits and a single commit's diff."""
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict

from dfx.errors import NoCommits, ShellError
from dfx.services.git_shell import run_git

logger = logging.getLogger(__name__)

LOG_FORMAT = '--pretty=format:"%h|%s|%an|%ad"'
DEFAULT_LIMIT = 10


class CommitRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    hash: str
    subject: str = ""
    author: str = ""
    date: str = ""


def parse_commit_log(raw_output: str, limit: Optional[int] = None) -> List[CommitRecord]:
    """
    Parse `hash|subject|author|date` lines. Quote characters left by the format
    string are stripped first. Empty output gives one record with an empty hash.
    `limit` keeps at most that many records; `git log -n` normally bounds it already.
    """
    records = []
    for line in raw_output.split("\n"):
        fields = line.replace('"', "").split("|")
        fields += [""] * (4 - len(fields))
        commit_hash, subject, author, date = fields[:4]
        records.append(CommitRecord(hash=commit_hash, subject=subject, author=author, date=date))
    if limit is not None:
        records = records[: max(limit, 1)]
    return records


def has_commits(records: List[CommitRecord]) -> bool:
    return bool(records) and bool(records[0].hash)


def _has_head(cwd: Optional[Union[str, Path]] = None) -> bool:
    # exit status only; git's message text depends on the user's locale
    try:
        run_git(["rev-parse", "--verify", "-q", "HEAD"], cwd=cwd)
    except ShellError:
        return False
    return True


def get_commit_history(limit: int = DEFAULT_LIMIT, cwd: Optional[Union[str, Path]] = None) -> List[CommitRecord]:
    if not _has_head(cwd):
        raise NoCommits()
    output = run_git(["log", LOG_FORMAT, "-n", str(limit)], cwd=cwd)
    records = parse_commit_log(output, limit)
    if not has_commits(records):
        raise NoCommits()
    logger.debug("loaded %d commits", len(records))
    return records


def get_commit_diff(commit_hash: str, cwd: Optional[Union[str, Path]] = None) -> str:
    if not commit_hash:
        raise NoCommits()
    return run_git(["show", commit_hash], cwd=cwd)
