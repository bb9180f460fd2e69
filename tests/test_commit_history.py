import pytest
from pydantic import ValidationError

from dfx.errors import NoCommits, ShellError
from dfx.services import commit_history
from dfx.services.commit_history import (
    CommitRecord,
    get_commit_diff,
    get_commit_history,
    has_commits,
    parse_commit_log,
)


def test_parse_single_line():
    records = parse_commit_log("abc123|Fix bug|Alice|2024-01-01")
    assert records == [CommitRecord(hash="abc123", subject="Fix bug", author="Alice", date="2024-01-01")]
    assert records[0].model_dump() == {
        "hash": "abc123",
        "subject": "Fix bug",
        "author": "Alice",
        "date": "2024-01-01",
    }


def test_parse_strips_format_quotes():
    raw = '"abc123|Fix bug|Alice|Mon Jan 1 10:00:00 2024 +0000"\n"def456|Add tests|Bob|Tue Jan 2 11:00:00 2024 +0000"'
    records = parse_commit_log(raw)
    assert [r.hash for r in records] == ["abc123", "def456"]
    assert records[1].author == "Bob"
    assert records[1].date == "Tue Jan 2 11:00:00 2024 +0000"


def test_parse_empty_output_means_no_commits():
    records = parse_commit_log("")
    assert len(records) == 1
    assert records[0].hash == ""
    assert not has_commits(records)
    assert not has_commits([])


def test_parse_short_line_fills_missing_fields():
    records = parse_commit_log("abc123|Only subject")
    assert records[0] == CommitRecord(hash="abc123", subject="Only subject", author="", date="")


def test_records_are_immutable():
    record = CommitRecord(hash="abc123", subject="s", author="a", date="d")
    with pytest.raises(ValidationError):
        record.hash = "other"


def test_get_commit_history_runs_git_log(monkeypatch):
    calls = []

    def fake_run_git(args, cwd=None):
        calls.append(list(args))
        if args[0] == "rev-parse":
            return "0123456789abcdef0123456789abcdef01234567"
        return '"abc123|Fix bug|Alice|2024-01-01"'

    monkeypatch.setattr(commit_history, "run_git", fake_run_git)
    records = get_commit_history(5)
    assert calls == [
        ["rev-parse", "--verify", "-q", "HEAD"],
        ["log", '--pretty=format:"%h|%s|%an|%ad"', "-n", "5"],
    ]
    assert records[0].subject == "Fix bug"


def test_get_commit_history_without_commits_in_any_language(monkeypatch):
    calls = []

    def fake_run_git(args, cwd=None):
        calls.append(args[0])
        if args[0] == "rev-parse":
            raise ShellError(1, "")
        raise ShellError(128, "fatal: Ihr aktueller Branch 'main' hat noch keine Commits.")

    monkeypatch.setattr(commit_history, "run_git", fake_run_git)
    with pytest.raises(NoCommits):
        get_commit_history()
    assert calls == ["rev-parse"]


def test_get_commit_history_passes_other_git_errors(monkeypatch):
    def fake_run_git(args, cwd=None):
        if args[0] == "rev-parse":
            return "0123456789abcdef0123456789abcdef01234567"
        raise ShellError(128, "fatal: bad revision")

    monkeypatch.setattr(commit_history, "run_git", fake_run_git)
    with pytest.raises(ShellError):
        get_commit_history()


def test_parse_respects_limit():
    raw = "a1|one|A|d1\nb2|two|B|d2\nc3|three|C|d3"
    assert [r.hash for r in parse_commit_log(raw, 2)] == ["a1", "b2"]
    assert len(parse_commit_log(raw)) == 3
    assert parse_commit_log("", 5)[0].hash == ""


def test_get_commit_diff_refuses_empty_hash(monkeypatch):
    def fake_run_git(args, cwd=None):
        raise AssertionError("git should not run")

    monkeypatch.setattr(commit_history, "run_git", fake_run_git)
    with pytest.raises(NoCommits):
        get_commit_diff("")


def test_history_and_diff_from_real_repo(git_repo):
    records = get_commit_history(10, cwd=git_repo)
    assert [r.subject for r in records] == ["Say world", "Add hello"]
    assert all(r.author == "Alice" for r in records)

    diff = get_commit_diff(records[0].hash, cwd=git_repo)
    assert "diff --git a/hello.txt b/hello.txt" in diff
    assert "+world" in diff


def test_history_limit(git_repo):
    assert len(get_commit_history(1, cwd=git_repo)) == 1


def test_history_of_empty_repo(empty_git_repo):
    with pytest.raises(NoCommits):
        get_commit_history(cwd=empty_git_repo)


def test_history_of_empty_repo_under_german_locale(empty_git_repo, monkeypatch):
    monkeypatch.setenv("LANGUAGE", "de")
    monkeypatch.setenv("LC_ALL", "de_DE.UTF-8")
    with pytest.raises(NoCommits):
        get_commit_history(cwd=empty_git_repo)
