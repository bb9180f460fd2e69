import shutil
import subprocess

import pytest

DFX_ENV_VARS = (
    "GROQ_API_KEY",
    "GROQ_MODEL",
    "GROQ_BASE_URL",
    "DFX_LLM_PROVIDER",
    "DFX_MAX_TOKENS",
    "DFX_LLM_TIMEOUT",
    "DFX_ENV_FILE",
    "OLLAMA_HOST",
    "OLLAMA_MODEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Unset dfx variables; anything load_dotenv adds during a test is removed afterwards."""
    for name in DFX_ENV_VARS:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    monkeypatch.setenv("DFX_ENV_FILE", str(tmp_path / "user.env"))


def _git(repo, *args):
    subprocess.run(["git", *args], cwd=str(repo), check=True, capture_output=True)


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Alice")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "alice@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Alice")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "alice@example.com")

    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    (repo / "hello.txt").write_text("hello\n", encoding="utf-8")
    _git(repo, "add", "hello.txt")
    _git(repo, "-c", "commit.gpgsign=false", "commit", "-q", "-m", "Add hello")
    (repo / "hello.txt").write_text("hello\nworld\n", encoding="utf-8")
    _git(repo, "-c", "commit.gpgsign=false", "commit", "-q", "-am", "Say world")
    return repo


@pytest.fixture
def empty_git_repo(tmp_path, monkeypatch):
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    monkeypatch.setenv("HOME", str(tmp_path))
    repo = tmp_path / "empty"
    repo.mkdir()
    _git(repo, "init", "-q")
    return repo


@pytest.fixture
def outside_repo(tmp_path, monkeypatch):
    """A directory git will not search above."""
    path = tmp_path / "outside"
    path.mkdir()
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    return path
