"""Application configuration, loaded once at startup and passed to the components that need it."""
import dataclasses
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_ENV_FILE = Path.home() / ".dfx.env"


def env_file_path() -> Path:
    """Per-user credential file. DFX_ENV_FILE overrides ~/.dfx.env."""
    raw = os.getenv("DFX_ENV_FILE", "").strip()
    if raw:
        return Path(raw).expanduser()
    return DEFAULT_ENV_FILE


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Config:
    env_file: Path = DEFAULT_ENV_FILE

    # LLM
    LLM_PROVIDER: str = "groq"  # groq | ollama
    GROQ_API_KEY: str = ""
    GROQ_MODEL: str = "llama-3.1-8b-instant"
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
    OLLAMA_HOST: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "llama3.2"
    MAX_TOKENS: int = 500  # bounded response length
    LLM_TIMEOUT: float = 60.0  # seconds

    @property
    def needs_api_key(self) -> bool:
        return self.LLM_PROVIDER.lower() == "groq"

    @property
    def has_api_key(self) -> bool:
        return bool(self.GROQ_API_KEY.strip())

    def with_api_key(self, api_key: str) -> "Config":
        return dataclasses.replace(self, GROQ_API_KEY=api_key)


def load_config(env_file: Optional[Path] = None) -> Config:
    """Read .env from the cwd and the per-user file, then build a Config from the environment.

    Variables already present in the process environment win over both files.
    """
    path = Path(env_file) if env_file else env_file_path()
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(cwd_env)
    if path.exists():
        load_dotenv(path)

    return Config(
        env_file=path,
        LLM_PROVIDER=os.getenv("DFX_LLM_PROVIDER", "groq").strip() or "groq",
        GROQ_API_KEY=os.getenv("GROQ_API_KEY", "").strip(),
        GROQ_MODEL=os.getenv("GROQ_MODEL", Config.GROQ_MODEL),
        GROQ_BASE_URL=os.getenv("GROQ_BASE_URL", Config.GROQ_BASE_URL).rstrip("/"),
        OLLAMA_HOST=os.getenv("OLLAMA_HOST", Config.OLLAMA_HOST).rstrip("/"),
        OLLAMA_MODEL=os.getenv("OLLAMA_MODEL", Config.OLLAMA_MODEL),
        MAX_TOKENS=_int_env("DFX_MAX_TOKENS", Config.MAX_TOKENS),
        LLM_TIMEOUT=_float_env("DFX_LLM_TIMEOUT", Config.LLM_TIMEOUT),
    )
