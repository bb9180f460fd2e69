"""Trim a diff, ask the configured LLM to explain it, and clean up the reply for a plain terminal."""
import re
from typing import Optional

import httpx

from dfx.config import Config
from dfx.services.diff_trimmer import trim_diff
from dfx.services.llm.base import LLMProvider
from dfx.services.llm.groq_provider import GroqProvider
from dfx.services.llm.ollama_provider import OllamaProvider

_HEADING = re.compile(r"^#{1,6}\s+", re.MULTILINE)
_BULLET = re.compile(r"^\s*[-*+]\s+", re.MULTILINE)


def get_provider(config: Config, transport: Optional[httpx.AsyncBaseTransport] = None) -> LLMProvider:
    if config.LLM_PROVIDER.lower() == "ollama":
        return OllamaProvider(config, transport=transport)
    return GroqProvider(config, transport=transport)


def normalize_response(text: str) -> str:
    """Drop heading markers and bold/italic stars; turn any list bullet into `- `."""
    text = _HEADING.sub("", text or "")
    text = text.replace("**", "").replace("*", "")
    return _BULLET.sub("- ", text)


async def explain_diff(
    config: Config,
    diff_text: str,
    provider: Optional[LLMProvider] = None,
) -> str:
    """Raises CredentialMissing or SummaryServiceError; the caller decides whether to carry on."""
    provider = provider or get_provider(config)
    raw = await provider.explain_diff(trim_diff(diff_text))
    return normalize_response(raw).strip()
