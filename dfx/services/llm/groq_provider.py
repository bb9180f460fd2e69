"""Groq provider (OpenAI-compatible chat completions API)."""
import logging
from typing import Optional

import httpx

from dfx.config import Config
from dfx.errors import CredentialMissing, SummaryServiceError
from dfx.services.llm.base import LLMProvider
from dfx.services.llm.prompts import get_explain_prompt

logger = logging.getLogger(__name__)


class GroqProvider(LLMProvider):
    def __init__(self, config: Config, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = config.GROQ_API_KEY
        self.model = config.GROQ_MODEL
        self.base_url = config.GROQ_BASE_URL.rstrip("/")
        self.max_tokens = config.MAX_TOKENS
        self.timeout = config.LLM_TIMEOUT
        self._transport = transport

    async def explain_diff(self, diff_text: str) -> str:
        if not self.api_key:
            raise CredentialMissing("GROQ_API_KEY")
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": get_explain_prompt(diff_text)}],
            "max_tokens": self.max_tokens,
        }
        logger.debug("POST %s/chat/completions model=%s", self.base_url, self.model)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
        except httpx.HTTPError as exc:
            logger.warning("Groq request failed: %s", exc)
            raise SummaryServiceError(f"Groq request failed: {exc}") from exc
        if r.status_code != 200:
            raise SummaryServiceError(f"Groq API error: {r.status_code} - {r.text}")
        try:
            data = r.json()
        except ValueError as exc:
            raise SummaryServiceError("Groq API returned a non-JSON body") from exc
        return _extract_text(data)


def _extract_text(data) -> str:
    """Pull choices[0].message.content out of a chat completion payload."""
    choices = data.get("choices") if isinstance(data, dict) else None
    if isinstance(choices, list) and len(choices) > 0:
        c = choices[0]
        if isinstance(c, dict):
            msg = c.get("message") or {}
            content = msg.get("content") if isinstance(msg, dict) else None
            if isinstance(content, str):
                return content
    raise SummaryServiceError("Groq API returned no message content")
