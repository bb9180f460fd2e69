"""Ollama LLM provider (local or server). No credential needed."""
import logging
from typing import Optional

import httpx

from dfx.config import Config
from dfx.errors import SummaryServiceError
from dfx.services.llm.base import LLMProvider
from dfx.services.llm.prompts import get_explain_prompt

logger = logging.getLogger(__name__)


class OllamaProvider(LLMProvider):
    def __init__(self, config: Config, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = config.OLLAMA_HOST.rstrip("/")
        self.model = config.OLLAMA_MODEL
        self.max_tokens = config.MAX_TOKENS
        self.timeout = config.LLM_TIMEOUT
        self._transport = transport

    async def explain_diff(self, diff_text: str) -> str:
        return (await self._generate(get_explain_prompt(diff_text))).strip()

    async def _generate(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {"num_predict": self.max_tokens},
        }
        logger.debug("POST %s/api/generate model=%s", self.base_url, self.model)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.post(f"{self.base_url}/api/generate", json=payload)
        except httpx.HTTPError as exc:
            logger.warning("Ollama request failed: %s", exc)
            raise SummaryServiceError(f"Ollama request failed: {exc}") from exc
        if r.status_code != 200:
            raise SummaryServiceError(f"Ollama error: {r.status_code} - {r.text}")
        try:
            data = r.json()
        except ValueError as exc:
            raise SummaryServiceError("Ollama returned a non-JSON body") from exc
        if not isinstance(data, dict):
            raise SummaryServiceError("Ollama returned an unexpected payload")
        text = data.get("response")
        if not isinstance(text, str):
            raise SummaryServiceError("Ollama returned no response text")
        return text
