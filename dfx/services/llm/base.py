"""Abstract LLM interface for diff explanations."""
from abc import ABC, abstractmethod


class LLMProvider(ABC):
    @abstractmethod
    async def explain_diff(self, diff_text: str) -> str:
        """Return the raw model reply explaining the (already trimmed) diff."""
        pass
