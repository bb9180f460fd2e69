"""Prompt text shared by every provider so Groq and Ollama get the same instructions."""

EXPLAIN_INSTRUCTIONS = """Analyze this git diff concisely:
- What changed?
- Why?
- Impact?

No markdown formatting. Plain text only."""

EXPLAIN_INPUT_TEMPLATE = """Git diff:
```
{diff_text}
```"""


def get_explain_prompt(diff_text: str) -> str:
    """Full prompt (instructions + diff in one block)."""
    return EXPLAIN_INSTRUCTIONS + "\n\n" + EXPLAIN_INPUT_TEMPLATE.format(diff_text=diff_text)
