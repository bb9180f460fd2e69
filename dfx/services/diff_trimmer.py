"""Shrink large diffs before sending them to an inference API.

Small diffs pass through untouched. Larger ones keep every file header and
every added/removed line with two lines of context on either side; everything
else is dropped. Lines are deduplicated by exact text, so identical context
lines from different hunks collapse into one.
"""
from typing import List

MIN_TRIM_LINES = 100
CONTEXT_LINES = 2
SEPARATOR = "..."

_HEADER_PREFIXES = ("diff --git", "+++", "---")


def _dedupe(lines: List[str]) -> List[str]:
    return list(dict.fromkeys(lines))


def trim_diff(diff_text: str) -> str:
    lines = diff_text.split("\n")
    if len(lines) < MIN_TRIM_LINES:
        return diff_text

    file_headers: List[str] = []
    important_changes: List[str] = []
    seen = set()

    for i, line in enumerate(lines):
        if line.startswith(_HEADER_PREFIXES):
            file_headers.append(line)
        elif line.startswith(("+", "-")):
            start = max(0, i - CONTEXT_LINES)
            end = min(len(lines), i + CONTEXT_LINES + 1)
            for context_line in lines[start:end]:
                if context_line not in seen:
                    seen.add(context_line)
                    important_changes.append(context_line)

    return "\n".join(_dedupe(file_headers + [SEPARATOR] + important_changes))
