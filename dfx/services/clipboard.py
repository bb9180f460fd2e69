"""Copy text to the system clipboard through the platform's clipboard command."""
import logging
import os
import subprocess
import sys
import tempfile
from abc import ABC, abstractmethod
from typing import List, Optional

from dfx.errors import ClipboardError

logger = logging.getLogger(__name__)


class Clipboard(ABC):
    @abstractmethod
    def copy(self, text: str) -> None:
        """Put text on the clipboard. Raises ClipboardError on failure."""
        pass


class CommandClipboard(Clipboard):
    """Feed a temp file holding the text to the first clipboard command that succeeds.
    The temp file is removed once the command finishes, whether it worked or not."""

    def __init__(self, commands: List[List[str]]):
        self.commands = commands

    def copy(self, text: str) -> None:
        fd, temp_path = tempfile.mkstemp(prefix="diff-", suffix=".txt")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            self._run(temp_path)
        finally:
            try:
                os.remove(temp_path)
            except OSError:
                logger.debug("could not remove %s", temp_path)

    def _run(self, temp_path: str) -> None:
        errors = []
        for argv in self.commands:
            try:
                with open(temp_path, "rb") as stdin:
                    result = subprocess.run(argv, stdin=stdin, capture_output=True)
            except OSError as exc:
                errors.append(f"{argv[0]}: {exc}")
                continue
            if result.returncode == 0:
                logger.debug("copied with %s", argv[0])
                return
            err = (result.stderr or b"").decode(errors="replace").strip()
            errors.append(f"{argv[0]}: {err or f'exit {result.returncode}'}")
        raise ClipboardError("Failed to copy to clipboard: " + "; ".join(errors))


WINDOWS_COMMANDS = [["clip"]]
MACOS_COMMANDS = [["pbcopy"]]
LINUX_COMMANDS = [["xclip", "-selection", "clipboard"], ["xsel", "-i", "-b"]]


def select_clipboard(platform: Optional[str] = None) -> Clipboard:
    platform = platform or sys.platform
    if platform == "win32":
        return CommandClipboard(WINDOWS_COMMANDS)
    if platform == "darwin":
        return CommandClipboard(MACOS_COMMANDS)
    # Linux needs xclip or xsel
    return CommandClipboard(LINUX_COMMANDS)
