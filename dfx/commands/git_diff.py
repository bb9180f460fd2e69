"""Interactive commit browser: pick a commit, read its diff and an AI explanation, then copy or save it.

The session is a loop over explicit states:
Idle -> HistoryShown -> DiffShown -> ActionChosen -> (Idle | Terminated)
"""
import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from dfx.commands.setup_key import setup_api_key
from dfx.config import Config
from dfx.errors import DfxError, NoCommits, NotARepository
from dfx.services.clipboard import Clipboard
from dfx.services.commit_history import CommitRecord, get_commit_diff, get_commit_history
from dfx.services.git_shell import is_git_repository
from dfx.services.summarizer import explain_diff

logger = logging.getLogger(__name__)

ACTIONS = {
    "copy": "Copy diff to clipboard",
    "save": "Save diff to a file",
    "another": "Select another commit",
    "exit": "Exit",
}
FOLLOW_UP_ACTIONS = {k: ACTIONS[k] for k in ("another", "exit")}


class State(Enum):
    IDLE = "idle"
    HISTORY_SHOWN = "history_shown"
    DIFF_SHOWN = "diff_shown"
    ACTION_CHOSEN = "action_chosen"
    TERMINATED = "terminated"


class GitDiffSession:
    def __init__(
        self,
        config: Config,
        clipboard: Clipboard,
        console: Optional[Console] = None,
        limit: int = 20,
        summarize: bool = True,
    ):
        self.config = config
        self.clipboard = clipboard
        self.console = console or Console(emoji=False)
        self.limit = limit
        self.summarize = summarize

        self.state = State.IDLE
        self.commits: List[CommitRecord] = []
        self.selected: Optional[CommitRecord] = None
        self.diff = ""
        self.action = ""

    def run(self) -> None:
        if not is_git_repository():
            self._error(NotARepository(), prefix="")
            return
        self._ensure_credential()

        steps = {
            State.IDLE: self._load_history,
            State.HISTORY_SHOWN: self._select_commit,
            State.DIFF_SHOWN: self._choose_action,
            State.ACTION_CHOSEN: self._perform_action,
        }
        while self.state is not State.TERMINATED:
            step = steps[self.state]
            try:
                self.state = step()
            except NoCommits as exc:
                self._error(exc, prefix="", style="yellow")
                self.state = State.TERMINATED
            except DfxError as exc:
                self._error(exc)
                self.state = State.IDLE if self.state is not State.IDLE else State.TERMINATED
        logger.debug("session terminated")

    def _ensure_credential(self) -> None:
        if not self.summarize or not self.config.needs_api_key or self.config.has_api_key:
            return
        self.console.print("Groq API Key is not set up.", style="yellow")
        if typer.confirm("Set it up now?", default=True):
            self.config = setup_api_key(self.config, self.console)
        if not self.config.has_api_key:
            self.console.print("Continuing without AI explanation capability...", style="yellow")

    # Idle -> HistoryShown
    def _load_history(self) -> State:
        self.selected = None
        self.diff = ""
        self.commits = get_commit_history(self.limit)
        self._render_history()
        return State.HISTORY_SHOWN

    def _render_history(self) -> None:
        table = Table(title="Recent commits", show_lines=False)
        table.add_column("#", justify="right")
        table.add_column("Hash", style="green")
        table.add_column("Subject")
        table.add_column("Author", style="yellow")
        table.add_column("Date", style="blue")
        for i, c in enumerate(self.commits, start=1):
            table.add_row(str(i), Text(c.hash), Text(c.subject), Text(c.author), Text(c.date))
        self.console.print(table)

    # HistoryShown -> DiffShown
    def _select_commit(self) -> State:
        index = typer.prompt(
            "Select a commit to view diff",
            type=click.IntRange(1, len(self.commits)),
            default=1,
        )
        self.selected = self.commits[index - 1]
        self.diff = get_commit_diff(self.selected.hash)

        self.console.print("\n--- Commit Diff ---\n", style="cyan")
        self.console.print(self.diff, markup=False, emoji=False, highlight=False, soft_wrap=True)
        if self.summarize:
            self._show_explanation()
        return State.DIFF_SHOWN

    def _show_explanation(self) -> None:
        self.console.print("\n--- AI Explanation of Diff ---\n", style="cyan")
        try:
            explanation = asyncio.run(explain_diff(self.config, self.diff))
        except DfxError as exc:
            self._error(exc, prefix="Error getting AI explanation")
            self.console.print("Continuing without AI explanation...", style="yellow")
            return
        self.console.print(explanation, markup=False, emoji=False, highlight=False, soft_wrap=True)

    # DiffShown -> ActionChosen
    def _choose_action(self) -> State:
        self.action = _prompt_choice("What would you like to do?", ACTIONS, default="another")
        return State.ACTION_CHOSEN

    # ActionChosen -> Idle | Terminated
    def _perform_action(self) -> State:
        if self.action == "exit":
            return State.TERMINATED
        if self.action == "another":
            return State.IDLE

        if self.action == "copy":
            self.clipboard.copy(self.diff)
            self.console.print("Diff copied to clipboard successfully!", style="green")
        elif self.action == "save":
            path = self._save_diff()
            self.console.print(f"Diff saved to {path}", style="green")

        follow_up = _prompt_choice("What would you like to do now?", FOLLOW_UP_ACTIONS, default="exit")
        return State.IDLE if follow_up == "another" else State.TERMINATED

    def _save_diff(self) -> Path:
        default_name = f"{self.selected.hash}.diff" if self.selected else "commit.diff"
        target = Path(typer.prompt("Save diff to", default=default_name)).expanduser()
        try:
            target.write_text(self.diff + "\n", encoding="utf-8")
        except OSError as exc:
            raise DfxError(f"Could not save diff to {target}: {exc}") from exc
        return target

    def _error(self, exc: Exception, prefix: str = "Error", style: str = "red") -> None:
        logger.debug("reported to user: %r", exc)
        message = f"{prefix}: {exc}" if prefix else str(exc)
        self.console.print(message, style=style, markup=False, emoji=False)


def _prompt_choice(message: str, choices: dict, default: str) -> str:
    options = "\n".join(f"  {key:<8} {label}" for key, label in choices.items())
    typer.echo(f"{message}\n{options}")
    return typer.prompt("Action", type=click.Choice(list(choices)), default=default)
