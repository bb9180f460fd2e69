"""dfx command-line entry point."""
import logging
from typing import Optional

import typer
from rich.console import Console

from dfx.commands.git_diff import GitDiffSession
from dfx.commands.setup_key import setup_api_key
from dfx.config import load_config
from dfx.services.clipboard import select_clipboard

__version__ = "1.0.0"

app = typer.Typer(
    name="dfx",
    help="A command-line interface tool for browsing git commits and their diffs",
    add_completion=False,
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dfx {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Welcome to the dfx CLI tool!"""


@app.command("git-diff")
def git_diff(
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Number of recent commits to list"),
    no_summary: bool = typer.Option(False, "--no-summary", help="Skip the AI explanation of the diff"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log git and API calls"),
) -> None:
    """Select a commit and view its diff."""
    _configure_logging(verbose)
    config = load_config()
    session = GitDiffSession(
        config,
        clipboard=select_clipboard(),
        console=Console(emoji=False),
        limit=limit,
        summarize=not no_summary,
    )
    session.run()


@app.command()
def setup(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log file operations"),
) -> None:
    """Set up the Groq API key used for AI explanations."""
    _configure_logging(verbose)
    config = load_config()
    setup_api_key(config, Console(emoji=False))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
