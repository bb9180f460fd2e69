"""Prompt for the Groq API key and store it in the per-user credential file."""
import logging

import typer
from rich.console import Console

from dfx.config import Config
from dfx.services.credentials import API_KEY_NAME, read_env_file, save_credential

logger = logging.getLogger(__name__)


def setup_api_key(config: Config, console: Console) -> Config:
    """Return a Config carrying the new key, or the unchanged one if saving failed."""
    console.print("Setting up Groq API Key", style="cyan")
    if read_env_file(config.env_file).get(API_KEY_NAME):
        console.print(f"An existing key in {config.env_file} will be replaced.", style="yellow")

    api_key = typer.prompt("Enter your Groq API Key", hide_input=True).strip()
    while not api_key:
        console.print("API Key cannot be empty", style="red")
        api_key = typer.prompt("Enter your Groq API Key", hide_input=True).strip()

    try:
        path = save_credential(config.env_file, API_KEY_NAME, api_key)
    except OSError as exc:
        logger.warning("could not write %s: %s", config.env_file, exc)
        console.print(f"Error saving API key: {exc}", style="red")
        return config

    console.print(f"Groq API Key successfully saved to {path}", style="green")
    console.print("Note: The API key is now active for this session.", style="yellow")
    return config.with_api_key(api_key)
