"""Per-user KEY=value credential file (~/.dfx.env)."""
from pathlib import Path
from typing import Dict, Union

from dotenv import dotenv_values

API_KEY_NAME = "GROQ_API_KEY"


def read_env_file(path: Union[str, Path]) -> Dict[str, str]:
    path = Path(path)
    if not path.exists():
        return {}
    return {k: v for k, v in dotenv_values(path).items() if v is not None}


def save_credential(path: Union[str, Path], key: str, value: str) -> Path:
    """Replace KEY's line (or add it) and keep every other line as it was."""
    path = Path(path).expanduser()
    content = ""
    if path.exists():
        content = path.read_text(encoding="utf-8")
    lines = [line for line in content.split("\n") if not line.startswith(f"{key}=")]
    while lines and lines[-1] == "":
        lines.pop()
    lines.append(f"{key}={value}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    path.chmod(0o600)
    return path
